"""
Request context middleware.

Assigns each request an X-Request-ID and binds the levels it asks about
(the `{level}` path segment and the `current_level` query parameter) so
every log line written while serving it carries them. Requests slower than
the configured threshold are logged with those levels, since cost grows
with the level queried.
"""

import re
import time
import uuid
from typing import Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.logging_config import (
    bind_journey_context,
    get_logger,
    journey_context,
    journey_context_var,
    request_id_var,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_LEVEL_IN_PATH = re.compile(r"/(?:levels|xp|realms/for-level)/([0-9]+)(?:/|$)")


def levels_from_request(request: Request) -> Dict[str, int]:
    """Levels named by a journey request; malformed values are left to validation."""
    levels: Dict[str, int] = {}
    match = _LEVEL_IN_PATH.search(request.url.path)
    if match:
        levels["journey_level"] = int(match.group(1))
    current = request.query_params.get("current_level", "")
    if current.isascii() and current.isdigit():
        levels["current_level"] = int(current)
    return levels


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind request id and journey levels for the lifetime of a request."""

    def __init__(self, app: ASGIApp, slow_request_ms: float = 250):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        id_token = request_id_var.set(request_id)
        level_token = bind_journey_context(**levels_from_request(request))

        try:
            start = time.perf_counter()
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            response.headers[REQUEST_ID_HEADER] = request_id

            if duration_ms >= self.slow_request_ms:
                logger.warning(
                    "Slow request",
                    extra={
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "duration_ms": round(duration_ms, 1),
                        **journey_context(),
                    },
                )
            return response
        finally:
            journey_context_var.reset(level_token)
            request_id_var.reset(id_token)
