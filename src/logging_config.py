"""
Logging setup for the Focus Journey service.

Every record is stamped with the request it belongs to and, for journey
queries, the level being asked about (`journey_level`) and the player's own
level (`current_level`). The request middleware binds both per request, so
handlers log plain messages and still get level-tagged output:

    2024-05-01 12:00:00 WARNING [src.api.middleware.request_id] req=4f1c lvl=180 cur=42 Slow request

The journey engine itself never logs; only the service layer does.
"""

import json
import logging
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
journey_context_var: ContextVar[Optional[Dict[str, int]]] = ContextVar(
    "journey_context", default=None
)

JOURNEY_FIELDS = ("journey_level", "current_level")

# Attributes every LogRecord carries; anything else came in through extra=
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "request_id", "journey"}


def bind_journey_context(
    journey_level: Optional[int] = None,
    current_level: Optional[int] = None,
) -> Token:
    """Bind the levels of the current query; reset with the returned token."""
    context = {
        key: value
        for key, value in zip(JOURNEY_FIELDS, (journey_level, current_level))
        if value is not None
    }
    return journey_context_var.set(context)


def journey_context() -> Dict[str, int]:
    return dict(journey_context_var.get() or {})


class JourneyContextFilter(logging.Filter):
    """Copy request id and bound levels onto the record unless passed via extra."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"  # type: ignore[attr-defined]
        context = journey_context_var.get() or {}
        for key in JOURNEY_FIELDS:
            if getattr(record, key, None) is None and key in context:
                setattr(record, key, context[key])
        return True


class ConsoleFormatter(logging.Formatter):
    """Single-line format for development, levels shown only when bound."""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)-5s [%(name)s] req=%(request_id)s%(journey)s %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        level = getattr(record, "journey_level", None)
        current = getattr(record, "current_level", None)
        record.journey = (f" lvl={level}" if level is not None else "") + (
            f" cur={current}" if current is not None else ""
        )
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return super().format(record)


class JsonFormatter(logging.Formatter):
    """One JSON object per line: fixed keys, journey context, then extras."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        req_id = getattr(record, "request_id", None)
        if req_id and req_id != "-":
            log_obj["request_id"] = req_id

        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or value is None:
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = str(value)
            log_obj[key] = value

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj)


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: 'production' logs JSON lines, anything else the console format
        debug: If True, use DEBUG level regardless of log_level
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(JourneyContextFilter())
    handler.setFormatter(JsonFormatter() if environment == "production" else ConsoleFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    # The request middleware already logs every request with its levels
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
