"""
Common schema types used across the API.
"""

from typing import List, Optional

from pydantic import BaseModel


class ErrorItem(BaseModel):
    """One field-level error."""

    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    errors: List[ErrorItem] = []
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    realms: int
    max_level: int
