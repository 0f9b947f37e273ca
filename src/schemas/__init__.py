"""
Pydantic schemas for API request/response validation.
"""

from src.schemas.common import (
    ErrorItem,
    ErrorResponse,
    HealthResponse,
)
from src.schemas.journey import (
    ActivityListResponse,
    NextActivityResponse,
    RealmListResponse,
    MilestoneEvaluateRequest,
    UnlockedWindowResponse,
    XPResponse,
)

__all__ = [
    # Common
    "ErrorItem",
    "ErrorResponse",
    "HealthResponse",
    # Journey
    "ActivityListResponse",
    "NextActivityResponse",
    "RealmListResponse",
    "MilestoneEvaluateRequest",
    "UnlockedWindowResponse",
    "XPResponse",
]
