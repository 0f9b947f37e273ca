"""
Pydantic schemas for the journey API.

Engine records (JourneyLevel, ActivityInstance, MilestoneTest, Realm) are
already pydantic models and are returned as-is; these wrap them for lists and
add the request bodies.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from src.engines.journey import ActivityInstance, JourneyLevel, Realm


class RealmListResponse(BaseModel):
    """All realms, in journey order."""

    realms: List[Realm]
    max_level: int


class ActivityListResponse(BaseModel):
    """Activity plan for a level."""

    level: int
    activities: List[ActivityInstance]


class NextActivityResponse(BaseModel):
    """Suggested next activity; None when everything is done for today."""

    level: int
    activity: Optional[ActivityInstance] = None


class UnlockedWindowResponse(BaseModel):
    """Levels around the player's current level."""

    current_level: int
    levels: List[JourneyLevel]


class XPResponse(BaseModel):
    """XP cost of a level and the XP needed to reach it."""

    level: int
    xp_required: int
    total_xp_to_reach: int


class MilestoneEvaluateRequest(BaseModel):
    """Per-activity scores (0-100) reported by the grading collaborator."""

    scores: Dict[str, float] = Field(default_factory=dict)

    @field_validator("scores")
    @classmethod
    def scores_in_range(cls, v: Dict[str, float]) -> Dict[str, float]:
        for activity_type, score in v.items():
            if not 0 <= score <= 100:
                raise ValueError(f"Score for {activity_type} must be between 0 and 100")
        return v
