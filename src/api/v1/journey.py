"""
Journey endpoints - realms, levels, activity plans, milestone tests.

Read-only: every handler is a pure query against the injected composer.
Handlers are plain functions so the CPU-bound work runs in the threadpool
instead of on the event loop.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from src.api.deps import Composer
from src.engines.journey import (
    JourneyLevel,
    LevelSummary,
    MilestoneResult,
    MilestoneTest,
    MilestoneTestGenerator,
    Realm,
)
from src.logging_config import get_logger
from src.schemas.common import ErrorResponse
from src.schemas.journey import (
    ActivityListResponse,
    MilestoneEvaluateRequest,
    NextActivityResponse,
    RealmListResponse,
    UnlockedWindowResponse,
    XPResponse,
)

logger = get_logger(__name__)

router = APIRouter(responses={422: {"model": ErrorResponse}})

NO_TEST_RESPONSES = {404: {"model": ErrorResponse, "description": "Level is not a milestone"}}


@router.get("/realms", response_model=RealmListResponse)
def list_realms(composer: Composer):
    """Get the realm catalog."""
    return RealmListResponse(
        realms=composer.catalog.realms,
        max_level=composer.catalog.max_level,
    )


@router.get("/realms/for-level/{level}", response_model=Realm)
def get_realm_for_level(level: int, composer: Composer):
    """Get the realm containing a level (first realm past the catalog)."""
    return composer.realm_for_level(level)


@router.get("/levels/{level}", response_model=JourneyLevel)
def get_journey_level(
    level: int,
    composer: Composer,
    current_level: int = Query(..., description="Player's current level"),
):
    """Get a journey level as seen by a player at current_level."""
    return composer.journey_level(level, current_level)


@router.get("/levels/{level}/activities", response_model=ActivityListResponse)
def get_level_activities(level: int, composer: Composer):
    """Get the activity plan for a level."""
    return ActivityListResponse(level=level, activities=composer.activities_for_level(level))


@router.get("/levels/{level}/test", response_model=MilestoneTest, responses=NO_TEST_RESPONSES)
def get_level_test(level: int, composer: Composer):
    """Get the milestone test for a level."""
    test = composer.test_for_level(level)
    if test is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Level {level} has no milestone test",
        )
    return test


@router.post(
    "/levels/{level}/test/evaluate",
    response_model=MilestoneResult,
    responses=NO_TEST_RESPONSES,
)
def evaluate_level_test(
    level: int,
    body: MilestoneEvaluateRequest,
    composer: Composer,
):
    """Grade a milestone test from per-activity scores. Nothing is recorded."""
    test = composer.test_for_level(level)
    if test is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Level {level} has no milestone test",
        )
    result = MilestoneTestGenerator.evaluate(test, body.scores)
    logger.info(
        "Milestone test evaluated",
        extra={"passed": result.passed, "average_score": result.average_score},
    )
    return result


@router.get("/levels/{level}/next-activity", response_model=NextActivityResponse)
def get_next_activity(
    level: int,
    composer: Composer,
    completed: List[str] = Query(default=[], description="Activity types completed today"),
):
    """Suggest the next activity, required ones first."""
    return NextActivityResponse(
        level=level,
        activity=composer.next_suggested_activity(level, completed),
    )


@router.get("/levels/{level}/summary", response_model=LevelSummary)
def get_level_summary(level: int, composer: Composer):
    """Get a compact summary of a level."""
    return composer.level_summary(level)


@router.get("/window", response_model=UnlockedWindowResponse)
def get_unlocked_window(
    composer: Composer,
    current_level: int = Query(..., description="Player's current level"),
):
    """Get the levels around the player's current level."""
    return UnlockedWindowResponse(
        current_level=current_level,
        levels=composer.unlocked_window(current_level),
    )


@router.get("/xp/{level}", response_model=XPResponse)
def get_level_xp(level: int, composer: Composer):
    """Get XP cost of a level and cumulative XP to reach it."""
    return XPResponse(
        level=level,
        xp_required=composer.xp_required_for_level(level),
        total_xp_to_reach=composer.total_xp_to_level(level),
    )
