"""
Journey Engine - Level progression and activity scheduling.

Given a level number, derives:
- XP cost of the level and cumulative XP to reach it (8% exponential growth)
- Owning realm (10 realms x 25 levels)
- Deterministic activity plan (required challenges + bonus exercises)
- Mastery test on every 10th level (70% passing score, +50% XP bonus)

Pure and stateless: no I/O, no logging, safe to call from any thread.
"""

from src.engines.journey.activity_registry import (
    DEFAULT_REGISTRY,
    ActivityCategory,
    ActivityPool,
    ActivityRegistry,
    ActivityTemplate,
)
from src.engines.journey.composer import (
    JourneyComposer,
    JourneyLevel,
    LevelSummary,
    activities_for_level,
    journey_level,
    realm_for_level,
    test_for_level,
    total_xp_to_level,
    xp_required_for_level,
)
from src.engines.journey.difficulty import DifficultyScaler
from src.engines.journey.errors import InvalidLevel, JourneyError, require_level
from src.engines.journey.milestone import MilestoneResult, MilestoneTest, MilestoneTestGenerator
from src.engines.journey.realms import DEFAULT_CATALOG, Realm, RealmCatalog, RealmColors
from src.engines.journey.selector import (
    DEFAULT_POLICY,
    ActivityInstance,
    ActivitySelector,
    SelectionPolicy,
    Tier,
    rotating_index,
    rotating_window,
)
from src.engines.journey.xp_curve import XPCurve, round_half_up

__all__ = [
    "ActivityCategory",
    "ActivityInstance",
    "ActivityPool",
    "ActivityRegistry",
    "ActivitySelector",
    "ActivityTemplate",
    "DEFAULT_CATALOG",
    "DEFAULT_POLICY",
    "DEFAULT_REGISTRY",
    "DifficultyScaler",
    "InvalidLevel",
    "JourneyComposer",
    "JourneyError",
    "JourneyLevel",
    "LevelSummary",
    "MilestoneResult",
    "MilestoneTest",
    "MilestoneTestGenerator",
    "Realm",
    "RealmCatalog",
    "RealmColors",
    "SelectionPolicy",
    "Tier",
    "XPCurve",
    "activities_for_level",
    "journey_level",
    "realm_for_level",
    "require_level",
    "rotating_index",
    "rotating_window",
    "round_half_up",
    "test_for_level",
    "total_xp_to_level",
    "xp_required_for_level",
]
