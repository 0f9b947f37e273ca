"""
Journey Level Composer - Single entry point for presentation layers.

Combines realm identity, the activity plan, the XP curve and milestone gating
into one JourneyLevel record. Everything here is a pure function of its
arguments; `current_level` only affects `is_unlocked`.
"""

from fractions import Fraction
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, computed_field

from src.engines.journey.activity_registry import DEFAULT_REGISTRY, ActivityRegistry
from src.engines.journey.difficulty import DifficultyScaler
from src.engines.journey.errors import require_level
from src.engines.journey.milestone import MilestoneTest, MilestoneTestGenerator
from src.engines.journey.realms import DEFAULT_CATALOG, Realm, RealmCatalog
from src.engines.journey.selector import (
    DEFAULT_POLICY,
    ActivityInstance,
    ActivitySelector,
    SelectionPolicy,
)
from src.engines.journey.xp_curve import XPCurve, round_half_up

DIFFICULTY_LABELS = [
    "Beginner",
    "Easy",
    "Normal",
    "Moderate",
    "Challenging",
    "Hard",
    "Very Hard",
    "Expert",
    "Master",
    "Legendary",
]


class JourneyLevel(BaseModel):
    """Everything a presentation layer needs for one level."""

    model_config = ConfigDict(frozen=True)

    level: int
    realm_id: int
    realm_name: str
    activities: List[ActivityInstance]
    xp_required: int
    total_xp_to_reach: int
    is_unlocked: bool
    difficulty_level: int
    total_duration: int
    total_xp: int
    test: Optional[MilestoneTest] = None

    @computed_field
    @property
    def is_mastery_test(self) -> bool:
        return self.test is not None


class LevelSummary(BaseModel):
    """Compact description of a level for list views."""

    model_config = ConfigDict(frozen=True)

    level: int
    exercise_count: int
    estimated_minutes: int
    difficulty: str
    realm_name: str


class JourneyComposer:
    """
    Orchestrates the journey engine.

    Catalogs and policy are injected once at construction and never mutated.
    """

    def __init__(
        self,
        catalog: RealmCatalog = DEFAULT_CATALOG,
        registry: ActivityRegistry = DEFAULT_REGISTRY,
        policy: SelectionPolicy = DEFAULT_POLICY,
        cache_size: Optional[int] = 512,
        max_level: Optional[int] = None,
    ):
        self.catalog = catalog
        self.selector = ActivitySelector(registry=registry, policy=policy, cache_size=cache_size)
        self.milestones = MilestoneTestGenerator(self.selector, catalog)
        self.max_level = require_level(max_level, "max_level") if max_level is not None else catalog.max_level

    def xp_required_for_level(self, level: int) -> int:
        return XPCurve.xp_required_for_level(level)

    def total_xp_to_level(self, level: int) -> int:
        return XPCurve.total_xp_to_level(level)

    def realm_for_level(self, level: int) -> Realm:
        return self.catalog.realm_for_level(level)

    def activities_for_level(self, level: int) -> List[ActivityInstance]:
        return self.selector.activities_for_level(level)

    def test_for_level(self, level: int) -> Optional[MilestoneTest]:
        return self.milestones.test_for_level(level)

    def journey_level(self, level: int, current_level: int) -> JourneyLevel:
        """
        Compose the JourneyLevel for `level` as seen by a player at
        `current_level`.

        Raises:
            InvalidLevel: either argument is not an integer >= 1
        """
        level = require_level(level, "level")
        current_level = require_level(current_level, "current_level")

        realm = self.catalog.realm_for_level(level)
        activities = self.selector.activities_for_level(level)
        return JourneyLevel(
            level=level,
            realm_id=realm.id,
            realm_name=realm.name,
            activities=activities,
            xp_required=XPCurve.xp_required_for_level(level),
            total_xp_to_reach=XPCurve.total_xp_to_level(level),
            is_unlocked=level <= current_level,
            difficulty_level=DifficultyScaler.difficulty_level(level),
            total_duration=sum(a.scaled_duration for a in activities),
            total_xp=sum(a.scaled_xp for a in activities),
            test=self.milestones.from_activities(level, activities),
        )

    def unlocked_window(self, current_level: int) -> List[JourneyLevel]:
        """The previous level, the current one and the next two, clipped to the journey."""
        current_level = require_level(current_level, "current_level")
        first = max(1, current_level - 1)
        last = min(self.max_level, current_level + 2)
        return [self.journey_level(level, current_level) for level in range(first, last + 1)]

    def next_suggested_activity(
        self,
        level: int,
        completed_today: Iterable[str] = (),
    ) -> Optional[ActivityInstance]:
        return self.selector.next_suggested_activity(level, completed_today)

    def level_summary(self, level: int) -> LevelSummary:
        level = require_level(level)
        realm = self.catalog.realm_for_level(level)
        activities = self.selector.activities_for_level(level)

        if activities:
            average_difficulty = round_half_up(
                Fraction(sum(a.difficulty_level for a in activities), len(activities))
            )
        else:
            average_difficulty = 1
        label = DIFFICULTY_LABELS[min(max(average_difficulty, 1), len(DIFFICULTY_LABELS)) - 1]

        total_duration = sum(a.scaled_duration for a in activities)
        return LevelSummary(
            level=level,
            exercise_count=len(activities),
            estimated_minutes=round_half_up(Fraction(total_duration, 60)),
            difficulty=label,
            realm_name=realm.name,
        )


# Module-level entry points backed by the default catalogs.
_default = JourneyComposer()


def xp_required_for_level(level: int) -> int:
    return _default.xp_required_for_level(level)


def total_xp_to_level(level: int) -> int:
    return _default.total_xp_to_level(level)


def realm_for_level(level: int) -> Realm:
    return _default.realm_for_level(level)


def activities_for_level(level: int) -> List[ActivityInstance]:
    return _default.activities_for_level(level)


def test_for_level(level: int) -> Optional[MilestoneTest]:
    return _default.test_for_level(level)


test_for_level.__test__ = False  # not a pytest test


def journey_level(level: int, current_level: int) -> JourneyLevel:
    return _default.journey_level(level, current_level)
