"""
Milestone Test Generator - Gated mastery tests every 10th level.

A test is always built from the required activities of the same level's plan,
so what is presented and what is tested cannot drift apart.
"""

from fractions import Fraction
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from src.engines.journey.errors import require_level
from src.engines.journey.realms import DEFAULT_CATALOG, RealmCatalog
from src.engines.journey.selector import ActivityInstance, ActivitySelector
from src.engines.journey.xp_curve import round_half_up


class MilestoneTest(BaseModel):
    """
    A mastery test gating further progress.

    `is_complete` is caller-owned: mark a copy with
    `test.model_copy(update={"is_complete": True})`.
    """

    model_config = ConfigDict(frozen=True)

    level: int
    name: str
    description: str
    activities: List[str]
    passing_score: int
    xp_reward: int
    is_complete: bool = False


class MilestoneResult(BaseModel):
    """Outcome of grading a milestone test against per-activity scores."""

    model_config = ConfigDict(frozen=True)

    level: int
    average_score: float
    passing_score: int
    passed: bool
    missing: List[str]
    xp_awarded: int


class MilestoneTestGenerator:
    """
    Emits a MilestoneTest for levels that are multiples of MILESTONE_INTERVAL.

    Test XP: sum of required activities' scaled XP plus a 50% bonus.
    Passing: average score over the test's activities >= PASSING_SCORE (0-100).
    """

    MILESTONE_INTERVAL = 10
    PASSING_SCORE = 70
    BONUS_FRACTION = Fraction(1, 2)

    def __init__(
        self,
        selector: ActivitySelector,
        catalog: RealmCatalog = DEFAULT_CATALOG,
    ):
        self.selector = selector
        self.catalog = catalog

    @classmethod
    def is_milestone(cls, level: int) -> bool:
        level = require_level(level)
        return level % cls.MILESTONE_INTERVAL == 0

    def test_for_level(self, level: int) -> Optional[MilestoneTest]:
        """
        Milestone test for `level`, or None when the level is not a milestone.

        Raises:
            InvalidLevel: level is not an integer >= 1
        """
        level = require_level(level)
        if not self.is_milestone(level):
            return None
        return self.from_activities(level, self.selector.activities_for_level(level))

    def from_activities(
        self,
        level: int,
        activities: Sequence[ActivityInstance],
    ) -> Optional[MilestoneTest]:
        """Build the test from an already computed plan for the same level."""
        level = require_level(level)
        if not self.is_milestone(level):
            return None

        required = [a for a in activities if a.required_for_progression]
        base_xp = sum(a.scaled_xp for a in required)
        bonus_xp = round_half_up(base_xp * self.BONUS_FRACTION)
        realm = self.catalog.realm_for_level(level)

        return MilestoneTest(
            level=level,
            name=f"{realm.name} Mastery Test {level // self.MILESTONE_INTERVAL}",
            description=f"Complete all challenges to prove your mastery of {realm.name}",
            activities=[a.type for a in required],
            passing_score=self.PASSING_SCORE,
            xp_reward=base_xp + bonus_xp,
        )

    @staticmethod
    def evaluate(test: MilestoneTest, scores: Mapping[str, float]) -> MilestoneResult:
        """
        Grade a test from per-activity scores (0-100).

        Activities without a score count as 0. Scores for activities outside
        the test are ignored. The engine does not record the outcome.
        """
        missing = [t for t in test.activities if t not in scores]
        if test.activities:
            total = sum(float(scores.get(t, 0.0)) for t in test.activities)
            average = total / len(test.activities)
        else:
            average = 0.0
        passed = average >= test.passing_score
        return MilestoneResult(
            level=test.level,
            average_score=round(average, 2),
            passing_score=test.passing_score,
            passed=passed,
            missing=missing,
            xp_awarded=test.xp_reward if passed else 0,
        )
