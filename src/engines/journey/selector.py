"""
Activity Selector - Deterministic, tier-aware activity plans.

Tiers:
- Early (levels 1-50): 2 required beginner challenges, plus a bonus
  breathing and a bonus grounding exercise rotating with the level
- Mid (levels 51-150): 2 required challenges (3 from level 100), a bonus
  cognitive exercise, and a bonus reflection exercise every 5th level
- Late (levels 151+): 3 required challenges (4 from level 200) from a
  rotating window, a bonus cognitive exercise, and a bonus reflection
  exercise every 3rd level

No randomness is involved: the same level always yields the same plan.
"""

from enum import Enum
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from src.engines.journey.activity_registry import (
    DEFAULT_REGISTRY,
    ActivityCategory,
    ActivityPool,
    ActivityRegistry,
    ActivityTemplate,
)
from src.engines.journey.difficulty import DifficultyScaler
from src.engines.journey.errors import require_level


class Tier(str, Enum):
    """Coarse level bands governing pools and required counts."""
    EARLY = "early"
    MID = "mid"
    LATE = "late"


class SelectionPolicy(BaseModel):
    """
    Tier boundaries, required counts, rotation strides and bonus caps.

    The defaults are product-tuned values and drive the milestone cadence;
    change them only together with the plans they produce.
    """

    model_config = ConfigDict(frozen=True)

    # Tier boundaries (inclusive upper bounds)
    early_max_level: int = 50
    mid_max_level: int = 150

    # Required challenge pools per tier
    early_pools: Tuple[ActivityPool, ...] = (ActivityPool.BEGINNER_CHALLENGES,)
    mid_pools: Tuple[ActivityPool, ...] = (
        ActivityPool.BEGINNER_CHALLENGES,
        ActivityPool.INTERMEDIATE_CHALLENGES,
    )
    late_pools: Tuple[ActivityPool, ...] = (
        ActivityPool.INTERMEDIATE_CHALLENGES,
        ActivityPool.ADVANCED_CHALLENGES,
    )

    # Required challenge counts; each tier steps up at its count boundary
    early_required: int = 2
    mid_required: int = 2
    mid_required_extended: int = 3
    mid_extended_from: int = 100
    late_required: int = 3
    late_required_extended: int = 4
    late_extended_from: int = 200

    # Rotation strides: pool index = (level // stride) % len(pool)
    early_bonus_stride: int = 1
    cognitive_stride: int = 10
    late_window_stride: int = 10
    mid_reflection_every: int = 5
    late_reflection_every: int = 3

    # Bonus difficulty caps
    early_bonus_difficulty_cap: int = 5
    mid_cognitive_difficulty_cap: int = 8
    mid_reflection_difficulty_cap: int = 6
    late_bonus_difficulty_cap: int = 10

    @model_validator(mode="after")
    def _check_monotonic(self) -> "SelectionPolicy":
        if not 1 <= self.early_max_level < self.mid_max_level:
            raise ValueError("Tier boundaries must satisfy 1 <= early_max_level < mid_max_level")
        counts = [
            self.early_required,
            self.mid_required,
            self.mid_required_extended,
            self.late_required,
            self.late_required_extended,
        ]
        if counts[0] < 1 or counts != sorted(counts):
            raise ValueError("Required counts must be positive and never shrink across tiers")
        strides = [
            self.early_bonus_stride,
            self.cognitive_stride,
            self.late_window_stride,
            self.mid_reflection_every,
            self.late_reflection_every,
        ]
        if min(strides) < 1:
            raise ValueError("Rotation strides must be >= 1")
        return self

    def tier_for_level(self, level: int) -> Tier:
        level = require_level(level)
        if level <= self.early_max_level:
            return Tier.EARLY
        if level <= self.mid_max_level:
            return Tier.MID
        return Tier.LATE

    def required_count(self, level: int) -> int:
        tier = self.tier_for_level(level)
        if tier is Tier.EARLY:
            return self.early_required
        if tier is Tier.MID:
            return self.mid_required if level < self.mid_extended_from else self.mid_required_extended
        return self.late_required if level < self.late_extended_from else self.late_required_extended


DEFAULT_POLICY = SelectionPolicy()


def rotating_index(level: int, stride: int, pool_size: int) -> int:
    """Index that advances through a pool once every `stride` levels, wrapping."""
    if pool_size < 1:
        raise ValueError("pool_size must be >= 1")
    return (level // stride) % pool_size


def rotating_window(
    pool: Sequence[ActivityTemplate],
    start: int,
    size: int,
) -> Tuple[ActivityTemplate, ...]:
    """`size` consecutive templates starting at `start`, wrapping past the end."""
    if not pool:
        raise ValueError("Cannot select from an empty pool")
    return tuple(pool[(start + i) % len(pool)] for i in range(size))


class ActivityInstance(BaseModel):
    """A template bound to a level, with scaled values and required/bonus status."""

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    icon: str
    category: ActivityCategory
    description: str
    base_duration: int
    scaled_duration: int
    base_xp: int
    scaled_xp: int
    difficulty_level: int
    required_for_progression: bool
    is_bonus: bool

    @model_validator(mode="after")
    def _required_is_never_bonus(self) -> "ActivityInstance":
        if self.required_for_progression == self.is_bonus:
            raise ValueError("An activity is either required or bonus, never both or neither")
        return self


class ActivitySelector:
    """
    Builds the ordered activity list for a level.

    Plans are memoized per level. Cached plans hold frozen instances only and
    every caller receives a fresh list.
    """

    def __init__(
        self,
        registry: ActivityRegistry = DEFAULT_REGISTRY,
        policy: SelectionPolicy = DEFAULT_POLICY,
        scaler: type = DifficultyScaler,
        cache_size: Optional[int] = 512,
    ):
        self.registry = registry
        self.policy = policy
        self.scaler = scaler
        self._plan = lru_cache(maxsize=cache_size)(self._build_plan)

    def activities_for_level(self, level: int) -> List[ActivityInstance]:
        """
        Ordered activities for `level`: required challenges first, then bonus
        exercises.

        Raises:
            InvalidLevel: level is not an integer >= 1
        """
        level = require_level(level)
        return list(self._plan(level))

    def required_activities(self, level: int) -> List[ActivityInstance]:
        return [a for a in self.activities_for_level(level) if a.required_for_progression]

    def next_suggested_activity(
        self,
        level: int,
        completed_today: Iterable[str] = (),
    ) -> Optional[ActivityInstance]:
        """
        First required activity not yet completed today, else the first
        uncompleted bonus activity, else None.
        """
        done = set(completed_today)
        activities = self.activities_for_level(level)
        for activity in activities:
            if activity.required_for_progression and activity.type not in done:
                return activity
        for activity in activities:
            if activity.is_bonus and activity.type not in done:
                return activity
        return None

    def cache_info(self):
        """Hit/miss statistics of the per-level plan cache."""
        return self._plan.cache_info()

    def _build_plan(self, level: int) -> Tuple[ActivityInstance, ...]:
        tier = self.policy.tier_for_level(level)
        if tier is Tier.EARLY:
            return self._early_plan(level)
        if tier is Tier.MID:
            return self._mid_plan(level)
        return self._late_plan(level)

    def _early_plan(self, level: int) -> Tuple[ActivityInstance, ...]:
        policy = self.policy
        difficulty = self.scaler.difficulty_level(level)
        bonus_difficulty = min(policy.early_bonus_difficulty_cap, difficulty)

        challenges = rotating_window(
            self.registry.combined(*policy.early_pools), 0, policy.required_count(level)
        )
        plan = [
            self._required(t, level, f"Master the basics with {t.name}", difficulty)
            for t in challenges
        ]

        breathing = self._rotate(ActivityPool.BREATHING_EXERCISES, level, policy.early_bonus_stride)
        plan.append(self._bonus(breathing, level, f"Calm your mind with {breathing.name}", bonus_difficulty))

        grounding = self._rotate(ActivityPool.GROUNDING_EXERCISES, level, policy.early_bonus_stride)
        plan.append(self._bonus(grounding, level, f"Ground yourself with {grounding.name}", bonus_difficulty))
        return tuple(plan)

    def _mid_plan(self, level: int) -> Tuple[ActivityInstance, ...]:
        policy = self.policy
        difficulty = self.scaler.difficulty_level(level)

        challenges = rotating_window(
            self.registry.combined(*policy.mid_pools), 0, policy.required_count(level)
        )
        plan = [
            self._required(t, level, f"Build your skills with {t.name}", difficulty)
            for t in challenges
        ]

        cognitive = self._rotate(ActivityPool.COGNITIVE_EXERCISES, level, policy.cognitive_stride)
        plan.append(
            self._bonus(
                cognitive,
                level,
                f"Strengthen your mind with {cognitive.name}",
                min(policy.mid_cognitive_difficulty_cap, difficulty),
            )
        )

        if level % policy.mid_reflection_every == 0:
            reflection = self._rotate(ActivityPool.REFLECTION_EXERCISES, level, policy.mid_reflection_every)
            plan.append(
                self._bonus(
                    reflection,
                    level,
                    f"Reflect on your progress with {reflection.name}",
                    min(policy.mid_reflection_difficulty_cap, difficulty),
                )
            )
        return tuple(plan)

    def _late_plan(self, level: int) -> Tuple[ActivityInstance, ...]:
        policy = self.policy
        difficulty = self.scaler.difficulty_level(level)
        bonus_difficulty = min(policy.late_bonus_difficulty_cap, difficulty)

        pool = self.registry.combined(*policy.late_pools)
        start = rotating_index(level, policy.late_window_stride, len(pool))
        challenges = rotating_window(pool, start, policy.required_count(level))
        plan = [
            self._required(t, level, f"Master the art of {t.name}", difficulty)
            for t in challenges
        ]

        cognitive = self._rotate(ActivityPool.COGNITIVE_EXERCISES, level, policy.cognitive_stride)
        plan.append(self._bonus(cognitive, level, f"Challenge your mind with {cognitive.name}", bonus_difficulty))

        if level % policy.late_reflection_every == 0:
            reflection = self._rotate(ActivityPool.REFLECTION_EXERCISES, level, policy.late_reflection_every)
            plan.append(self._bonus(reflection, level, f"Deep reflection with {reflection.name}", bonus_difficulty))
        return tuple(plan)

    def _rotate(self, pool: ActivityPool, level: int, stride: int) -> ActivityTemplate:
        templates = self.registry.pool(pool)
        return templates[rotating_index(level, stride, len(templates))]

    def _required(
        self, template: ActivityTemplate, level: int, description: str, difficulty: int
    ) -> ActivityInstance:
        return self._instance(template, level, description, difficulty, required=True)

    def _bonus(
        self, template: ActivityTemplate, level: int, description: str, difficulty: int
    ) -> ActivityInstance:
        return self._instance(template, level, description, difficulty, required=False)

    def _instance(
        self,
        template: ActivityTemplate,
        level: int,
        description: str,
        difficulty: int,
        required: bool,
    ) -> ActivityInstance:
        return ActivityInstance(
            type=template.type,
            name=template.name,
            icon=template.icon,
            category=template.category,
            description=description,
            base_duration=template.base_duration,
            scaled_duration=self.scaler.scaled_duration(template.base_duration, level, template.category),
            base_xp=template.base_xp,
            scaled_xp=self.scaler.scaled_reward(template.base_xp, level),
            difficulty_level=difficulty,
            required_for_progression=required,
            is_bonus=not required,
        )
