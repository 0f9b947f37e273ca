"""
Difficulty Scaler - Level-dependent duration, reward and difficulty rating.
"""

from fractions import Fraction
from typing import Union

from src.engines.journey.activity_registry import ActivityCategory
from src.engines.journey.errors import require_level
from src.engines.journey.xp_curve import round_half_up


class DifficultyScaler:
    """
    Pure scaling formulas keyed on the player's level.

    Challenges lengthen up to 1.5x and rewards grow up to 3x by the nominal
    final level; both keep growing linearly past it. Exercises keep their
    intrinsic pacing and are never lengthened.
    """

    NOMINAL_MAX_LEVEL = 250
    LEVELS_PER_DIFFICULTY = 25
    MAX_DIFFICULTY = 10
    CHALLENGE_DURATION_GAIN = Fraction(1, 2)  # +50% at NOMINAL_MAX_LEVEL
    REWARD_GAIN = Fraction(2)  # +200% at NOMINAL_MAX_LEVEL

    @classmethod
    def difficulty_level(cls, level: int) -> int:
        """1-10 rating: ceil(level / 25), capped at 10."""
        level = require_level(level)
        return min(cls.MAX_DIFFICULTY, -(-level // cls.LEVELS_PER_DIFFICULTY))

    @classmethod
    def scaled_duration(
        cls,
        base_duration: int,
        level: int,
        category: Union[ActivityCategory, str],
    ) -> int:
        """Duration in seconds for an activity of `category` at `level`."""
        level = require_level(level)
        if ActivityCategory(category) == ActivityCategory.EXERCISE:
            return base_duration
        factor = 1 + Fraction(level, cls.NOMINAL_MAX_LEVEL) * cls.CHALLENGE_DURATION_GAIN
        return round_half_up(base_duration * factor)

    @classmethod
    def scaled_reward(cls, base_reward: int, level: int) -> int:
        """XP reward for an activity at `level`."""
        level = require_level(level)
        factor = 1 + Fraction(level, cls.NOMINAL_MAX_LEVEL) * cls.REWARD_GAIN
        return round_half_up(base_reward * factor)
