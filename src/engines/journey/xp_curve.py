"""
XP Curve - Exponential experience cost per level.

Level 1 costs BASE_XP and every following level costs GROWTH_RATE times the
previous one. Values are computed exactly on integers (the rate is kept as a
numerator/denominator pair) and rounded half-up, so the curve is identical on
every platform and never overflows.
"""

from fractions import Fraction
from functools import lru_cache

from src.engines.journey.errors import require_level


def round_half_up(value: Fraction) -> int:
    """Round a non-negative exact value to the nearest int, ties upwards."""
    value = Fraction(value)
    return _round_ratio(value.numerator, value.denominator)


def _round_ratio(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


class XPCurve:
    """XP cost of a single level and cumulative XP to reach a level."""

    BASE_XP = 100
    GROWTH_RATE = Fraction(108, 100)  # 8% per level

    @classmethod
    def xp_required_for_level(cls, level: int) -> int:
        """
        XP cost of the given level alone.

        Args:
            level: Level number (>= 1)

        Returns:
            round(BASE_XP * GROWTH_RATE ** (level - 1))

        Raises:
            InvalidLevel: level is not an integer >= 1
        """
        level = require_level(level)
        return _xp_for(level, cls.BASE_XP, cls.GROWTH_RATE)

    @classmethod
    def total_xp_to_level(cls, level: int) -> int:
        """
        XP spent reaching the start of `level`: the sum of the costs of
        levels 1 .. level - 1. Level 1 needs 0.

        Each term is rounded on its own, so the sum is walked with a running
        power of the rate rather than a closed-form geometric series.
        """
        level = require_level(level)
        return _total_xp_to(level, cls.BASE_XP, cls.GROWTH_RATE)


@lru_cache(maxsize=4096)
def _xp_for(level: int, base_xp: int, growth_rate: Fraction) -> int:
    steps = level - 1
    return _round_ratio(
        base_xp * growth_rate.numerator ** steps,
        growth_rate.denominator ** steps,
    )


@lru_cache(maxsize=1024)
def _total_xp_to(level: int, base_xp: int, growth_rate: Fraction) -> int:
    numerator, denominator = base_xp, 1
    total = 0
    for _ in range(1, level):
        total += _round_ratio(numerator, denominator)
        numerator *= growth_rate.numerator
        denominator *= growth_rate.denominator
    return total
