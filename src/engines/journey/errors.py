"""
Journey engine errors.

InvalidLevel is the only condition the engine raises for caller input. It is
raised before any computation and is never coerced away (a level of 0 is not
clamped to 1).
"""

import numbers
from typing import Any


class JourneyError(Exception):
    """Base class for journey engine errors."""


class InvalidLevel(JourneyError, ValueError):
    """A level argument was missing, non-integer, or below 1."""

    def __init__(self, argument: str, value: Any):
        self.argument = argument
        self.value = value
        super().__init__(f"{argument} must be an integer >= 1, got {value!r}")


def require_level(value: Any, argument: str = "level") -> int:
    """
    Validate a level-like argument and return it as a plain int.

    bool is rejected even though it is an int subclass.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidLevel(argument, value)
    level = int(value)
    if level < 1:
        raise InvalidLevel(argument, value)
    return level
