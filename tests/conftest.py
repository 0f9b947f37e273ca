"""
Pytest fixtures for Focus Journey tests.
"""

import pytest

from src.engines.journey import (
    DEFAULT_CATALOG,
    DEFAULT_REGISTRY,
    ActivitySelector,
    JourneyComposer,
    MilestoneTestGenerator,
)


@pytest.fixture
def composer() -> JourneyComposer:
    """A fresh composer over the default catalogs."""
    return JourneyComposer()


@pytest.fixture
def selector() -> ActivitySelector:
    """A fresh selector over the default registry and policy."""
    return ActivitySelector(registry=DEFAULT_REGISTRY)


@pytest.fixture
def milestones(selector: ActivitySelector) -> MilestoneTestGenerator:
    """Milestone generator sharing the selector fixture."""
    return MilestoneTestGenerator(selector, DEFAULT_CATALOG)
