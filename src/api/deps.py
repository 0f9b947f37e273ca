"""
FastAPI dependencies.

The journey engine is built once per process from settings and injected into
handlers; handlers never construct catalogs themselves.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.config import get_settings
from src.engines.journey import JourneyComposer


@lru_cache
def get_composer() -> JourneyComposer:
    """Process-wide journey composer (immutable, safe to share)."""
    settings = get_settings()
    return JourneyComposer(
        cache_size=settings.journey_cache_size,
        max_level=settings.journey_max_level,
    )


Composer = Annotated[JourneyComposer, Depends(get_composer)]
