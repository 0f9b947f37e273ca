"""
API v1 routes.
"""

from fastapi import APIRouter

from src.api.v1 import journey

router = APIRouter()

router.include_router(journey.router, prefix="/journey", tags=["Journey"])
