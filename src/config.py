"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_v1_prefix: str = "/api/v1"
    project_name: str = "Focus Journey"
    version: str = "1.0.0"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:8081",  # Expo dev server
        "http://127.0.0.1:3000",
    ]

    # Journey engine
    journey_max_level: int = 250  # last level served by the unlocked window
    journey_cache_size: int = 512  # memoized per-level activity plans

    # Requests slower than this are logged with the levels they asked about
    slow_request_ms: int = 250


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
