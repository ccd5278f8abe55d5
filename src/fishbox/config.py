"""
Application settings.

Values come from environment variables prefixed with ``FISHBOX_`` or from a
local ``.env`` file, e.g. ``FISHBOX_BACKEND=postgrest``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for FishBox."""

    model_config = SettingsConfigDict(
        env_prefix="FISHBOX_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "FishBox"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # Persistence collaborator
    backend: Literal["memory", "postgrest"] = "memory"
    backend_url: str = ""
    backend_key: str = ""

    # Aggregation defaults
    spot_precision: int = Field(default=5, ge=0, le=8)
    timezone: str = "Europe/Berlin"
    leaderboard_limit: int = Field(default=100, gt=0)

    notifications_enabled: bool = False
    data_dir: Path = Path("data")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
