"""
Epic Timelines: Centralized configuration.

Loads settings from .env / environment variables. Every key has a default,
so importing this module never fails on a fresh checkout.
"""

from __future__ import annotations

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from epic_timelines.core.bucket_generator import Granularity

# Load .env from project root (two levels up from epic_timelines/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Timezone given to naive/all-day calendar values and CLI date bounds
    TIMEZONE: str = "UTC"

    # Bucket size used when the caller doesn't pick one
    DEFAULT_GRANULARITY: Granularity = Granularity.WEEK

    LOG_LEVEL: str = "INFO"

    @field_validator("TIMEZONE")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown TIMEZONE {v!r}") from exc
        return v

    @field_validator("DEFAULT_GRANULARITY", mode="before")
    @classmethod
    def parse_granularity(cls, v: str | Granularity) -> Granularity:
        if isinstance(v, Granularity):
            return v
        return Granularity.parse(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def parse_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown LOG_LEVEL {v!r}")
        return level

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)


def _load_settings() -> Settings:
    """Load settings from environment, validating every key."""
    return Settings(
        TIMEZONE=os.getenv("TIMEZONE", "UTC"),
        DEFAULT_GRANULARITY=os.getenv("DEFAULT_GRANULARITY", "week"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
    )


# Singleton, imported by other modules as:
#   from epic_timelines.config import settings
settings = _load_settings()
