"""Shared test fixtures and configuration.

Pins environment variables so epic_timelines.config loads the same
settings on every machine, and provides common buckets and Epics.
"""

import os

# Patch env vars BEFORE any epic_timelines imports
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("DEFAULT_GRANULARITY", "week")
os.environ.setdefault("LOG_LEVEL", "INFO")

from datetime import datetime

import pytest


def dt(text: str) -> datetime:
    """Naive datetime from an ISO string, e.g. dt("2025-09-22T08:00:00")."""
    return datetime.fromisoformat(text)


@pytest.fixture
def four_day_buckets():
    """Four 1-day buckets, 2025-09-22 through 2025-09-25."""
    from epic_timelines.data.models import TimeBucket

    return [
        TimeBucket(dt("2025-09-22T00:00:00"), dt("2025-09-23T00:00:00")),
        TimeBucket(dt("2025-09-23T00:00:00"), dt("2025-09-24T00:00:00")),
        TimeBucket(dt("2025-09-24T00:00:00"), dt("2025-09-25T00:00:00")),
        TimeBucket(dt("2025-09-25T00:00:00"), dt("2025-09-26T00:00:00")),
    ]


@pytest.fixture
def greek_epics():
    """Case-insensitive Alpha/Beta/Gamma Epics matching on title."""
    from epic_timelines.data.models import Epic

    return [
        Epic(name="Alpha", keyword="alpha"),
        Epic(name="Beta", keyword="beta"),
        Epic(name="Gamma", keyword="gamma"),
    ]
