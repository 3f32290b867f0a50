"""Event source port: abstract interface for loading calendar events.

The bucketing engine depends on this protocol, never on a specific file
format.
"""

from __future__ import annotations

from typing import Protocol

from epic_timelines.data.models import CalendarEvent


class EventSourceError(Exception):
    """Raised when an event source cannot be read or parsed."""


class EventSource(Protocol):
    """Anything that yields calendar events with start < end."""

    def load_events(self) -> list[CalendarEvent]: ...
