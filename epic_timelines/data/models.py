"""Epic Timelines: Data Models.

Plain immutable values passed between the event source, the bucketing
engine and whatever renders the result. Nothing here has behavior beyond
holding fields, so the engine can share references freely instead of
copying events into every bucket they touch.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_EPIC_COLOR = "#7799ff"


@dataclass(frozen=True)
class CalendarEvent:
    """A single calendar event as produced by an event source.

    ``start`` must be strictly before ``end``; the engine checks this wherever
    it computes an overlap against the event.
    """

    id: str                           # opaque UID, e.g. "abc123@google.com"
    title: str
    start: datetime
    end: datetime
    description: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class TimeBucket:
    """A half-open time window [start, end)."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class BucketedEvents:
    """The events that overlap ``bucket``, in their original order."""

    bucket: TimeBucket
    events: tuple[CalendarEvent, ...] = ()


@dataclass(frozen=True)
class Epic:
    """A user-defined category of events, matched by keyword.

    ``keyword`` is used as a regular expression and searched for anywhere in
    each enabled field.
    """

    name: str                         # unique within an Epic set
    keyword: str
    case_sensitive: bool = False
    match_title: bool = True
    match_description: bool = True
    match_location: bool = False
    color: str = DEFAULT_EPIC_COLOR   # display only, never interpreted here
