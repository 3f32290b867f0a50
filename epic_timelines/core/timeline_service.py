"""Epic Timelines: Timeline Service.

Wires the engine together: validates the Epic set, generates buckets for
a date range and granularity, groups events into them and computes each
Epic's hours per bucket. The result is a derived view and is rebuilt from
scratch whenever events, Epics or options change.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType

from epic_timelines.core.bucket_generator import Granularity, Step, generate_buckets
from epic_timelines.core.bucketizer import bucket_events
from epic_timelines.core.epic_matcher import KeywordMatcher, compute_epic_bucket_hours
from epic_timelines.core.errors import DuplicateEpicError, InvalidEpicError
from epic_timelines.data.models import BucketedEvents, CalendarEvent, Epic, TimeBucket

logger = logging.getLogger(__name__)


def validate_epics(epics: Sequence[Epic]) -> None:
    """Check an Epic set before it is used to build a timeline.

    Raises:
        InvalidEpicError: if an Epic has a blank name or keyword, or has
            every match target switched off.
        DuplicateEpicError: if two Epics share a name.
    """
    seen: set[str] = set()
    for epic in epics:
        if not epic.name.strip():
            raise InvalidEpicError("Every Epic must have a name.")
        if not epic.keyword.strip():
            raise InvalidEpicError(f"Epic {epic.name!r} must have a keyword to match for.")
        if not (epic.match_title or epic.match_description or epic.match_location):
            raise InvalidEpicError(
                f"Epic {epic.name!r} must match at least one of title, description or location."
            )
        if epic.name in seen:
            raise DuplicateEpicError(
                f"There is an existing Epic with the name {epic.name!r}. Names of Epics must be unique."
            )
        seen.add(epic.name)


@dataclass(frozen=True)
class Timeline:
    """Buckets, the events in each, and every Epic's hours per bucket.

    ``epic_hours`` is read-only: one tuple of hours per Epic name.
    """

    buckets: tuple[TimeBucket, ...]
    bucketed_events: tuple[BucketedEvents, ...]
    epics: tuple[Epic, ...]
    epic_hours: Mapping[str, tuple[float, ...]]

    def row_total(self, epic_name: str) -> float:
        """Total hours of one Epic across all buckets."""
        return sum(self.epic_hours[epic_name])

    def max_hours(self) -> float:
        """Largest single cell in the table, 0 when there are no cells."""
        return max((h for row in self.epic_hours.values() for h in row), default=0.0)

    def matched_events(self, epic_name: str, bucket_index: int) -> list[CalendarEvent]:
        """Events in one bucket that count toward an Epic (drill-down)."""
        epic = next((e for e in self.epics if e.name == epic_name), None)
        if epic is None:
            raise KeyError(epic_name)
        matcher = KeywordMatcher(epic)
        return [ev for ev in self.bucketed_events[bucket_index].events if matcher.matches(ev)]


def build_timeline(
    events: Sequence[CalendarEvent],
    epics: Sequence[Epic],
    start_date: datetime,
    end_date: datetime,
    granularity: Granularity | Step,
) -> Timeline:
    """Build the full Epic timeline for a date range.

    Args:
        events: Calendar events, each with start < end.
        epics: The active Epic set; names must be unique.
        start_date: Start of the first bucket.
        end_date: Last instant a bucket may start at (inclusive).
        granularity: A Granularity, or an explicit Step for custom sizes.

    Raises:
        EpicTimelinesError: any validation error from the Epic set, the
            bucket range or the events. Nothing is returned partially.
    """
    validate_epics(epics)
    step = granularity.step if isinstance(granularity, Granularity) else granularity

    buckets = generate_buckets(start_date, end_date, step)
    bucketed = bucket_events(events, buckets)
    epic_hours = compute_epic_bucket_hours(epics, bucketed)

    logger.info(
        "Built timeline: %d events, %d epics, %d buckets (%d %s each)",
        len(events), len(epics), len(buckets), step.amount, step.unit.value,
    )
    return Timeline(
        buckets=tuple(buckets),
        bucketed_events=tuple(bucketed),
        epics=tuple(epics),
        epic_hours=MappingProxyType({name: tuple(row) for name, row in epic_hours.items()}),
    )
