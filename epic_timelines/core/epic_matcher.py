"""Epic Timelines: Epic Matcher & Aggregator.

Decides which events belong to an Epic (keyword search over the enabled
event fields) and sums the hours each Epic occupies in every bucket.

Keywords are Python ``re`` patterns and are searched for anywhere in a
field, not anchored to the whole string. Users may type anchors, classes
and quantifiers; nothing is escaped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from epic_timelines.core.errors import PatternCompilationError
from epic_timelines.core.interval_math import compute_overlap_hours
from epic_timelines.data.models import BucketedEvents, CalendarEvent, Epic

logger = logging.getLogger(__name__)


class KeywordMatcher:
    """An Epic's keyword compiled once, ready to test many events."""

    def __init__(self, epic: Epic) -> None:
        flags = 0 if epic.case_sensitive else re.IGNORECASE
        try:
            self._pattern = re.compile(epic.keyword, flags)
        except re.error as exc:
            raise PatternCompilationError(
                f"Epic {epic.name!r} has an invalid keyword {epic.keyword!r}: {exc}"
            ) from exc
        self.epic = epic

    def test(self, field: str | None) -> bool:
        """True if the pattern occurs somewhere in ``field``; absent fields never match."""
        if field is None:
            return False
        return self._pattern.search(field) is not None

    def matches(self, event: CalendarEvent) -> bool:
        """True if any field enabled on the Epic matches."""
        epic = self.epic
        return (
            (epic.match_title and self.test(event.title))
            or (epic.match_description and self.test(event.description))
            or (epic.match_location and self.test(event.location))
        )


def matches(epic: Epic, event: CalendarEvent) -> bool:
    """One-off check of a single event against an Epic.

    Compiles the keyword on every call; use KeywordMatcher when testing
    many events.
    """
    return KeywordMatcher(epic).matches(event)


def compute_epic_bucket_hours(
    epics: Sequence[Epic], bucketed_events_list: Sequence[BucketedEvents]
) -> dict[str, list[float]]:
    """Map each Epic name to its hours per bucket.

    The hours for a bucket are the sum, over the bucket's events that match
    the Epic, of the event's overlap with the bucket. Lists follow the order
    of ``bucketed_events_list`` and hold 0 where nothing matches.

    Every keyword is compiled before any hours are summed, so an invalid
    keyword fails the whole call. Epics are not merged: two Epics with the
    same keyword get separate rows, and a repeated name keeps the last row.

    Raises:
        PatternCompilationError: if any keyword is not a valid pattern.
        InvalidIntervalError: if an event or bucket is malformed.
    """
    matchers = [KeywordMatcher(epic) for epic in epics]

    result: dict[str, list[float]] = {}
    for matcher in matchers:
        epic_hours: list[float] = []
        for bucketed in bucketed_events_list:
            bucket = bucketed.bucket
            hours = 0.0
            for event in bucketed.events:
                if matcher.matches(event):
                    hours += compute_overlap_hours(event.start, event.end, bucket.start, bucket.end)
            epic_hours.append(hours)
        result[matcher.epic.name] = epic_hours

    logger.debug(
        "Computed hours for %d epics over %d buckets", len(matchers), len(bucketed_events_list)
    )
    return result
