"""Epic Timelines: Interval Math.

Overlap between two time intervals, measured in hours of elapsed time.

Aware datetimes are compared as instants (in UTC), so an interval spanning
a daylight-saving switch counts the hours that actually passed. Naive
datetimes are taken as they are.

No I/O: this module only transforms data.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from epic_timelines.core.errors import InvalidIntervalError

_ONE_HOUR = timedelta(hours=1)


def _instant(value: datetime) -> datetime:
    """UTC view of an aware datetime; naive values pass through unchanged."""
    if value.utcoffset() is None:
        return value
    return value.astimezone(timezone.utc)


def _require_ordered(start: datetime, end: datetime, label: str) -> None:
    if _instant(start) >= _instant(end):
        raise InvalidIntervalError(
            f"{label}: start {start.isoformat()} must be strictly earlier than end {end.isoformat()}"
        )


def compute_overlap_hours(
    start1: datetime, end1: datetime, start2: datetime, end2: datetime
) -> float:
    """Return how many hours [start1, end1) and [start2, end2) share.

    Disjoint intervals and intervals touching at a single instant give 0.
    Sub-second overlaps are kept exactly as a fraction of an hour.

    Raises:
        InvalidIntervalError: if either start is not strictly before its end.
    """
    _require_ordered(start1, end1, "first interval")
    _require_ordered(start2, end2, "second interval")

    later_start = max(_instant(start1), _instant(start2))
    earlier_end = min(_instant(end1), _instant(end2))
    return max(0.0, (earlier_end - later_start) / _ONE_HOUR)


def has_nontrivial_overlap(
    start1: datetime, end1: datetime, start2: datetime, end2: datetime
) -> bool:
    """True if the two intervals overlap by more than zero time."""
    return compute_overlap_hours(start1, end1, start2, end2) > 0
