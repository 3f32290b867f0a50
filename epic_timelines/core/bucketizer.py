"""Epic Timelines: Event Bucketizer.

Groups events by the time buckets they overlap. An event spanning several
buckets appears in each of them; an event that only touches a bucket at a
boundary instant does not appear in it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from epic_timelines.core.interval_math import has_nontrivial_overlap
from epic_timelines.data.models import BucketedEvents, CalendarEvent, TimeBucket

logger = logging.getLogger(__name__)


def bucket_events(
    events: Sequence[CalendarEvent], buckets: Sequence[TimeBucket]
) -> list[BucketedEvents]:
    """Return one BucketedEvents per bucket, in bucket order.

    Each entry holds the events with a nontrivial overlap with its bucket,
    in the order they appear in ``events``. Events are shared, not copied:
    they are frozen values.

    Raises:
        InvalidIntervalError: if an event or bucket does not start strictly
            before it ends.
    """
    result: list[BucketedEvents] = []
    for bucket in buckets:
        overlapping = tuple(
            event
            for event in events
            if has_nontrivial_overlap(bucket.start, bucket.end, event.start, event.end)
        )
        result.append(BucketedEvents(bucket=bucket, events=overlapping))

    logger.debug("Bucketed %d events into %d buckets", len(events), len(buckets))
    return result
