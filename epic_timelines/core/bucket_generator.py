"""Epic Timelines: Bucket Generator.

Splits a date range into contiguous, ascending time buckets of a fixed
calendar step (N days, N months or N years).

Month and year steps use anchor-day semantics: every bucket boundary is
placed on the start date's day-of-month, clamped to the end of shorter
months. Day steps are plain calendar-day additions and need no clamping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from epic_timelines.core.calendar_math import add_months_clamped, add_years_clamped
from epic_timelines.core.errors import (
    AmbiguousGranularityError,
    InvalidStepError,
    InvertedRangeError,
    NegativeDeltaError,
    UnknownGranularityError,
)
from epic_timelines.data.models import TimeBucket

logger = logging.getLogger(__name__)


class StepUnit(str, Enum):
    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"


@dataclass(frozen=True)
class Step:
    """One bucket's length: ``amount`` days, months or years (amount > 0)."""

    unit: StepUnit
    amount: int

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise InvalidStepError(f"Step amount must be positive, got {self.amount}")

    @classmethod
    def from_deltas(cls, year_delta: int, month_delta: int, day_delta: int) -> Step:
        """Build a Step from three deltas of which exactly one is nonzero.

        Raises:
            NegativeDeltaError: if any delta is negative.
            AmbiguousGranularityError: if zero or several deltas are nonzero.
        """
        if year_delta < 0 or month_delta < 0 or day_delta < 0:
            raise NegativeDeltaError("All deltas must be nonnegative.")

        nonzero = [
            (unit, delta)
            for unit, delta in (
                (StepUnit.YEARS, year_delta),
                (StepUnit.MONTHS, month_delta),
                (StepUnit.DAYS, day_delta),
            )
            if delta != 0
        ]
        if len(nonzero) != 1:
            raise AmbiguousGranularityError(
                "Exactly one of year_delta, month_delta, and day_delta must be nonzero."
            )
        unit, amount = nonzero[0]
        return cls(unit, amount)

    def advance(self, cursor: datetime, anchor_day: int) -> datetime:
        """Return the end of the bucket that starts at ``cursor``."""
        if self.unit is StepUnit.DAYS:
            return cursor + timedelta(days=self.amount)
        if self.unit is StepUnit.MONTHS:
            return add_months_clamped(cursor, self.amount, anchor_day)
        return add_years_clamped(cursor, self.amount, anchor_day)


class Granularity(str, Enum):
    """The bucket sizes offered to users."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def step(self) -> Step:
        return _GRANULARITY_STEPS[self]

    @classmethod
    def parse(cls, text: str) -> Granularity:
        """Case-insensitive lookup by name, e.g. "Week" -> Granularity.WEEK."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            valid = ", ".join(g.value for g in cls)
            raise UnknownGranularityError(
                f"Unknown granularity {text!r}; expected one of: {valid}"
            ) from None


_GRANULARITY_STEPS = {
    Granularity.DAY: Step(StepUnit.DAYS, 1),
    Granularity.WEEK: Step(StepUnit.DAYS, 7),
    Granularity.MONTH: Step(StepUnit.MONTHS, 1),
    Granularity.QUARTER: Step(StepUnit.MONTHS, 3),
    Granularity.YEAR: Step(StepUnit.YEARS, 1),
}


def generate_buckets(start_date: datetime, end_date: datetime, step: Step) -> list[TimeBucket]:
    """Generate buckets covering [start_date, end_date], both inclusive.

    The first bucket starts at ``start_date``. Buckets keep being emitted
    while their start is <= ``end_date``, so a zero-length range gives one
    bucket and the last bucket may run past ``end_date`` (it is not
    truncated).

    Raises:
        InvertedRangeError: if ``end_date`` is before ``start_date``.
    """
    if end_date < start_date:
        raise InvertedRangeError("end_date must be later than or equal to start_date.")

    anchor_day = start_date.day
    buckets: list[TimeBucket] = []
    cursor = start_date
    while cursor <= end_date:
        bucket_end = step.advance(cursor, anchor_day)
        buckets.append(TimeBucket(start=cursor, end=bucket_end))
        cursor = bucket_end

    logger.debug(
        "Generated %d buckets of %d %s from %s to %s",
        len(buckets), step.amount, step.unit.value, start_date, end_date,
    )
    return buckets


def generate_time_buckets(
    start_date: datetime,
    end_date: datetime,
    year_delta: int,
    month_delta: int,
    day_delta: int,
) -> list[TimeBucket]:
    """Generate buckets of ``year_delta`` years, ``month_delta`` months or ``day_delta`` days.

    Exactly one delta must be nonzero and none may be negative. See
    generate_buckets for the range semantics.

    Raises:
        NegativeDeltaError: if any delta is negative.
        AmbiguousGranularityError: if zero or several deltas are nonzero.
        InvertedRangeError: if ``end_date`` is before ``start_date``.
    """
    step = Step.from_deltas(year_delta, month_delta, day_delta)
    return generate_buckets(start_date, end_date, step)
