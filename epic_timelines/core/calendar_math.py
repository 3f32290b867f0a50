"""Epic Timelines: Calendar Arithmetic.

Month lengths and month/year stepping with anchor-day clamping: stepping
Jan 31 by one month lands on Feb 28 (or 29), and the next step lands back
on Mar 31 because the day is always re-derived from the anchor, never from
the previous result.
"""

from __future__ import annotations

import calendar
from datetime import datetime


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in ``month`` of ``year``.

    ``month`` is zero-based (January is 0), matching the month index the
    bucket generator works with internally.
    """
    if not 0 <= month <= 11:
        raise ValueError(f"month must be in 0..11, got {month}")
    return calendar.monthrange(year, month + 1)[1]


def add_months_clamped(value: datetime, months: int, anchor_day: int) -> datetime:
    """Move ``value`` forward by ``months`` and place it on ``anchor_day``.

    If the target month is shorter than ``anchor_day``, the result is the
    last day of that month. Time of day and tzinfo are preserved.
    """
    month_index = value.year * 12 + (value.month - 1) + months
    year, month0 = divmod(month_index, 12)
    day = min(anchor_day, last_day_of_month(year, month0))
    return value.replace(year=year, month=month0 + 1, day=day)


def add_years_clamped(value: datetime, years: int, anchor_day: int) -> datetime:
    """Move ``value`` forward by ``years``; Feb 29 clamps to Feb 28 off leap years."""
    return add_months_clamped(value, 12 * years, anchor_day)
