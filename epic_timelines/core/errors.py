"""Epic Timelines: error taxonomy.

Every precondition violation in the bucketing and classification engine
raises one of these. They all derive from ValueError, so callers that only
care about "bad input" can catch that.
"""

from __future__ import annotations


class EpicTimelinesError(ValueError):
    """Base class for all engine errors."""


class InvalidIntervalError(EpicTimelinesError):
    """An interval's start is not strictly before its end."""


class NegativeDeltaError(EpicTimelinesError):
    """A bucket step delta is negative."""


class AmbiguousGranularityError(EpicTimelinesError):
    """Zero or more than one of the year/month/day deltas is nonzero."""


class InvertedRangeError(EpicTimelinesError):
    """The bucket range ends before it starts."""


class PatternCompilationError(EpicTimelinesError):
    """An Epic keyword is not a valid regular expression."""


class DuplicateEpicError(EpicTimelinesError):
    """Two Epics in the same set share a name."""


class InvalidEpicError(EpicTimelinesError):
    """An Epic is missing its name or keyword, or matches no field."""


class InvalidStepError(EpicTimelinesError):
    """A bucket Step has a non-positive amount."""


class UnknownGranularityError(EpicTimelinesError):
    """A granularity name is not one of day, week, month, quarter or year."""
