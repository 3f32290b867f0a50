"""ICS event source: implements EventSource for iCalendar exports.

Reads a .ics export (Google Calendar, Outlook, iCloud, ...) with the
icalendar library and turns every VEVENT into a CalendarEvent. Recurring
events are not expanded: only the first occurrence is produced.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from pathlib import Path

from icalendar import Calendar as iCalendar

from epic_timelines.data.models import CalendarEvent
from epic_timelines.ports.event_source import EventSourceError

logger = logging.getLogger(__name__)

_ALL_DAY = timedelta(days=1)


def _to_datetime(value: date | datetime, tz: tzinfo) -> datetime:
    """Normalize an iCalendar DATE or DATE-TIME to an aware datetime in ``tz``.

    All-day DATE values become midnight; floating times are read as ``tz``.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value.astimezone(tz)
    return datetime.combine(value, time.min, tzinfo=tz)


def _add_duration(start: datetime, duration: timedelta, tz: tzinfo) -> datetime:
    """Add an iCalendar DURATION to ``start``.

    Whole days are nominal (same wall-clock time on a later date); the
    hours, minutes and seconds are exact elapsed time, so PT1H across a
    daylight-saving switch still ends one real hour later.
    """
    nominal = start + timedelta(days=duration.days)
    exact = timedelta(seconds=duration.seconds, microseconds=duration.microseconds)
    return (nominal.astimezone(timezone.utc) + exact).astimezone(tz)


def _optional_text(component, key: str) -> str | None:
    raw = component.get(key)
    if raw is None:
        return None
    return str(raw)


def _parse_vevent(component, tz: tzinfo) -> CalendarEvent | None:
    """Convert one VEVENT; returns None for events the engine can't use."""
    uid = str(component.get("uid", ""))

    dtstart = component.get("dtstart")
    if dtstart is None:
        logger.warning("Skipping event %r: no DTSTART", uid)
        return None
    raw_start = dtstart.dt
    start = _to_datetime(raw_start, tz)

    dtend = component.get("dtend")
    duration = component.get("duration")
    if dtend is not None:
        end = _to_datetime(dtend.dt, tz)
    elif duration is not None:
        end = _add_duration(start, duration.dt, tz)
    elif not isinstance(raw_start, datetime):
        end = start + _ALL_DAY
    else:
        end = start

    if end.astimezone(timezone.utc) <= start.astimezone(timezone.utc):
        logger.warning("Skipping event %r: end %s is not after start %s", uid, end, start)
        return None

    if component.get("rrule") is not None:
        logger.debug("Event %r recurs; using its first occurrence only", uid)

    return CalendarEvent(
        id=uid,
        title=str(component.get("summary", "(no title)")),
        description=_optional_text(component, "description"),
        location=_optional_text(component, "location"),
        start=start,
        end=end,
    )


class IcsEventSource:
    """EventSource backed by the text of an .ics file."""

    def __init__(self, text: str, tz: tzinfo | None = None) -> None:
        if tz is None:
            from epic_timelines.config import settings
            tz = settings.tzinfo

        self._text = text
        self._tz = tz

    @classmethod
    def from_path(cls, path: str | Path, tz: tzinfo | None = None) -> IcsEventSource:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise EventSourceError(f"Failed to read calendar file {path}: {exc}") from exc
        return cls(text, tz=tz)

    def load_events(self) -> list[CalendarEvent]:
        """Parse every VEVENT, in file order.

        Raises:
            EventSourceError: if the text is not a valid iCalendar document.
        """
        try:
            cal = iCalendar.from_ical(self._text)
        except ValueError as exc:
            raise EventSourceError(f"Failed to parse calendar: {exc}") from exc

        events: list[CalendarEvent] = []
        skipped = 0
        for component in cal.walk("VEVENT"):
            event = _parse_vevent(component, self._tz)
            if event is None:
                skipped += 1
                continue
            events.append(event)

        logger.info("Loaded %d events from calendar (%d skipped)", len(events), skipped)
        return events
