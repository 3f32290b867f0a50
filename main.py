"""
Epic Timelines: Entry Point.

`python main.py calendar.ics --epic Work=work --epic Gym="gym|run"` prints
how many hours each Epic took per week (or --granularity day/month/...).
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime, time

from epic_timelines.adapters.ics_event_source import IcsEventSource
from epic_timelines.config import settings
from epic_timelines.core.bucket_generator import Granularity
from epic_timelines.core.errors import EpicTimelinesError
from epic_timelines.core.timeline_service import Timeline, build_timeline
from epic_timelines.data.models import Epic
from epic_timelines.ports.event_source import EventSourceError

logger = logging.getLogger("epic_timelines")


def _parse_epic(raw: str, case_sensitive: bool, match_location: bool) -> Epic:
    name, sep, keyword = raw.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected NAME=KEYWORD, got {raw!r}")
    return Epic(
        name=name.strip(),
        keyword=keyword.strip(),
        case_sensitive=case_sensitive,
        match_location=match_location,
    )


def _midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=settings.tzinfo)


def _format_table(timeline: Timeline) -> str:
    header = ["Epic"] + [b.start.strftime("%Y-%m-%d") for b in timeline.buckets] + ["Total"]
    rows = [header]
    for epic in timeline.epics:
        hours = timeline.epic_hours[epic.name]
        total = timeline.row_total(epic.name)
        rows.append([epic.name] + [f"{h:g}" for h in hours] + [f"{total:g}"])

    widths = [max(len(row[i]) for row in rows) for i in range(len(header))]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(row, widths)) for row in rows
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Hours per Epic from a calendar export")
    parser.add_argument("calendar", help="Path to an .ics calendar export")
    parser.add_argument(
        "--epic", action="append", default=[], metavar="NAME=KEYWORD",
        help="Epic to track; KEYWORD is a regular expression (repeatable)",
    )
    parser.add_argument(
        "--granularity", type=Granularity.parse, default=settings.DEFAULT_GRANULARITY,
        help="day, week, month, quarter or year",
    )
    parser.add_argument("--start", type=date.fromisoformat, help="First day (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Last day (YYYY-MM-DD)")
    parser.add_argument("--case-sensitive", action="store_true")
    parser.add_argument("--match-location", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        epics = [_parse_epic(raw, args.case_sensitive, args.match_location) for raw in args.epic]
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    try:
        events = IcsEventSource.from_path(args.calendar).load_events()

        if args.start is None or args.end is None:
            if not events:
                logger.error("No events in %s; pass --start and --end", args.calendar)
                return 1
        start = args.start or min(ev.start for ev in events).date()
        end = args.end or max(ev.start for ev in events).date()

        timeline = build_timeline(events, epics, _midnight(start), _midnight(end), args.granularity)
    except (EpicTimelinesError, EventSourceError) as exc:
        logger.error("%s", exc)
        return 1

    print(_format_table(timeline))
    return 0


if __name__ == "__main__":
    sys.exit(main())
