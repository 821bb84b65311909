#!/usr/bin/env python3
"""
Dayplan Calendar - prints month grids and day agendas for a set of events.

This is the command line entry point. Events are read from JSON record
files, .ics files, ICS URLs and the feeds listed in the configuration.
"""

import sys
import argparse
from datetime import date
from pathlib import Path

from dayplan.config import Config
from dayplan.event import CalendarEvent
from dayplan.event_records import load_events_json
from dayplan.ics_feed import ICSFeed
from dayplan.ics_import import events_from_ical
from dayplan.layout import place_event
from dayplan.month_grid import generate_month_grid, hours_of_day, is_current_day
from dayplan.resolver import events_by_hour, events_for_days
from dayplan.timezone_utils import local_today, set_timezone


DAY_HEADER = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, zero-based month index)."""
    year_text, month_text = value.split("-", 1)
    return int(year_text), int(month_text) - 1


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Dayplan Calendar - show which events occur on which day"
    )
    parser.add_argument(
        "sources",
        nargs="*",
        help="JSON event records, .ics files or ICS URLs"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--timezone",
        help="Local timezone name (overrides the configuration)"
    )
    view = parser.add_mutually_exclusive_group()
    view.add_argument(
        "--month",
        type=parse_month,
        help="Month to show as YYYY-MM (default: current month)"
    )
    view.add_argument(
        "--day",
        type=date.fromisoformat,
        help="Day to show as YYYY-MM-DD"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def load_config(config_path=None) -> Config:
    """Load the given configuration, or the default one if it exists."""
    if config_path is not None:
        return Config.load(config_path)
    if Config.get_default_config_path().exists():
        return Config.load()
    return Config()


def load_feed(name: str, url: str, calendar_id=None) -> list[CalendarEvent]:
    """Load the events of an ICS feed; a failed feed raises RuntimeError."""
    feed = ICSFeed(name=name, url=url, calendar_id=calendar_id)
    events = feed.get_events()
    if feed.error:
        raise RuntimeError(f"Could not load feed {name}: {feed.error}")
    return events


def load_source(source: str) -> list[CalendarEvent]:
    """Load events from a file path or an ICS URL."""
    if source.startswith(("http://", "https://")):
        return load_feed(source, source)

    path = Path(source)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".ics", ".ical"):
        return events_from_ical(text, calendar_id=path.stem)
    return load_events_json(text)


def print_month(events: list[CalendarEvent], year: int, month_index: int):
    grid = generate_month_grid(year, month_index)
    selected = events_for_days(events, [day for row in grid for day in row])

    print(grid[1][0].strftime("%B %Y"))
    print(" ".join(f"{name:>7}" for name in DAY_HEADER))
    for row in grid:
        cells = []
        for day in row:
            count = len(selected[day])
            marker = "*" if is_current_day(day) else " "
            cells.append(f"{marker}{day.day:>2}({count:>2})" if count else f"{marker}{day.day:>2}    ")
        print(" ".join(cells))


def print_day(events: list[CalendarEvent], day: date):
    buckets = events_by_hour(events, day)
    print(day.strftime("%A %d %B %Y"))
    if not buckets:
        print("  No events")
        return
    for hour in hours_of_day():
        for event in buckets.get(hour, []):
            placement = place_event(event, day)
            start, end = event.occurrence_window(day)
            repeat = " (repeats)" if event.is_repeating else ""
            print(
                f"  {start:%H:%M}-{end:%H:%M}  {event.title}{repeat}"
                f"  [offset={placement.offset:g} extent={placement.extent:g}]"
            )


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error loading configuration: {e}")
        sys.exit(1)

    config.apply()
    if args.timezone:
        set_timezone(args.timezone)

    if args.debug:
        print(f"Loaded configuration from: {args.config or Config.get_default_config_path()}", file=sys.stderr)
        print(f"  Timezone: {args.timezone or config.timezone}", file=sys.stderr)
        print(f"  Feeds: {len(config.feeds)}", file=sys.stderr)

    # Gather events
    events: list[CalendarEvent] = []
    try:
        for source in args.sources:
            events.extend(load_source(source))
        for feed_config in config.feeds:
            events.extend(load_feed(feed_config.name, feed_config.url, feed_config.calendar_id))
    except (OSError, RuntimeError, ValueError) as e:
        print(f"Error loading events: {e}")
        sys.exit(1)

    if args.debug:
        print(f"  Events loaded: {len(events)}", file=sys.stderr)

    if args.day:
        print_day(events, args.day)
    else:
        if args.month:
            year, month_index = args.month
        else:
            today = local_today()
            year, month_index = today.year, today.month - 1
        print_month(events, year, month_index)


if __name__ == "__main__":
    main()
