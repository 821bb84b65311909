"""
Dayplan Calendar Core

This package decides which events are visible on which calendar day:
- Month grid and week/hour helpers (month_grid.py)
- Occurrence resolver for single and weekly repeating events (resolver.py)
- Position mapping for time-grid views (layout.py)
- Event model (event.py) and record / iCalendar import (event_records.py, ics_import.py)
- Read-only ICS feeds (ics_feed.py)
- Repeat-duration end dates (recurrence.py) and visibility filtering (visibility.py)
- Configuration parsing (config.py) and timezone handling (timezone_utils.py)
"""

from .config import Config, LayoutConfig, FeedConfig
from .event import CalendarEvent, WeeklyRecurrence, Guest
from .event_records import EventRecordError, event_from_record, event_to_record, load_events_json
from .ics_import import events_from_ical
from .ics_feed import ICSFeed
from .month_grid import generate_month_grid, week_days, hours_of_day, is_current_day
from .resolver import (
    OccurrenceKind, classify_occurrence, occurs_on_day,
    events_for_day, events_for_days, events_by_hour, events_for_hour
)
from .layout import EventPlacement, place_event
from .recurrence import RepeatDuration, repeat_until_for_duration, weekly_recurrence
from .visibility import filter_visible

__all__ = [
    'Config',
    'LayoutConfig',
    'FeedConfig',
    'CalendarEvent',
    'WeeklyRecurrence',
    'Guest',
    'EventRecordError',
    'event_from_record',
    'event_to_record',
    'load_events_json',
    'events_from_ical',
    'ICSFeed',
    # Grid
    'generate_month_grid',
    'week_days',
    'hours_of_day',
    'is_current_day',
    # Resolver
    'OccurrenceKind',
    'classify_occurrence',
    'occurs_on_day',
    'events_for_day',
    'events_for_days',
    'events_by_hour',
    'events_for_hour',
    'EventPlacement',
    'place_event',
    'RepeatDuration',
    'repeat_until_for_duration',
    'weekly_recurrence',
    'filter_visible',
]
