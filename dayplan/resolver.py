"""
Event occurrence resolver.

Decides which events occur on a calendar day. Month, week and day views all
go through occurs_on_day so every view agrees on the same rules:

1. the origin date (local date of start) always matches, whatever the
   repeat days are;
2. otherwise a repeating event matches days strictly after its origin date
   whose weekday is a repeat day, up to and including the end date if any;
3. nothing else matches.

All functions are pure: the event collection is a snapshot argument and
nothing is cached between calls.
"""

from datetime import date
from enum import Enum
from typing import Iterable

from .event import CalendarEvent
from .month_grid import weekday_index
from .timezone_utils import to_local_date, to_local_datetime


class OccurrenceKind(Enum):
    ORIGIN = "origin"
    RECURRENCE = "recurrence"
    NONE = "none"


def classify_occurrence(event: CalendarEvent, day: date) -> OccurrenceKind:
    """Classify how (or whether) an event occurs on a day."""
    day = to_local_date(day)
    origin = event.origin_date
    if origin == day:
        return OccurrenceKind.ORIGIN

    rule = event.recurrence
    if rule is None:
        return OccurrenceKind.NONE
    if (rule.includes_weekday(weekday_index(day))
            and day > origin
            and rule.is_within_bound(day)):
        return OccurrenceKind.RECURRENCE
    return OccurrenceKind.NONE


def occurs_on_day(event: CalendarEvent, day: date) -> bool:
    """Check if an event has an occurrence on the given day."""
    return classify_occurrence(event, day) is not OccurrenceKind.NONE


def events_for_day(events: Iterable[CalendarEvent], day: date) -> list[CalendarEvent]:
    """Return the events occurring on day, in input order."""
    day = to_local_date(day)
    return [event for event in events if occurs_on_day(event, day)]


def events_for_days(
    events: Iterable[CalendarEvent],
    days: Iterable[date]
) -> dict[date, list[CalendarEvent]]:
    """
    Select events for several days at once (month grid, week columns).

    Returns a dict keyed by local date, in the order the days were given.
    """
    snapshot = list(events)
    result: dict[date, list[CalendarEvent]] = {}
    for day in days:
        day = to_local_date(day)
        result[day] = events_for_day(snapshot, day)
    return result


def event_hour(event: CalendarEvent) -> int:
    """Get the hour slot of an event: the local hour of its start."""
    return to_local_datetime(event.start).hour


def events_by_hour(events: Iterable[CalendarEvent], day: date) -> dict[int, list[CalendarEvent]]:
    """
    Bucket the events of a day by start hour for time-grid views.

    Only hours that hold at least one event are present. Bucketing never
    changes which events are selected for the day.
    """
    buckets: dict[int, list[CalendarEvent]] = {}
    for event in events_for_day(events, day):
        buckets.setdefault(event_hour(event), []).append(event)
    return buckets


def events_for_hour(events: Iterable[CalendarEvent], day: date, hour: int) -> list[CalendarEvent]:
    """Return the events of a day that start in the given hour slot."""
    return [event for event in events_for_day(events, day) if event_hour(event) == hour]
