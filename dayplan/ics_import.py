"""
Import of iCalendar data into CalendarEvent values.

Only weekly rules map onto the recurrence model (BYDAY set plus optional
UNTIL). Events with other rules are imported as single occurrences.
"""

import sys
from datetime import datetime, date, timedelta
from typing import Optional

from icalendar import Calendar as ICalCalendar, Event as ICalEvent

from .event import CalendarEvent, Guest, WeeklyRecurrence
from .month_grid import weekday_index
from .timezone_utils import get_local_timezone, to_local_date


# RRULE day codes indexed by weekday (0=Sunday)
DAY_CODES = ["SU", "MO", "TU", "WE", "TH", "FR", "SA"]


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] ICS: {msg}", file=sys.stderr)


def parse_icalendar(ical_text: str) -> ICalCalendar:
    """
    Parse iCalendar text into an icalendar.Calendar object.

    Args:
        ical_text: Raw iCalendar text (VCALENDAR)

    Returns:
        Parsed Calendar object
    """
    return ICalCalendar.from_ical(ical_text)


def _to_datetime(value) -> datetime:
    """Turn a DTSTART/DTEND value into a datetime; all-day dates become local midnight."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return get_local_timezone().localize(datetime.combine(value, datetime.min.time()))
    return value


def _first(rrule, key: str):
    values = rrule.get(key)
    if not values:
        return None
    if isinstance(values, (list, tuple)):
        return values[0]
    return values


def _parse_weekly_rule(component: ICalEvent, start: datetime, uid: str) -> Optional[WeeklyRecurrence]:
    """Map a weekly RRULE onto WeeklyRecurrence; anything else yields None."""
    rrule = component.get('RRULE')
    if rrule is None:
        return None

    freq = str(_first(rrule, 'FREQ') or '').upper()
    interval = int(_first(rrule, 'INTERVAL') or 1)
    if freq != 'WEEKLY' or interval != 1 or rrule.get('COUNT'):
        _debug_print(f"Unsupported RRULE for {uid}: {rrule.to_ical().decode('utf-8')}, importing single occurrence")
        return None

    days = set()
    for code in rrule.get('BYDAY', []):
        code = str(code).upper()[-2:]
        if code in DAY_CODES:
            days.add(DAY_CODES.index(code))
    if not days:
        # RFC 5545: a weekly rule without BYDAY repeats on the DTSTART weekday
        days.add(weekday_index(to_local_date(start)))

    until = _first(rrule, 'UNTIL')
    return WeeklyRecurrence(
        days=frozenset(days),
        until=to_local_date(until) if until is not None else None,
    )


def _parse_attendees(component: ICalEvent) -> tuple[Guest, ...]:
    attendees = component.get('ATTENDEE')
    if attendees is None:
        return ()
    if not isinstance(attendees, list):
        attendees = [attendees]

    guests = []
    for attendee in attendees:
        address = str(attendee)
        if address.lower().startswith('mailto:'):
            address = address[len('mailto:'):]
        params = getattr(attendee, 'params', {})
        guests.append(Guest(name=str(params.get('CN', address)), email=address))
    return tuple(guests)


def event_from_vevent(component: ICalEvent, calendar_id: Optional[str] = None) -> Optional[CalendarEvent]:
    """
    Create a CalendarEvent from a VEVENT component.

    Returns None (after printing a diagnostic) when UID or DTSTART is missing.
    """
    uid = component.get('UID')
    dtstart = component.get('DTSTART')
    if uid is None or dtstart is None:
        _debug_print(f"Skipping VEVENT without UID or DTSTART: {component.get('SUMMARY')}")
        return None
    uid = str(uid)

    start = _to_datetime(dtstart.dt)
    dtend = component.get('DTEND')
    if dtend is None:
        # No end time: all-day events last one day, timed events one hour
        all_day = not isinstance(dtstart.dt, datetime)
        end = start + (timedelta(days=1) if all_day else timedelta(hours=1))
    else:
        end = _to_datetime(dtend.dt)

    summary = component.get('SUMMARY')
    description = component.get('DESCRIPTION')
    ical_class = component.get('CLASS')

    return CalendarEvent(
        id=uid,
        title=str(summary) if summary else 'Untitled',
        start=start,
        end=end,
        description=str(description) if description else None,
        is_public=str(ical_class).upper() == 'PUBLIC' if ical_class else False,
        recurrence=_parse_weekly_rule(component, start, uid),
        calendar_id=calendar_id,
        guests=_parse_attendees(component),
    )


def events_from_ical(ical_text: str, calendar_id: Optional[str] = None) -> list[CalendarEvent]:
    """Parse VCALENDAR text into CalendarEvents, in document order."""
    vcal = parse_icalendar(ical_text)
    events = []
    for component in vcal.walk('VEVENT'):
        # Overridden instances share the series UID; the master record is enough
        if component.get('RECURRENCE-ID') is not None:
            continue
        event = event_from_vevent(component, calendar_id)
        if event:
            events.append(event)
    return events
