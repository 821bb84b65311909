"""
Conversion between persisted event records and CalendarEvent values.

Records are the JSON objects the API layer produces (camelCase keys,
ISO-8601 timestamps). Validation happens here, at the boundary, so the
resolver can stay total.
"""

import json
from datetime import datetime, date
from typing import Any, Iterable, Optional

from .event import CalendarEvent, Guest, WeeklyRecurrence
from .timezone_utils import to_local_date


class EventRecordError(ValueError):
    """Raised for a record that cannot be turned into an event."""


def _parse_timestamp(value: Any, field_name: str, record_id: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        raise EventRecordError(f"Event {record_id!r}: missing {field_name}")
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise EventRecordError(f"Event {record_id!r}: invalid {field_name} {value!r}")


def _parse_until(value: Any, record_id: str) -> Optional[date]:
    """Reduce a repeat end value to a local calendar date."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return to_local_date(value)
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise EventRecordError(f"Event {record_id!r}: invalid repeatEndDate {value!r}")
    return to_local_date(_parse_timestamp(value, 'repeatEndDate', record_id))


def _parse_repeat_days(value: Any, record_id: str) -> frozenset[int]:
    if not isinstance(value, (list, tuple)):
        raise EventRecordError(f"Event {record_id!r}: repeatDays must be a list, got {value!r}")
    days = set()
    for day in value:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise EventRecordError(f"Event {record_id!r}: invalid repeat day {day!r}")
        days.add(day)
    return frozenset(days)


def _parse_recurrence(record: dict, record_id: str) -> Optional[WeeklyRecurrence]:
    """
    Build the recurrence rule from the loose record flags.

    A record marked repeating without a day list carries no usable rule
    and becomes a single occurrence.
    """
    if not record.get('isRepeating'):
        return None
    repeat_days = record.get('repeatDays')
    if repeat_days is None:
        return None
    until_value = record.get('repeatEndDate', record.get('repeatUntil'))
    return WeeklyRecurrence(
        days=_parse_repeat_days(repeat_days, record_id),
        until=_parse_until(until_value, record_id),
    )


def _parse_guests(value: Any, record_id: str) -> tuple[Guest, ...]:
    if not value:
        return ()
    if not isinstance(value, list):
        raise EventRecordError(f"Event {record_id!r}: guests must be a list")
    guests = []
    for guest in value:
        if not isinstance(guest, dict):
            raise EventRecordError(f"Event {record_id!r}: invalid guest {guest!r}")
        guests.append(Guest(
            name=guest.get('name', ''),
            email=guest.get('email', ''),
            id=guest.get('id'),
        ))
    return tuple(guests)


def event_from_record(record: dict) -> CalendarEvent:
    """
    Create a CalendarEvent from an API/persistence record.

    Raises:
        EventRecordError: if id, startTime or endTime is missing or invalid,
            or a repeat day is outside 0..6.
    """
    if not isinstance(record, dict):
        raise EventRecordError(f"Event record must be an object, got {record!r}")
    record_id = record.get('id')
    if record_id is None or record_id == "":
        raise EventRecordError("Event record without id")
    record_id = str(record_id)

    return CalendarEvent(
        id=record_id,
        title=record.get('title') or '',
        start=_parse_timestamp(record.get('startTime'), 'startTime', record_id),
        end=_parse_timestamp(record.get('endTime'), 'endTime', record_id),
        description=record.get('description'),
        is_public=bool(record.get('isPublic', False)),
        recurrence=_parse_recurrence(record, record_id),
        calendar_id=record.get('calendarId') or record.get('categoryId'),
        guests=_parse_guests(record.get('guests'), record_id),
    )


def events_from_records(records: Iterable[dict]) -> list[CalendarEvent]:
    """Create CalendarEvents from a list of records, keeping their order."""
    return [event_from_record(record) for record in records]


def load_events_json(text: str) -> list[CalendarEvent]:
    """
    Parse a JSON document holding either a list of records or an
    object with an "events" list.
    """
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get('events', [])
    if not isinstance(data, list):
        raise EventRecordError("Expected a list of event records")
    return events_from_records(data)


def event_to_record(event: CalendarEvent) -> dict:
    """Serialize a CalendarEvent into the record shape."""
    record = {
        'id': event.id,
        'title': event.title,
        'description': event.description,
        'startTime': event.start.isoformat(),
        'endTime': event.end.isoformat(),
        'isPublic': event.is_public,
        'isRepeating': event.is_repeating,
        'calendarId': event.calendar_id,
        'guests': [
            {'id': guest.id, 'name': guest.name, 'email': guest.email}
            for guest in event.guests
        ],
    }
    if event.recurrence is not None:
        record['repeatDays'] = sorted(event.recurrence.days)
        until = event.recurrence.until
        record['repeatEndDate'] = until.isoformat() if until else None
    return record
