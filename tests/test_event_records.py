import json
from datetime import date

import pytest

from dayplan.event import Guest
from dayplan.event_records import (
    EventRecordError, event_from_record, events_from_records,
    load_events_json, event_to_record,
)
from dayplan.resolver import events_for_day
from conftest import utc


def _record(**overrides):
    record = {
        "id": "evt-1",
        "title": "Team sync",
        "description": "Weekly planning",
        "startTime": "2024-01-03T10:00:00.000Z",
        "endTime": "2024-01-03T11:00:00.000Z",
        "isPublic": False,
        "isRepeating": False,
        "repeatDays": None,
        "calendarId": "work",
        "categoryId": "work",
        "guests": [],
    }
    record.update(overrides)
    return record


def test_single_event_record():
    event = event_from_record(_record())
    assert event.id == "evt-1"
    assert event.title == "Team sync"
    assert event.description == "Weekly planning"
    assert event.start == utc(2024, 1, 3, 10, 0)
    assert event.end == utc(2024, 1, 3, 11, 0)
    assert event.calendar_id == "work"
    assert not event.is_repeating


def test_repeating_record_with_end_date():
    event = event_from_record(_record(
        isRepeating=True,
        repeatDays=[1, 3],
        repeatEndDate="2024-01-31T00:00:00.000Z",
    ))
    assert event.repeat_days == frozenset({1, 3})
    assert event.repeat_until == date(2024, 1, 31)


def test_repeat_end_date_reduced_to_local_date(amsterdam):
    # Local midnight of Jan 15 in Amsterdam, stored as an instant
    event = event_from_record(_record(
        isRepeating=True, repeatDays=[1], repeatEndDate="2024-01-14T23:00:00.000Z",
    ))
    assert event.repeat_until == date(2024, 1, 15)


def test_repeat_until_alias_and_plain_date():
    event = event_from_record(_record(isRepeating=True, repeatDays=[1], repeatUntil="2024-02-05"))
    assert event.repeat_until == date(2024, 2, 5)


def test_repeating_without_days_becomes_single():
    event = event_from_record(_record(isRepeating=True, repeatDays=None))
    assert not event.is_repeating


def test_days_without_repeating_flag_are_ignored():
    event = event_from_record(_record(isRepeating=False, repeatDays=[1, 2]))
    assert not event.is_repeating


def test_empty_repeat_days_kept_as_rule():
    event = event_from_record(_record(isRepeating=True, repeatDays=[]))
    assert event.is_repeating
    assert event.repeat_days == frozenset()


def test_category_fallback_and_guests():
    event = event_from_record(_record(
        calendarId=None,
        categoryId="personal",
        isPublic=True,
        guests=[{"id": "g1", "name": "Ann", "email": "ann@example.com"}],
    ))
    assert event.calendar_id == "personal"
    assert event.is_public
    assert event.guests == (Guest(name="Ann", email="ann@example.com", id="g1"),)


@pytest.mark.parametrize("overrides", [
    {"id": None},
    {"startTime": None},
    {"endTime": ""},
    {"startTime": "not a date"},
    {"isRepeating": True, "repeatDays": [7]},
    {"isRepeating": True, "repeatDays": ["1"]},
    {"isRepeating": True, "repeatDays": [1], "repeatEndDate": "2024-13-45"},
])
def test_invalid_records_raise(overrides):
    with pytest.raises(EventRecordError):
        event_from_record(_record(**overrides))


def test_record_error_is_value_error():
    assert issubclass(EventRecordError, ValueError)


def test_non_chronological_record_is_accepted():
    event = event_from_record(_record(endTime="2024-01-03T09:00:00Z"))
    assert event.end < event.start


def test_load_events_json_list_and_wrapper():
    records = [_record(id="a"), _record(id="b", startTime="2024-01-04T10:00:00Z")]
    assert [e.id for e in load_events_json(json.dumps(records))] == ["a", "b"]
    assert [e.id for e in load_events_json(json.dumps({"events": records}))] == ["a", "b"]


def test_load_events_json_rejects_other_documents():
    with pytest.raises(EventRecordError):
        load_events_json('"just a string"')


def test_records_feed_the_resolver():
    events = events_from_records([
        _record(id="wed", isRepeating=True, repeatDays=[1]),
        _record(id="other", startTime="2024-01-09T10:00:00Z", endTime="2024-01-09T11:00:00Z"),
    ])
    assert [e.id for e in events_for_day(events, date(2024, 1, 3))] == ["wed"]
    assert [e.id for e in events_for_day(events, date(2024, 1, 8))] == ["wed"]
    assert [e.id for e in events_for_day(events, date(2024, 1, 10))] == []


def test_event_to_record():
    event = event_from_record(_record(
        isRepeating=True, repeatDays=[3, 1], repeatEndDate="2024-01-31",
        guests=[{"name": "Ann", "email": "ann@example.com"}],
    ))
    record = event_to_record(event)
    assert record["id"] == "evt-1"
    assert record["isRepeating"] is True
    assert record["repeatDays"] == [1, 3]
    assert record["repeatEndDate"] == "2024-01-31"
    assert record["startTime"] == "2024-01-03T10:00:00+00:00"
    assert record["guests"] == [{"id": None, "name": "Ann", "email": "ann@example.com"}]
    assert event_from_record(record) == event


@pytest.mark.parametrize("overrides", [
    {"isRepeating": True, "repeatDays": 3},
    {"isRepeating": True, "repeatDays": "1,3"},
    {"guests": "ann@example.com"},
    {"guests": ["ann@example.com"]},
])
def test_wrongly_shaped_fields_raise(overrides):
    with pytest.raises(EventRecordError):
        event_from_record(_record(**overrides))


@pytest.mark.parametrize("record", ["oops", 42, None, ["evt-1"]])
def test_record_that_is_not_an_object_raises(record):
    with pytest.raises(EventRecordError):
        event_from_record(record)


def test_load_events_json_with_non_object_entry():
    with pytest.raises(EventRecordError):
        load_events_json('["oops"]')
