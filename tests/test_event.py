from datetime import date, datetime, timedelta

from dayplan.event import CalendarEvent, Guest, WeeklyRecurrence
from conftest import utc


def test_single_event_properties(make_event):
    event = make_event(utc(2024, 1, 3, 10, 0), minutes=90)
    assert not event.is_repeating
    assert event.repeat_days == frozenset()
    assert event.repeat_until is None
    assert event.origin_date == date(2024, 1, 3)
    assert event.duration == timedelta(minutes=90)
    assert event.duration_minutes == 90


def test_repeating_event_properties(make_event):
    event = make_event(utc(2024, 1, 3, 10, 0), repeat_days=[1, 3], until=date(2024, 2, 1))
    assert event.is_repeating
    assert event.repeat_days == frozenset({1, 3})
    assert event.repeat_until == date(2024, 2, 1)


def test_origin_date_in_local_timezone(amsterdam, make_event):
    event = make_event(utc(2024, 1, 3, 23, 30))
    assert event.origin_date == date(2024, 1, 4)
    assert event.local_start.hour == 0


def test_occurrence_window_on_origin_day(make_event):
    event = make_event(utc(2024, 1, 3, 10, 0), minutes=30)
    start, end = event.occurrence_window()
    assert start == utc(2024, 1, 3, 10, 0)
    assert end == utc(2024, 1, 3, 10, 30)


def test_occurrence_window_on_later_day(make_event):
    event = make_event(utc(2024, 1, 3, 10, 15), minutes=30, repeat_days=[3])
    start, end = event.occurrence_window(date(2024, 1, 10))
    assert start == utc(2024, 1, 10, 10, 15)
    assert end == utc(2024, 1, 10, 10, 45)


def test_occurrence_window_for_naive_event():
    event = CalendarEvent(
        id="naive", title="naive",
        start=datetime(2024, 1, 3, 10, 0), end=datetime(2024, 1, 3, 11, 0),
    )
    assert event.occurrence_window(date(2024, 1, 5)) == (
        datetime(2024, 1, 5, 10, 0), datetime(2024, 1, 5, 11, 0),
    )


def test_events_are_immutable_values(make_event):
    event = make_event(utc(2024, 1, 3, 10, 0), id="a", guests=(Guest("Ann", "ann@example.com"),))
    same = make_event(utc(2024, 1, 3, 10, 0), id="a", guests=(Guest("Ann", "ann@example.com"),))
    assert event == same
    assert hash(event) == hash(same)
    assert "a" in repr(event)


def test_weekly_recurrence_bound():
    rule = WeeklyRecurrence(days={1}, until=date(2024, 1, 15))
    assert rule.is_within_bound(date(2024, 1, 15))
    assert not rule.is_within_bound(date(2024, 1, 16))
    assert rule.includes_weekday(1)
    assert not rule.includes_weekday(2)
