from datetime import datetime, timedelta

import pytest
import pytz

from dayplan.config import LayoutConfig
from dayplan.event import CalendarEvent, WeeklyRecurrence
from dayplan.layout import set_layout_config
from dayplan.timezone_utils import set_timezone


@pytest.fixture(autouse=True)
def reset_process_settings():
    """Every test starts in UTC with the default layout."""
    set_timezone("UTC")
    set_layout_config(LayoutConfig())
    yield
    set_timezone("UTC")
    set_layout_config(LayoutConfig())


@pytest.fixture
def amsterdam():
    set_timezone("Europe/Amsterdam")
    return pytz.timezone("Europe/Amsterdam")


@pytest.fixture
def make_event():
    """Factory for events starting at a UTC wall time."""
    counter = iter(range(1, 10_000))

    def _make(start, minutes=60, repeat_days=None, until=None, **kwargs):
        if start.tzinfo is None:
            start = pytz.UTC.localize(start)
        recurrence = None
        if repeat_days is not None:
            recurrence = WeeklyRecurrence(days=frozenset(repeat_days), until=until)
        event_id = kwargs.pop("id", f"evt-{next(counter)}")
        return CalendarEvent(
            id=event_id,
            title=kwargs.pop("title", event_id),
            start=start,
            end=start + timedelta(minutes=minutes),
            recurrence=recurrence,
            **kwargs,
        )

    return _make


def utc(*args) -> datetime:
    return pytz.UTC.localize(datetime(*args))
