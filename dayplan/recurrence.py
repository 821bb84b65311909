"""
Recurrence end dates derived from a "repeat for" choice.

Event creation offers a duration (a week, a month, ...) instead of an end
date. This module turns that choice into the explicit inclusive end date the
resolver honours. The resolver itself never guesses a duration.
"""

import calendar
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, Optional, Union

from .event import WeeklyRecurrence
from .month_grid import weekday_index
from .timezone_utils import to_local_date


class RepeatDuration(Enum):
    WEEK = "week"
    TWO_WEEKS = "2weeks"
    MONTH = "month"
    THREE_MONTHS = "3months"
    SIX_MONTHS = "6months"


def add_months(day: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month."""
    carry, month0 = divmod(day.month - 1 + months, 12)
    year = day.year + carry
    month = month0 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _period_end(origin: date, duration: RepeatDuration) -> date:
    if duration is RepeatDuration.WEEK:
        end = origin + timedelta(weeks=1)
    elif duration is RepeatDuration.TWO_WEEKS:
        end = origin + timedelta(weeks=2)
    elif duration is RepeatDuration.MONTH:
        end = add_months(origin, 1)
    elif duration is RepeatDuration.THREE_MONTHS:
        end = add_months(origin, 3)
    else:
        end = add_months(origin, 6)
    return end - timedelta(days=1)


def repeat_until_for_duration(
    start: Union[date, datetime],
    repeat_days: Iterable[int],
    duration: Union[RepeatDuration, str]
) -> date:
    """
    Compute the inclusive end date of a series repeating for a duration.

    The period ends the day before the same date one duration later. The
    end date then moves back to the last repeat day in that period, but
    never before the origin date.
    """
    duration = RepeatDuration(duration)
    origin = to_local_date(start)
    days = set(repeat_days)

    current = _period_end(origin, duration)
    while weekday_index(current) not in days and current > origin:
        current -= timedelta(days=1)
    return current


def weekly_recurrence(
    start: Union[date, datetime],
    repeat_days: Iterable[int],
    duration: Optional[Union[RepeatDuration, str]] = None
) -> WeeklyRecurrence:
    """Build a weekly rule, bounded when a duration is given."""
    days = frozenset(repeat_days)
    until = None
    if duration is not None:
        until = repeat_until_for_duration(start, days, duration)
    return WeeklyRecurrence(days=days, until=until)
