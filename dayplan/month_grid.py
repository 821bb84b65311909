"""Month grid and week/hour helpers. Pure date arithmetic, no event logic."""

from datetime import date, datetime, timedelta
from typing import Optional

from .timezone_utils import local_today, to_local_date

GRID_ROWS = 5
GRID_COLUMNS = 7
HOURS_PER_DAY = 24


def normalize_month(year: int, month_index: int) -> tuple[int, int]:
    """Return (year, month) with month 1-12 for a zero-based month index.

    Out-of-range indices roll over into adjacent years:
    -1 is December of the previous year, 12 is January of the next.
    """
    carry, month0 = divmod(month_index, 12)
    return year + carry, month0 + 1


def weekday_index(day: date) -> int:
    """Return the weekday with 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def generate_month_grid(year: int, month_index: int) -> list[list[date]]:
    """Return the 5×7 grid of dates for a month view.

    Weeks start on Sunday. The grid starts with the tail of the previous
    month and is filled contiguously for 35 days, so months that need a
    sixth row lose their last days.
    """
    y, m = normalize_month(year, month_index)
    first = date(y, m, 1)
    grid_start = first - timedelta(days=weekday_index(first))

    grid: list[list[date]] = []
    for row in range(GRID_ROWS):
        week_start = grid_start + timedelta(days=row * GRID_COLUMNS)
        grid.append([week_start + timedelta(days=col) for col in range(GRID_COLUMNS)])
    return grid


def week_days(day: date) -> list[date]:
    """Return the 7 days of the Sunday-started week containing day."""
    day = to_local_date(day)
    start = day - timedelta(days=weekday_index(day))
    return [start + timedelta(days=i) for i in range(GRID_COLUMNS)]


def hours_of_day() -> list[int]:
    """Return the hour slots of a time grid."""
    return list(range(HOURS_PER_DAY))


def is_current_day(day: date, now: Optional[datetime] = None) -> bool:
    """Check if day is today in the local timezone."""
    return to_local_date(day) == local_today(now)
