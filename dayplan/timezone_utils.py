"""
Timezone utilities for Dayplan.

Provides the local-time conversion primitive used by the occurrence resolver.
Event instants are stored timezone-aware (usually UTC) and reduced to local
calendar dates and hours here. Naive datetimes are taken as local wall time.
"""

from datetime import datetime, date
import time as _time
import pytz


# Default timezone - can be overridden by config
_local_timezone_name: str = "UTC"


def set_timezone(timezone_name: str):
    """Set the local timezone for the application."""
    global _local_timezone_name
    _local_timezone_name = timezone_name


def get_timezone_name() -> str:
    """Get the configured local timezone name."""
    return _local_timezone_name


def get_local_timezone():
    """
    Get the local timezone as a pytz timezone object.

    Returns:
        pytz timezone object for the configured local timezone.
    """
    try:
        return pytz.timezone(_local_timezone_name)
    except pytz.UnknownTimeZoneError:
        # Fallback: try system timezone name
        try:
            return pytz.timezone(_time.tzname[0])
        except pytz.UnknownTimeZoneError:
            # Last resort: calculate offset and use fixed offset timezone
            is_dst = _time.localtime().tm_isdst
            if is_dst:
                offset_seconds = -_time.altzone
            else:
                offset_seconds = -_time.timezone
            return pytz.FixedOffset(offset_seconds // 60)


def to_local_datetime(dt: datetime) -> datetime:
    """
    Convert an aware datetime to the local timezone.

    Args:
        dt: A datetime object, typically in UTC with tzinfo set.

    Returns:
        A timezone-aware datetime in the local timezone.
        If input has no tzinfo, returns it unchanged.
    """
    if dt.tzinfo is not None:
        local_tz = get_local_timezone()
        return dt.astimezone(local_tz)
    return dt


def localize(day: date, hour: int = 0, minute: int = 0) -> datetime:
    """Build an aware local datetime for a wall-clock time on a calendar day."""
    naive = datetime(day.year, day.month, day.day, hour, minute)
    return get_local_timezone().localize(naive)


def to_local_date(value) -> date:
    """
    Reduce a date or datetime to its local calendar date.

    Plain dates are returned unchanged; datetimes are converted to the
    local timezone first.
    """
    if isinstance(value, datetime):
        return to_local_datetime(value).date()
    return value


def to_local_hour(dt: datetime) -> float:
    """
    Convert datetime to local timezone and return hour as float.

    Args:
        dt: A datetime object.

    Returns:
        Hour as float (e.g., 14.5 for 14:30).
    """
    local_dt = to_local_datetime(dt)
    return local_dt.hour + local_dt.minute / 60.0


def local_today(now: datetime = None) -> date:
    """Get today's date in the local timezone."""
    if now is None:
        now = datetime.now(pytz.UTC)
    return to_local_date(now)
