"""
Event model for Dayplan.

A CalendarEvent is the single persisted record of an event series. Recurrence
is attached as an optional WeeklyRecurrence value; occurrences on later days
are derived by the resolver, never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime, date, timedelta
from typing import Optional

from .timezone_utils import to_local_datetime, to_local_date, localize


@dataclass(frozen=True)
class Guest:
    """An invitee of an event. Opaque to the resolver."""
    name: str
    email: str
    id: Optional[str] = None


@dataclass(frozen=True)
class WeeklyRecurrence:
    """
    Weekly recurrence rule.

    days holds weekday indices (0=Sunday..6=Saturday). until is the
    inclusive local end date; None means the series never ends.
    """
    days: frozenset[int] = frozenset()
    until: Optional[date] = None

    def __post_init__(self):
        # Accept any iterable of weekdays (list from JSON, set, tuple)
        if not isinstance(self.days, frozenset):
            object.__setattr__(self, 'days', frozenset(self.days))

    def includes_weekday(self, weekday: int) -> bool:
        return weekday in self.days

    def is_within_bound(self, day: date) -> bool:
        """Check the inclusive end bound. Unbounded rules accept every day."""
        return self.until is None or day <= self.until


@dataclass(frozen=True)
class CalendarEvent:
    """
    A schedulable event.

    start and end are instants. For repeating events their local time of day
    defines the daily occurrence window and the local date of start is the
    origin date, the first possible occurrence.
    """
    id: str
    title: str
    start: datetime
    end: datetime
    description: Optional[str] = None
    is_public: bool = False
    recurrence: Optional[WeeklyRecurrence] = None
    calendar_id: Optional[str] = None
    guests: tuple[Guest, ...] = field(default_factory=tuple)

    # ==================== Convenience Properties ====================

    @property
    def is_repeating(self) -> bool:
        """Check if this event has a recurrence rule."""
        return self.recurrence is not None

    @property
    def repeat_days(self) -> frozenset[int]:
        """Get the repeat weekdays (empty for single events)."""
        if self.recurrence is None:
            return frozenset()
        return self.recurrence.days

    @property
    def repeat_until(self) -> Optional[date]:
        """Get the inclusive recurrence end date, if any."""
        if self.recurrence is None:
            return None
        return self.recurrence.until

    @property
    def local_start(self) -> datetime:
        return to_local_datetime(self.start)

    @property
    def local_end(self) -> datetime:
        return to_local_datetime(self.end)

    @property
    def origin_date(self) -> date:
        """Local calendar date of the start instant."""
        return to_local_date(self.start)

    @property
    def duration(self) -> timedelta:
        """Get the event's duration. Negative for malformed events."""
        return self.end - self.start

    @property
    def duration_minutes(self) -> float:
        return self.duration.total_seconds() / 60.0

    # ==================== Occurrences ====================

    def occurrence_window(self, day: Optional[date] = None) -> tuple[datetime, datetime]:
        """
        Get the local start and end of the occurrence on the given day.

        The time of day comes from the original start; the duration is kept.
        Does not check whether the event actually occurs on that day.
        """
        local_start = self.local_start
        if day is None or day == local_start.date():
            return local_start, local_start + self.duration
        if local_start.tzinfo is None:
            start = datetime.combine(day, local_start.time())
        else:
            start = localize(day, local_start.hour, local_start.minute)
            start = start.replace(second=local_start.second, microsecond=local_start.microsecond)
        return start, start + self.duration

    def __repr__(self):
        return f"CalendarEvent(id={self.id!r}, title={self.title!r}, start={self.start})"
