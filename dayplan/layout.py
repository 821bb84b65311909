"""
Position mapping for time-grid views.

Maps an occurrence to an offset and extent along a day column, in units of
the configured per-hour length. It plays no part in deciding occurrences.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .config import LayoutConfig
from .event import CalendarEvent
from .timezone_utils import to_local_hour

# Module-level layout config (set by Config.apply at startup)
_layout_config: LayoutConfig = LayoutConfig()


def set_layout_config(config: LayoutConfig):
    """Set the layout configuration for this module."""
    global _layout_config
    _layout_config = config


def get_layout_config() -> LayoutConfig:
    """Get the current layout configuration."""
    return _layout_config


@dataclass(frozen=True)
class EventPlacement:
    """Offset from the top of the day column and extent of an occurrence."""
    offset: float
    extent: float

    @property
    def bottom(self) -> float:
        return self.offset + self.extent


def vertical_offset(start: datetime, unit: float) -> float:
    """Offset of a start instant: whole hours plus the fraction from minutes."""
    return to_local_hour(start) * unit


def vertical_extent(start: datetime, end: datetime, unit: float, minimum: float) -> float:
    """Extent of a time span, never below minimum."""
    duration_minutes = (end - start).total_seconds() / 60
    return max((duration_minutes / 60) * unit, minimum)


def place_event(
    event: CalendarEvent,
    day: Optional[date] = None,
    unit: Optional[float] = None,
    minimum: Optional[float] = None
) -> EventPlacement:
    """
    Place an occurrence of an event in a day column.

    Args:
        event: The event to place
        day: Occurrence day (defaults to the origin date)
        unit: Length of one hour (defaults to the configured hour_height)
        minimum: Smallest extent (defaults to the configured min_event_height)
    """
    if unit is None:
        unit = _layout_config.hour_height
    if minimum is None:
        minimum = _layout_config.min_event_height

    start, end = event.occurrence_window(day)
    return EventPlacement(
        offset=vertical_offset(start, unit),
        extent=vertical_extent(start, end, unit, minimum),
    )
