"""Calendar selection and public-view filtering, applied after day selection."""

from typing import Iterable, Optional

from .event import CalendarEvent


def is_visible(
    event: CalendarEvent,
    selected_calendar_ids: set[str],
    known_calendar_ids: Optional[set[str]] = None,
    public_view: bool = False
) -> bool:
    """
    Decide whether an event is shown for the current calendar selection.

    In the public view, public events are always shown alongside the
    selected calendars. In the private view nothing is shown without a
    selection, and events whose calendar no longer exists stay visible.
    """
    if public_view:
        return event.is_public or event.calendar_id in selected_calendar_ids

    if not selected_calendar_ids:
        return False
    if known_calendar_ids is not None and event.calendar_id not in known_calendar_ids:
        return True
    return event.calendar_id in selected_calendar_ids


def filter_visible(
    events: Iterable[CalendarEvent],
    selected_calendar_ids: Iterable[str],
    known_calendar_ids: Optional[Iterable[str]] = None,
    public_view: bool = False
) -> list[CalendarEvent]:
    """Keep the visible events, in input order."""
    selected = set(selected_calendar_ids)
    known = set(known_calendar_ids) if known_calendar_ids is not None else None
    return [
        event for event in events
        if is_visible(event, selected, known, public_view)
    ]
