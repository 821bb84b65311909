"""
Read-only ICS feeds.

Fetches raw VCALENDAR text over HTTP and hands it to ics_import. This is
the only module that performs network I/O.
"""

import hashlib
import sys
from datetime import datetime
from typing import Optional

import pytz
import requests

from .event import CalendarEvent
from .ics_import import events_from_ical


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] FEED: {msg}", file=sys.stderr)


class ICSFeed:
    """Handler for a remote ICS calendar feed."""

    def __init__(self, name: str, url: str, calendar_id: Optional[str] = None):
        """
        Initialize an ICS feed.

        Args:
            name: Display name for the feed
            url: URL to fetch the ICS file from
            calendar_id: Calendar reference given to imported events
                (defaults to an id derived from the URL)
        """
        self.name = name
        self.url = url
        self.id = self._generate_id(url)
        self.calendar_id = calendar_id or self.id

        self._raw_data: Optional[str] = None
        self._last_fetch: Optional[datetime] = None
        self._error: Optional[str] = None

    @staticmethod
    def _generate_id(url: str) -> str:
        """Generate a unique ID from the URL."""
        return hashlib.md5(url.encode()).hexdigest()[:12]

    def fetch(self, timeout: int = 30) -> bool:
        """
        Fetch the ICS file from the URL.

        Returns:
            True if successful, False otherwise (see error).
        """
        try:
            response = requests.get(
                self.url,
                timeout=timeout,
                headers={
                    'User-Agent': 'Dayplan-Calendar/1.0',
                    'Accept': 'text/calendar'
                }
            )
            response.raise_for_status()

            # Ensure proper UTF-8 decoding
            response.encoding = 'utf-8'
            self._raw_data = response.text
            self._last_fetch = datetime.now(pytz.UTC)
            self._error = None
            return True

        except requests.RequestException as e:
            self._error = f"Network error: {e}"
            _debug_print(f"{self.name}: {self._error}")
            return False
        except Exception as e:
            self._error = f"Error: {e}"
            _debug_print(f"{self.name}: {self._error}")
            return False

    def get_ical_text(
        self,
        force_fetch: bool = False,
        cache_seconds: int = 300
    ) -> Optional[str]:
        """
        Get the raw VCALENDAR text, fetching when the cache is stale.

        Returns:
            Raw VCALENDAR text, or None if no fetch ever succeeded.
        """
        should_fetch = (
            force_fetch or
            self._raw_data is None or
            self._last_fetch is None or
            (datetime.now(pytz.UTC) - self._last_fetch).total_seconds() > cache_seconds
        )

        if should_fetch:
            self.fetch()

        return self._raw_data

    def get_events(self, force_fetch: bool = False) -> list[CalendarEvent]:
        """
        Get the feed's events.

        Empty when the feed could not be fetched or its body is not
        iCalendar; error then says why.
        """
        text = self.get_ical_text(force_fetch=force_fetch)
        if text is None:
            return []
        try:
            return events_from_ical(text, calendar_id=self.calendar_id)
        except ValueError as e:
            self._error = f"Parse error: {e}"
            _debug_print(f"{self.name}: {self._error}")
            return []

    @property
    def last_fetch(self) -> Optional[datetime]:
        return self._last_fetch

    @property
    def error(self) -> Optional[str]:
        return self._error
