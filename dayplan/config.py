"""
Configuration parser for Dayplan.

Handles TOML file parsing into dataclasses and installs the timezone and
layout settings used by the resolver and the position mapping.
"""

import tomllib
import os
import sys
from datetime import datetime
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] CONFIG: {msg}", file=sys.stderr)


@dataclass
class LayoutConfig:
    """Configuration for time-grid placement."""
    hour_height: int = 64  # Length of one hour slot in day/week view
    min_event_height: int = 20  # Shortest extent an event is drawn with


@dataclass
class FeedConfig:
    """Configuration for a read-only ICS feed."""
    name: str
    url: str
    calendar_id: Optional[str] = None


@dataclass
class Config:
    """Main configuration container for Dayplan."""

    timezone: str = "UTC"
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    feeds: list[FeedConfig] = field(default_factory=list)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'dayplan' / 'dayplan.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a configuration from parsed TOML data."""
        # Parse General section
        general = data.get('General', {})
        timezone = general.get('timezone', cls.timezone)

        # Parse Layout section
        layout_data = data.get('Layout', {})
        layout = LayoutConfig(
            hour_height=layout_data.get('hour_height', LayoutConfig.hour_height),
            min_event_height=layout_data.get('min_event_height', LayoutConfig.min_event_height),
        )

        # Parse feeds
        # Supports both [Feed.Name] and [Feed] with nested sub-tables
        feeds = []
        for key, value in data.items():
            if not isinstance(value, dict):
                continue

            # Format 1: [Feed.Name] written as a dotted key
            if key.startswith('Feed.'):
                feed = cls._parse_feed(key.split('.', 1)[1], value)
                if feed:
                    feeds.append(feed)

            # Format 2: [Feed] with nested [Feed.Name] sub-tables
            elif key == 'Feed':
                for sub_key, sub_value in value.items():
                    if isinstance(sub_value, dict):
                        feed = cls._parse_feed(sub_key, sub_value)
                        if feed:
                            feeds.append(feed)

        return cls(timezone=timezone, layout=layout, feeds=feeds)

    @staticmethod
    def _parse_feed(feed_id: str, value: dict) -> Optional[FeedConfig]:
        url = value.get('url', '')
        if not url:
            _debug_print(f"Feed '{feed_id}' has no url, skipping")
            return None
        return FeedConfig(
            name=value.get('name', feed_id),
            url=url,
            calendar_id=value.get('calendar_id', feed_id),
        )

    def apply(self):
        """Install timezone and layout settings process-wide."""
        from .timezone_utils import set_timezone
        from .layout import set_layout_config

        set_timezone(self.timezone)
        set_layout_config(self.layout)
