"""Timestamp parsing and human-readable duration formatting."""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime, timedelta, timezone
from typing import Any

from kss.constants.values import NOT_AVAILABLE


def parse_timestamp(timestamp: Any) -> datetime | None:
    """Parse kubernetes timestamp strings into aware datetimes."""
    if not isinstance(timestamp, str) or not timestamp:
        return None
    with suppress(ValueError, TypeError):
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


def format_duration(timestamp: str, now: datetime | None = None) -> str:
    """Convert a Kubernetes timestamp to an age like ``5m`` or ``3d``.

    Returns ``N/A`` for an empty timestamp and the raw value when it
    cannot be parsed.
    """
    if not timestamp:
        return NOT_AVAILABLE
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return timestamp
    seconds = int(((now or datetime.now(timezone.utc)) - parsed).total_seconds())
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def format_offset(offset: timedelta) -> str:
    """Format a relative offset as ``MM:SS`` or ``HH:MM:SS``."""
    total = max(0, int(offset.total_seconds()))
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def format_clock(moment: datetime) -> str:
    """Format a datetime as local wall-clock ``HH:MM:SS``."""
    return moment.astimezone().strftime("%H:%M:%S")
