"""Timestamp utilities for UTC handling and display.

Board APIs hand out ISO 8601 strings with offsets ("2024-03-01T12:30:00-05:00").
Listings keep those strings as-is; these helpers turn them into datetimes
only where a real instant is needed, such as relative "3 days ago" labels.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Return dt in UTC, treating naive datetimes as UTC already."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 datetime string to UTC datetime.

    Supports:
    - 2024-03-01T12:30:00Z
    - 2024-03-01T12:30:00-05:00
    - 2024-03-01T12:30:00
    - 2024-03-01

    Returns:
        Timezone-aware datetime in UTC, or None if the string is empty or unparseable

    Example:
        >>> parse_iso_datetime("2024-03-01T12:30:00-05:00").hour
        17
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        pass

    try:
        return ensure_utc(datetime.strptime(cleaned, "%Y-%m-%d"))
    except ValueError:
        return None


def format_relative(iso_string: Optional[str], now: Optional[datetime] = None) -> Optional[str]:
    """Describe how long ago a timestamp was ("5 minutes ago", "about 2 months ago").

    Returns None when the timestamp is missing or unparseable.
    """
    dt = parse_iso_datetime(iso_string)
    if dt is None:
        return None

    seconds = int(((now or utc_now()) - dt).total_seconds())
    future = seconds < 0
    seconds = abs(seconds)

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 60:
        phrase = "less than a minute"
    elif minutes < 60:
        phrase = _plural(minutes, "minute")
    elif hours < 24:
        phrase = f"about {_plural(hours, 'hour')}"
    elif days < 30:
        phrase = _plural(days, "day")
    elif days < 365:
        phrase = f"about {_plural(days // 30, 'month')}"
    else:
        phrase = f"about {_plural(days // 365, 'year')}"

    return f"in {phrase}" if future else f"{phrase} ago"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
