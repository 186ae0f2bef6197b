"""
Time helpers for the footer deployment line.

Timestamps arrive from the GitHub API as ISO 8601 strings (usually with a
trailing "Z"). Elapsed time is always measured against UTC wall-clock time.
"""

from datetime import datetime, timezone
from typing import Optional

UNKNOWN_TIME = "unknown time"


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Args:
        value: Timestamp string such as "2024-05-01T12:00:00Z"

    Returns:
        Aware datetime, or None when the value is missing or unparseable
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        # GitHub timestamps are UTC; treat naive values the same way
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_time_ago(iso: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Render a timestamp relative to now in its largest whole unit.

    Args:
        iso: ISO 8601 timestamp, or None/empty when unknown
        now: Reference time, defaults to current UTC wall-clock time

    Returns:
        Text such as "1 day ago", "3 hours ago" or "45 seconds ago";
        "unknown time" when the timestamp is missing or unparseable
    """
    then = parse_iso_timestamp(iso)
    if then is None:
        return UNKNOWN_TIME

    if now is None:
        now = utc_now()

    seconds = max(0, int((now - then).total_seconds()))
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    if minutes > 0:
        return _plural(minutes, "minute")
    return _plural(seconds, "second")
