"""
Date and Time utilities

Timestamp formats used by Xtream-style responses. All values are UTC.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def to_epoch_seconds(value: datetime) -> int:
    """Convert datetime to whole Unix seconds"""
    return int(value.timestamp())


def to_iso8601(value: datetime) -> str:
    """
    Format datetime as ISO8601 with millisecond precision and a 'Z' suffix

    Args:
        value: Timezone-aware datetime

    Returns:
        String like '2025-10-09T12:30:00.000Z'
    """
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def to_added_format(value: datetime) -> str:
    """Format datetime as 'YYYY-MM-DD HH:MM:SS' in UTC"""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
