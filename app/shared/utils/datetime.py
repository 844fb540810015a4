"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def epoch_millis(dt: datetime | None = None) -> int:
    """
    Return milliseconds since the Unix epoch for dt (default: now).

    Used as a fallback version number when the sequential counter
    cannot be computed.

    Args:
        dt: Optional datetime; naive values are treated as UTC

    Returns:
        Integer milliseconds
    """
    if dt is None:
        dt = utc_now()
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)
