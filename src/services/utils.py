"""Shared helpers for service modules."""
from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Return a timezone-aware datetime.

    Some backends (SQLite) hand back naive datetimes for TIMESTAMP WITH TIME ZONE
    columns; those values were written as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
