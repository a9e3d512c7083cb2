"""Timestamp helpers shared by the ORM models of every backend."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc_iso(value: datetime | None) -> str | None:
    """
    Convert a datetime to an ISO-8601 UTC string.

    SQLite does not store timezone information, so values read back from
    the database may be naive even though they were written in UTC.  Naive
    values are assumed to be UTC; aware values are converted.

    Args:
        value: A datetime instance, or ``None``.

    Returns:
        An ISO-8601 string in UTC, or ``None`` if the input was ``None``.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()
