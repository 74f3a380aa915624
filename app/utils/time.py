"""Utility functions for time handling.

Audit and API timestamps are UTC and timezone-aware. Broadcast instants are
a separate concern: naive datetimes passed to the schedule layer are read as
wall-clock time in the operating timezone.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def iso_now(*, timespec: str | None = None) -> str:
    """Return current UTC time as an ISO8601 string (timezone-aware)."""
    now = utc_now()
    if timespec:
        return now.isoformat(timespec=timespec)
    return now.isoformat()


def coerce_datetime(value: Any) -> datetime | None:
    """
    Coerce value to datetime, returning None on failure.

    Unlike a UTC normalizer, offsets are kept as given and naive values stay
    naive so the caller decides which clock they belong to.

    Args:
        value: ISO-8601 string or datetime to coerce

    Returns:
        Parsed datetime or None if invalid
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None
