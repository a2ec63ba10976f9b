"""Datetime helpers shared across the application."""

from __future__ import annotations

from datetime import UTC, datetime

__all__ = ["display_datetime", "utc_now"]


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC value."""
    return datetime.now(tz=UTC)


def display_datetime(value: datetime | None) -> str | None:
    """Return a user-friendly local-time representation of ``value``."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone().strftime("%b %d, %Y %I:%M %p")
