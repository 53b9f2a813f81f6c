"""Core utility functions for Sticker Hook."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def client_version(day: date) -> str:
    """Format a date as the ``YYYYMMDD`` client version the catalog API expects.

    Args:
        day: The date to encode (usually today).

    Returns:
        str: Eight digit version string, e.g. ``"20240105"``.
    """
    return day.strftime("%Y%m%d")
