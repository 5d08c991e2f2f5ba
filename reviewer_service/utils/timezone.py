"""Timezone utilities for consistent UTC handling across the application."""

from datetime import datetime
from typing import Optional
import pytz


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(pytz.UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to timezone-aware UTC.

    Columns are stored without timezone, so values read back from the
    database are naive; those are assumed to already be UTC.

    Args:
        dt: Datetime to normalize (can be naive or timezone-aware)

    Returns:
        Datetime in UTC, or None if dt is None
    """
    if dt is None:
        return None

    # If naive, assume UTC
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)

    return dt.astimezone(pytz.UTC)


def format_rfc3339(dt: Optional[datetime]) -> Optional[str]:
    """
    Format a datetime as RFC 3339 in UTC, e.g. "2025-11-20T14:03:07Z".

    Args:
        dt: Datetime to format

    Returns:
        Formatted string, or None if dt is None
    """
    if dt is None:
        return None

    return ensure_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")
