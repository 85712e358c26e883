"""Timezone helpers for voting-trend calendar-day boundaries."""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo


def analytics_resolve_trend_date(created_at: datetime, trend_timezone: str | None = None) -> str:
    """Resolve the calendar date a vote falls on for trend bucketing.

    Args:
        created_at: Offset-aware vote creation timestamp.
        trend_timezone: Optional IANA zone name; the host local zone is used when None.

    Returns:
        str: Calendar date in YYYY-MM-DD format.

    Raises:
        ValueError: Raised when the timestamp is offset-naive or the zone is unknown.
    """

    if created_at.tzinfo is None or created_at.utcoffset() is None:
        raise ValueError("created_at must be offset-aware")

    if trend_timezone is None:
        return created_at.astimezone().date().isoformat()
    return created_at.astimezone(ZoneInfo(trend_timezone)).date().isoformat()


def analytics_resolve_trend_window(as_of_utc: datetime, window_days: int) -> tuple[datetime, datetime]:
    """Resolve the inclusive trailing window ending at the reference instant.

    Args:
        as_of_utc: Offset-aware reference instant.
        window_days: Window length in days.

    Returns:
        tuple[datetime, datetime]: Inclusive (start, end) bounds.

    Raises:
        ValueError: Raised when inputs are invalid.
    """

    if as_of_utc.tzinfo is None or as_of_utc.utcoffset() is None:
        raise ValueError("as_of_utc must be offset-aware")
    if window_days < 1:
        raise ValueError("window_days must be positive")
    return as_of_utc - timedelta(days=window_days), as_of_utc


__all__ = ["analytics_resolve_trend_date", "analytics_resolve_trend_window"]
