"""
Timezone utilities for TapCard.

Analytics windows are computed in UTC; the "today" window starts at midnight
of the configured analytics timezone.
"""

from datetime import datetime, timedelta
from typing import Optional

import pytz


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(pytz.UTC)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive values are assumed to already be UTC (SQLite drops the offset).
    """
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt.astimezone(pytz.UTC)


def start_of_local_day(tz_name: str, now: Optional[datetime] = None) -> datetime:
    """
    Midnight of the current day in ``tz_name``, expressed in UTC.

    Args:
        tz_name: IANA timezone name
        now: Reference instant (defaults to the current time)

    Returns:
        Aware UTC datetime of the local day start
    """
    tz = pytz.timezone(tz_name)
    local_now = ensure_utc(now or utcnow()).astimezone(tz)
    local_midnight = tz.localize(datetime(local_now.year, local_now.month, local_now.day))
    return local_midnight.astimezone(pytz.UTC)


def days_ago(days: int, now: Optional[datetime] = None) -> datetime:
    """The instant ``days`` * 24h before ``now``, in UTC."""
    return ensure_utc(now or utcnow()) - timedelta(days=days)
