"""
Time helpers

Timestamps are stored as naive UTC. Calendar-day logic (streaks, daily
challenges) is evaluated in the single zone named by settings.TIMEZONE.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.config import settings


def utcnow() -> datetime:
    """Current time as naive UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def get_zone(name: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(name or settings.TIMEZONE)


def to_local(value: datetime, tz: ZoneInfo) -> datetime:
    """Interpret a naive UTC (or aware) datetime in the given zone"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def calendar_days_between(earlier: datetime, later: datetime, tz: ZoneInfo) -> int:
    """Whole calendar days from earlier to later, as seen in tz"""
    return (to_local(later, tz).date() - to_local(earlier, tz).date()).days


def day_window(now: datetime, tz: ZoneInfo):
    """
    Return (start, end) of the calendar day containing now, as naive UTC

    The window is half-open: start <= t < end.
    """
    local_midnight = to_local(now, tz).replace(hour=0, minute=0, second=0, microsecond=0)
    # Add the day on the wall clock so DST days keep their real length
    next_midnight = (local_midnight.replace(tzinfo=None) + timedelta(days=1)).replace(tzinfo=tz)
    start = local_midnight.astimezone(timezone.utc).replace(tzinfo=None)
    end = next_midnight.astimezone(timezone.utc).replace(tzinfo=None)
    return start, end
