"""Timezone-aware current time helpers."""

from datetime import date, datetime
from zoneinfo import ZoneInfo


def now_in(timezone_name: str) -> datetime:
    """Return the current time in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name))


def today_in(timezone_name: str) -> date:
    """Return the current calendar date in the given timezone."""
    return now_in(timezone_name).date()


def localize(value: datetime, timezone_name: str) -> datetime:
    """Express a timestamp in the given timezone.

    Naive values are read as wall-clock time in that zone.
    """
    zone = ZoneInfo(timezone_name)
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)
