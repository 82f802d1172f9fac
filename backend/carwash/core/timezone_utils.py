"""
Timezone utilities for the car-wash platform.

Instants are stored in UTC. Worker schedules are wall-clock times in the
business timezone.
"""

from datetime import datetime, timezone

import pytz

from .config import settings


def get_business_timezone() -> pytz.BaseTzInfo:
    return pytz.timezone(settings.business_timezone)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    SQLite drops tzinfo on the way back, so naive values are assumed UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def from_client_time(dt: datetime) -> datetime:
    """
    Normalize a client-supplied datetime to aware UTC.

    Values without an offset are wall-clock times in the business timezone.
    """
    if dt.tzinfo is None:
        dt = get_business_timezone().localize(dt)
    return dt.astimezone(timezone.utc)


def to_business_time(dt: datetime) -> datetime:
    """Convert an instant to the business timezone."""
    return ensure_utc(dt).astimezone(get_business_timezone())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
