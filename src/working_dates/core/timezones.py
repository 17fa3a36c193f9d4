"""
Timezone conversion helpers.

The engine works on business-local wall-clock time; the API speaks UTC.
"""

from datetime import datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo


def now_utc() -> datetime:
    """Get the current UTC datetime."""
    return datetime.now(timezone.utc)


@lru_cache(maxsize=8)
def get_zone(name: str) -> ZoneInfo:
    """Load (and cache) a timezone by IANA name."""
    return ZoneInfo(name)


def to_local(instant: datetime, zone_name: str) -> datetime:
    """
    Convert a UTC instant to business-local time.

    Naive datetimes are taken as UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(get_zone(zone_name))


def to_utc(instant: datetime, zone_name: str) -> datetime:
    """
    Convert a business-local instant back to UTC.

    Naive datetimes are taken as business-local wall-clock time.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=get_zone(zone_name))
    return instant.astimezone(timezone.utc)


def format_utc_iso(instant: datetime) -> str:
    """Format an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc_instant = instant.astimezone(timezone.utc)
    return utc_instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_instant.microsecond // 1000:03d}Z"
