"""Timezone utilities for transaction timestamps and reporting."""

from datetime import datetime

import pytz

UTC = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Naive datetimes are stored as UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def to_reporting_tz(dt: datetime, tz_name: str) -> datetime:
    """Convert a datetime to the named reporting timezone."""
    return to_utc(dt).astimezone(pytz.timezone(tz_name))
