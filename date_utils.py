"""
Centralized date and time utilities for the application.

All timestamps are handled as timezone-aware datetime objects, defaulting
to UTC. Statistics buckets are calendar dates taken in a named timezone;
``to_local_date`` is the conversion used for that.
"""

import logging
from datetime import UTC, date, datetime

import pytz
from dateutil import parser

logger = logging.getLogger(__name__)


def get_current_utc_time() -> datetime:
    """Return the current time as a timezone-aware datetime object in UTC."""
    return datetime.now(UTC)


def parse_timestamp(ts: str | datetime) -> datetime | None:
    """
    Parse a timestamp string (or datetime object) and ensure it is
    timezone-aware, defaulting to UTC.

    Args:
        ts: The timestamp to parse, either as an ISO 8601 string or a
            datetime object.

    Returns:
        A timezone-aware datetime object, or None if parsing fails.
    """
    if not ts:
        logger.debug("Received empty timestamp; returning None.")
        return None

    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            return ts.replace(tzinfo=UTC)
        return ts

    try:
        parsed_time = parser.isoparse(ts)
        if parsed_time.tzinfo is None:
            return parsed_time.replace(tzinfo=UTC)
        return parsed_time
    except (ValueError, TypeError) as e:
        logger.warning("Failed to parse timestamp '%s': %s", ts, e)
        return None


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return the datetime as an explicit UTC-aware value."""

    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_local_date(dt: datetime, tz_name: str) -> date:
    """Calendar date of ``dt`` in the named timezone (naive input is UTC)."""
    aware = ensure_utc(dt)
    return aware.astimezone(pytz.timezone(tz_name)).date()


def local_midnight_utc(day: date, tz_name: str) -> datetime:
    """UTC instant at which ``day`` starts in the named timezone."""
    tz = pytz.timezone(tz_name)
    local = tz.localize(datetime(day.year, day.month, day.day))
    return local.astimezone(UTC)
