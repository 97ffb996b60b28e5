"""
Chart buckets for a period.

A period is covered by consecutive calendar buckets ending today:
7 days (week), 30 days (month) or 12 months (year). Buckets are plain
``date`` objects internally (the first day of the month for monthly
buckets) and ``YYYY-MM-DD`` strings on the wire.

Every timestamp is matched to its bucket through ``bucket_key`` so the
count series and the distance series can never disagree on which day or
month a journey belongs to.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from config import STATS_TIMEZONE
from date_utils import (
    get_current_utc_time,
    local_midnight_utc,
    parse_timestamp,
    to_local_date,
)
from stats.models import Period

logger = logging.getLogger(__name__)

DAYS_PER_PERIOD = {Period.WEEK: 7, Period.MONTH: 30}
MONTHS_PER_YEAR = 12


def is_monthly(period: Period) -> bool:
    return Period(period) is Period.YEAR


def bucket_dates_for(period: Period, today: date) -> list[date]:
    """Bucket start dates covering ``period`` up to ``today``, oldest first."""
    period = Period(period)
    if period is Period.YEAR:
        first_of_month = today.replace(day=1)
        return [
            first_of_month - relativedelta(months=offset)
            for offset in range(MONTHS_PER_YEAR - 1, -1, -1)
        ]

    days = DAYS_PER_PERIOD[period]
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def labels_for(
    period: Period,
    now: datetime | None = None,
    tz_name: str = STATS_TIMEZONE,
) -> list[str]:
    """Ordered ``YYYY-MM-DD`` labels for ``period`` ending at ``now``."""
    today = to_local_date(now or get_current_utc_time(), tz_name)
    return [day.isoformat() for day in bucket_dates_for(period, today)]


def window_start(
    period: Period,
    now: datetime | None = None,
    tz_name: str = STATS_TIMEZONE,
) -> datetime:
    """UTC instant at which the oldest bucket of ``period`` begins."""
    today = to_local_date(now or get_current_utc_time(), tz_name)
    return local_midnight_utc(bucket_dates_for(period, today)[0], tz_name)


def bucket_key(
    moment: datetime | date | str | None,
    period: Period,
    tz_name: str = STATS_TIMEZONE,
) -> date | None:
    """Bucket a timestamp falls into, or None if it cannot be read.

    Datetimes (and timestamp strings) are converted to ``tz_name`` before
    the calendar date is taken. Plain dates and ``YYYY-MM-DD`` strings are
    already calendar dates and are used as they are.
    """
    if moment is None:
        return None

    if isinstance(moment, str):
        try:
            day = date.fromisoformat(moment)
        except ValueError:
            parsed = parse_timestamp(moment)
            if parsed is None:
                return None
            day = to_local_date(parsed, tz_name)
    elif isinstance(moment, datetime):
        day = to_local_date(moment, tz_name)
    elif isinstance(moment, date):
        day = moment
    else:
        logger.warning("Unsupported bucket timestamp type %s", type(moment))
        return None

    if is_monthly(period):
        return day.replace(day=1)
    return day
