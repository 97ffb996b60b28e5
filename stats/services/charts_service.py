"""Business logic for the period charts (journey counts and distance)."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Any

from config import STATS_TIMEZONE
from date_utils import get_current_utc_time
from db.aggregation import aggregate_to_list
from db.models import Journey
from journeys.services.distance import calculate_journey_distance
from stats.models import Bucket, Period, PeriodCharts
from stats.services.periods import bucket_key, is_monthly, labels_for, window_start

logger = logging.getLogger(__name__)


def _label_of(moment: Any, period: Period, tz_name: str) -> str | None:
    key = bucket_key(moment, period, tz_name)
    return key.isoformat() if key is not None else None


class ChartsService:
    """Service class for period-bucketed journey statistics."""

    @staticmethod
    def build_count_pipeline(
        user_id: str,
        period: Period,
        start: datetime,
        tz_name: str = STATS_TIMEZONE,
    ) -> list[dict[str, Any]]:
        """Pipeline counting a user's journeys per day (or month) since ``start``."""
        unit = "month" if is_monthly(period) else "day"
        truncated = {
            "$dateTrunc": {
                "date": "$departureTime",
                "unit": unit,
                "timezone": tz_name,
            },
        }
        return [
            {"$match": {"userId": user_id, "departureTime": {"$gte": start}}},
            {"$group": {"_id": truncated, "value": {"$sum": 1}}},
            {"$project": {"_id": 0, "label": "$_id", "value": 1}},
            {"$sort": {"label": 1}},
        ]

    @staticmethod
    def fill_count_buckets(
        labels: list[str],
        rows: list[dict[str, Any]],
        period: Period,
        tz_name: str = STATS_TIMEZONE,
    ) -> list[Bucket]:
        """Map grouped ``{label, value}`` rows onto ``labels``, zero-filling gaps."""
        counts: dict[str, int] = defaultdict(int)
        for row in rows:
            label = _label_of(row.get("label"), period, tz_name)
            if label is None:
                logger.warning("Ignoring count row with unreadable label: %s", row)
                continue
            counts[label] += int(row.get("value") or 0)

        return [Bucket(label=label, value=counts.get(label, 0)) for label in labels]

    @staticmethod
    def fill_distance_buckets(
        labels: list[str],
        journeys: list[Journey],
        period: Period,
        tz_name: str = STATS_TIMEZONE,
    ) -> list[Bucket]:
        """Sum journey distances per bucket; buckets without journeys are 0."""
        totals: dict[str, float] = defaultdict(float)
        for journey in journeys:
            label = _label_of(journey.departureTime, period, tz_name)
            if label is None:
                continue
            totals[label] += calculate_journey_distance(journey.sections)

        return [
            Bucket(label=label, value=round(totals.get(label, 0.0), 3))
            for label in labels
        ]

    @staticmethod
    async def fetch_window_journeys(user_id: str, start: datetime) -> list[Journey]:
        """All of the user's journeys departing at or after ``start``."""
        return await Journey.find(
            Journey.userId == user_id,
            Journey.departureTime >= start,
        ).to_list()

    @staticmethod
    async def get_period_charts(
        user_id: str,
        period: Period,
        now: datetime | None = None,
        tz_name: str = STATS_TIMEZONE,
    ) -> PeriodCharts:
        """
        Journey counts and travelled distance per bucket of ``period``.

        Runs one grouped count query and one detail query; database errors
        are not handled here.

        Args:
            user_id: Owner of the journeys
            period: week, month or year
            now: Reference time (defaults to the current time)
            tz_name: Timezone in which buckets are calendar days/months

        Returns:
            PeriodCharts with both series aligned by bucket index
        """
        period = Period(period)
        now = now or get_current_utc_time()
        labels = labels_for(period, now, tz_name)
        start = window_start(period, now, tz_name)

        rows = await aggregate_to_list(
            Journey,
            ChartsService.build_count_pipeline(user_id, period, start, tz_name),
        )
        journey_count = ChartsService.fill_count_buckets(labels, rows, period, tz_name)

        journeys = await ChartsService.fetch_window_journeys(user_id, start)
        distance_count = ChartsService.fill_distance_buckets(
            labels, journeys, period, tz_name
        )

        logger.debug(
            "Built %s charts for user %s: %d count rows, %d journeys",
            period.value,
            user_id,
            len(rows),
            len(journeys),
        )
        return PeriodCharts(journeyCount=journey_count, distanceCount=distance_count)
