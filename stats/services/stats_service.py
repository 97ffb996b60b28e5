"""Business logic for the all-time statistics overview."""

from __future__ import annotations

import logging
from typing import Any

from db.models import Journey
from journeys.services.distance import calculate_journey_distance
from stats.services.map_service import MapService

logger = logging.getLogger(__name__)


class StatsService:
    """Service class for overall journey statistics."""

    @staticmethod
    def summarize(journeys: list[Journey]) -> dict[str, Any]:
        """Totals over ``journeys`` together with their map payload."""
        total_distance = sum(
            (calculate_journey_distance(j.sections) for j in journeys), 0.0
        )
        total_duration = sum((j.duration or 0.0 for j in journeys), 0.0)
        return {
            "journeyCount": len(journeys),
            "totalDistance": round(total_distance, 3),
            "totalDuration": total_duration,
            **MapService.map_payload(journeys),
        }

    @staticmethod
    async def get_overview(user_id: str) -> dict[str, Any]:
        journeys = await Journey.find(Journey.userId == user_id).to_list()
        return StatsService.summarize(journeys)
