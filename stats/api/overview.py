"""API routes for overall statistics and the journey map."""

import logging

from fastapi import APIRouter

from core.api import api_route
from core.auth import CurrentUserId
from stats.services import MapService, StatsService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/stats")
@api_route(logger)
async def get_overview(user_id: CurrentUserId):
    """Totals over all journeys plus the map payload."""
    return await StatsService.get_overview(user_id)


@router.get("/api/stats/map")
@api_route(logger)
async def get_journey_map(user_id: CurrentUserId):
    """GeoJSON lines of every travelled section and their bounding box."""
    return await MapService.get_journey_map(user_id)
