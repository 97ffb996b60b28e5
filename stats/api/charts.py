"""API routes for period charts."""

import logging

from fastapi import APIRouter

from core.api import api_route
from core.auth import CurrentUserId
from stats.models import Period, PeriodCharts
from stats.services import ChartsService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/charts/period", response_model=PeriodCharts)
@api_route(logger)
async def get_period_charts(period: Period, user_id: CurrentUserId):
    """Journey counts and distance per day (week, month) or month (year)."""
    return await ChartsService.get_period_charts(user_id, period)
