"""Statistics services for business logic and data processing."""

from stats.services.charts_service import ChartsService
from stats.services.map_service import MapService
from stats.services.stats_service import StatsService

__all__ = [
    "ChartsService",
    "MapService",
    "StatsService",
]
