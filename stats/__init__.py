"""
Statistics package for journey charts, totals and the journey map.

The package is organized into:
- api/: API endpoint handlers
- services/: Business logic (bucketing, aggregation, map geometry)
- models.py: Period and response models
"""

from fastapi import APIRouter

from stats.api import charts, overview

router = APIRouter()
router.include_router(charts.router, tags=["charts"])
router.include_router(overview.router, tags=["stats"])

__all__ = ["router"]
