"""
Journey management package.

The package is organized into:
- api/: API endpoint handlers
- services/: Business logic (CRUD, distance)
- models.py: Request models
- search_state.py: Per-session connection search state
"""

from fastapi import APIRouter

from journeys.api import crud
from journeys.search_state import JourneySearchState

router = APIRouter()
router.include_router(crud.router, tags=["journeys"])

__all__ = ["JourneySearchState", "router"]
