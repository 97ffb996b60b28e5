"""API routes for journey CRUD operations."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from core.api import api_route
from core.auth import CurrentUserId
from journeys.models import JourneyCreateRequest
from journeys.services import JourneyService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/api/journeys",
    status_code=status.HTTP_201_CREATED,
    tags=["Journeys API"],
)
@api_route(logger)
async def create_journey(payload: JourneyCreateRequest, user_id: CurrentUserId):
    """Save a journey for the current user."""
    journey = await JourneyService.create_journey(user_id, payload)
    return {
        "status": "success",
        "journey": JourneyService.serialize_journey(journey),
    }


@router.get("/api/journeys", tags=["Journeys API"])
@api_route(logger)
async def list_journeys(
    user_id: CurrentUserId,
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    skip: Annotated[int, Query(ge=0)] = 0,
):
    """List the current user's journeys, newest first."""
    journeys = await JourneyService.list_journeys(user_id, limit=limit, skip=skip)
    return {
        "status": "success",
        "journeys": [JourneyService.serialize_journey(j) for j in journeys],
    }


@router.get("/api/journeys/{journey_id}", tags=["Journeys API"])
@api_route(logger)
async def get_journey(journey_id: str, user_id: CurrentUserId):
    """Get a single journey of the current user."""
    journey = await JourneyService.get_journey(user_id, journey_id)
    return {
        "status": "success",
        "journey": JourneyService.serialize_journey(journey),
    }


@router.delete("/api/journeys/{journey_id}", tags=["Journeys API"])
@api_route(logger)
async def delete_journey(journey_id: str, user_id: CurrentUserId):
    """Delete a journey of the current user."""
    await JourneyService.delete_journey(user_id, journey_id)
    return {
        "status": "success",
        "message": "Journey deleted successfully",
    }
