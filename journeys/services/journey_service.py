"""Business logic for saving, listing and deleting journeys."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from beanie import PydanticObjectId
from bson.errors import InvalidId

from core.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from date_utils import ensure_utc
from db.models import Journey
from journeys.services.distance import calculate_journey_distance

if TYPE_CHECKING:
    from datetime import datetime

    from journeys.models import JourneyCreateRequest

logger = logging.getLogger(__name__)


def connection_key(
    departure: datetime,
    departure_station: str | None,
    arrival: datetime | None,
    arrival_station: str | None,
) -> str:
    """Departure time and station followed by arrival time and station."""
    arrival_iso = arrival.isoformat() if arrival is not None else ""
    return (
        f"{departure.isoformat()}{departure_station or ''}"
        f"{arrival_iso}{arrival_station or ''}"
    )


class JourneyService:
    """Service class for journey CRUD operations scoped to one user."""

    @staticmethod
    async def create_journey(
        user_id: str,
        payload: JourneyCreateRequest,
    ) -> Journey:
        """Validate and store a journey for ``user_id``.

        Raises:
            ValidationException: If the arrival precedes the departure.
            DuplicateResourceException: If the user already saved the
                same connection.
        """
        departure = ensure_utc(payload.departureTime)
        arrival = ensure_utc(payload.arrivalTime)
        if arrival is not None and arrival < departure:
            msg = "Arrival time must not be before departure time"
            raise ValidationException(
                msg,
                {"departureTime": departure.isoformat(), "arrivalTime": arrival.isoformat()},
            )

        key = connection_key(
            departure,
            payload.departureStation,
            arrival,
            payload.arrivalStation,
        )
        existing = await Journey.find_one(
            Journey.userId == user_id,
            Journey.connectionKey == key,
        )
        if existing is not None:
            msg = "This connection is already saved"
            raise DuplicateResourceException(msg, {"journeyId": str(existing.id)})

        duration = payload.duration
        if duration is None and arrival is not None:
            duration = (arrival - departure).total_seconds()

        journey = Journey(
            connectionKey=key,
            userId=user_id,
            departureTime=departure,
            arrivalTime=arrival,
            duration=duration,
            departureStation=payload.departureStation,
            arrivalStation=payload.arrivalStation,
            sections=payload.sections,
        )
        await journey.insert()
        logger.info(
            "Saved journey %s for user %s (%d sections)",
            journey.id,
            user_id,
            len(journey.sections),
        )
        return journey

    @staticmethod
    async def list_journeys(
        user_id: str,
        limit: int = 50,
        skip: int = 0,
    ) -> list[Journey]:
        """Return the user's journeys, newest departure first."""
        return (
            await Journey.find(Journey.userId == user_id)
            .sort(-Journey.departureTime)
            .skip(skip)
            .limit(limit)
            .to_list()
        )

    @staticmethod
    async def get_journey(user_id: str, journey_id: str) -> Journey:
        """Fetch one of the user's journeys.

        Journeys owned by someone else are reported as not found.
        """
        try:
            object_id = PydanticObjectId(journey_id)
        except (InvalidId, TypeError) as e:
            msg = f"Journey {journey_id} not found"
            raise ResourceNotFoundException(msg) from e

        journey = await Journey.get(object_id)
        if journey is None or journey.userId != user_id:
            msg = f"Journey {journey_id} not found"
            raise ResourceNotFoundException(msg)
        return journey

    @staticmethod
    async def delete_journey(user_id: str, journey_id: str) -> None:
        journey = await JourneyService.get_journey(user_id, journey_id)
        await journey.delete()
        logger.info("Deleted journey %s for user %s", journey_id, user_id)

    @staticmethod
    def serialize_journey(journey: Journey) -> dict[str, Any]:
        """JSON-ready dict of a journey including its computed distance."""
        data = journey.model_dump(mode="json", exclude={"id", "revision_id"})
        data["id"] = str(journey.id) if journey.id is not None else None
        data["distance"] = round(calculate_journey_distance(journey.sections), 3)
        return data
