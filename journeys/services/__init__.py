"""Journey services module."""

from journeys.services.distance import (
    calculate_journey_distance,
    section_coordinates,
)
from journeys.services.journey_service import JourneyService

__all__ = ["JourneyService", "calculate_journey_distance", "section_coordinates"]
