"""GeoJSON line geometry of a user's journeys for the map view."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from core.spatial import GeometryService, iter_feature_coordinates
from db.models import Journey

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class MapService:
    """Builds map features and the viewport that frames them."""

    @staticmethod
    def build_line_features(journeys: Iterable[Journey]) -> dict[str, Any]:
        """One LineString feature per journey section.

        Sections that do not reach two distinct positions are left out,
        since they have no line to draw.
        """
        features: list[dict[str, Any]] = []
        for journey in journeys:
            journey_id = str(journey.id) if journey.id is not None else None
            for index, section in enumerate(journey.sections):
                geometry = GeometryService.geometry_from_coordinate_pairs(
                    (station_pass.lon_lat() for station_pass in section.passes),
                    allow_point=False,
                    dedupe=True,
                )
                if geometry is None:
                    logger.debug(
                        "No line for section %d of journey %s", index, journey_id
                    )
                    continue
                features.append(
                    GeometryService.feature_from_geometry(
                        geometry,
                        {"journeyId": journey_id, "sectionIndex": index},
                    ),
                )
        return GeometryService.feature_collection(features)

    @staticmethod
    def bounding_box(collection: dict[str, Any]) -> list[float] | None:
        """``[min_lon, min_lat, max_lon, max_lat]`` of all features, None if empty."""
        return GeometryService.bounding_box(iter_feature_coordinates(collection))

    @staticmethod
    def map_payload(journeys: Iterable[Journey]) -> dict[str, Any]:
        geojson = MapService.build_line_features(journeys)
        return {"geojson": geojson, "bbox": MapService.bounding_box(geojson)}

    @staticmethod
    async def get_journey_map(user_id: str) -> dict[str, Any]:
        """Map features of all the user's journeys plus their bounding box."""
        journeys = await Journey.find(Journey.userId == user_id).to_list()
        payload = MapService.map_payload(journeys)
        logger.debug(
            "Built %d map features for user %s",
            len(payload["geojson"]["features"]),
            user_id,
        )
        return payload
