"""
Spatial and geometry utilities.

Centralizes GeoJSON handling, coordinate validation and great-circle
distance calculations. Coordinates are ``[lon, lat]`` pairs throughout.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)


class GeometryService:
    """Authoritative geometry operations for the application."""

    EARTH_RADIUS_M = 6371000.0

    @staticmethod
    def validate_coordinate_pair(
        coord: Sequence[Any],
    ) -> tuple[bool, list[float] | None]:
        """Validate a [lon, lat] coordinate pair."""
        if not isinstance(coord, (list, tuple)) or len(coord) < 2:
            return False, None
        try:
            lon = float(coord[0])
            lat = float(coord[1])
        except (TypeError, ValueError, IndexError):
            return False, None
        if not (-180 <= lon <= 180 and -90 <= lat <= 90):
            return False, None
        return True, [lon, lat]

    @staticmethod
    def haversine_distance(
        lon1: float,
        lat1: float,
        lon2: float,
        lat2: float,
        unit: str = "meters",
    ) -> float:
        """Calculate the great-circle distance using the Haversine formula."""
        phi1 = math.radians(lat1)
        phi2 = math.radians(lat2)
        dphi = math.radians(lat2 - lat1)
        dlmb = math.radians(lon2 - lon1)
        a = (
            math.sin(dphi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
        )
        distance_m = (
            2 * GeometryService.EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))
        )
        if unit == "meters":
            return distance_m
        if unit == "miles":
            return distance_m / 1609.344
        if unit == "km":
            return distance_m / 1000.0
        msg = "Invalid unit. Use 'meters', 'miles', or 'km'."
        raise ValueError(msg)

    @staticmethod
    def dedupe_consecutive(
        coords: Iterable[list[float]],
    ) -> list[list[float]]:
        """Collapse runs of identical adjacent positions, keeping order.

        A position that reappears later, after a different one, is kept.
        """
        unique: list[list[float]] = []
        for coord in coords:
            if not unique or coord != unique[-1]:
                unique.append(coord)
        return unique

    @staticmethod
    def path_length(coords: Sequence[Sequence[float]], unit: str = "km") -> float:
        """Sum of the great-circle distances between consecutive positions."""
        total = 0.0
        for (lon1, lat1), (lon2, lat2) in zip(coords, coords[1:]):
            total += GeometryService.haversine_distance(
                lon1, lat1, lon2, lat2, unit=unit
            )
        return total

    @staticmethod
    def bounding_box(
        coords: Iterable[Sequence[float]],
    ) -> list[float] | None:
        """Return ``[min_lon, min_lat, max_lon, max_lat]`` or None if empty."""
        min_lon = min_lat = math.inf
        max_lon = max_lat = -math.inf
        seen = False
        for lon, lat in coords:
            seen = True
            min_lon = min(min_lon, lon)
            min_lat = min(min_lat, lat)
            max_lon = max(max_lon, lon)
            max_lat = max(max_lat, lat)
        if not seen:
            return None
        return [min_lon, min_lat, max_lon, max_lat]

    @staticmethod
    def geometry_from_coordinate_pairs(
        coords: Iterable[Sequence[Any]],
        *,
        allow_point: bool = True,
        dedupe: bool = False,
    ) -> dict[str, Any] | None:
        """Build a GeoJSON Point/LineString from coordinate pairs."""
        cleaned: list[list[float]] = []
        for coord in coords:
            is_valid, pair = GeometryService.validate_coordinate_pair(coord)
            if not is_valid or pair is None:
                continue
            cleaned.append(pair)

        if dedupe:
            cleaned = GeometryService.dedupe_consecutive(cleaned)

        if not cleaned:
            return None
        if len(cleaned) == 1:
            return {"type": "Point", "coordinates": cleaned[0]} if allow_point else None
        return {"type": "LineString", "coordinates": cleaned}

    @staticmethod
    def feature_from_geometry(
        geometry: dict[str, Any] | None,
        properties: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build a GeoJSON Feature from geometry and properties."""
        return {
            "type": "Feature",
            "geometry": geometry,
            "properties": properties or {},
        }

    @staticmethod
    def feature_collection(features: list[dict[str, Any]]) -> dict[str, Any]:
        """Build a GeoJSON FeatureCollection."""
        return {"type": "FeatureCollection", "features": features}


def iter_feature_coordinates(
    collection: dict[str, Any],
) -> Iterable[list[float]]:
    """Yield every position of the Point/LineString features in a collection."""
    for feature in collection.get("features") or []:
        geometry = (feature or {}).get("geometry") or {}
        coords = geometry.get("coordinates")
        if not coords:
            continue
        if geometry.get("type") == "Point":
            yield coords
        elif geometry.get("type") == "LineString":
            yield from coords
