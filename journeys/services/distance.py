"""Travelled distance of a journey from its station passes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config import DISTANCE_UNIT
from core.spatial import GeometryService

if TYPE_CHECKING:
    from collections.abc import Iterable

    from db.models import JourneySection

logger = logging.getLogger(__name__)


def section_coordinates(section: JourneySection) -> list[list[float]]:
    """Ordered ``[lon, lat]`` positions of a section, adjacent duplicates collapsed.

    Passes without usable coordinates are skipped.
    """
    coords: list[list[float]] = []
    for index, station_pass in enumerate(section.passes):
        is_valid, pair = GeometryService.validate_coordinate_pair(
            station_pass.lon_lat()
        )
        if not is_valid or pair is None:
            logger.debug(
                "Skipping pass %d (%s) without valid coordinates",
                index,
                station_pass.stationName,
            )
            continue
        coords.append(pair)
    return GeometryService.dedupe_consecutive(coords)


def calculate_journey_distance(
    sections: Iterable[JourneySection],
    unit: str = DISTANCE_UNIT,
) -> float:
    """Sum of the section path lengths; sections with < 2 positions add 0."""
    return sum(
        (
            GeometryService.path_length(section_coordinates(section), unit=unit)
            for section in sections
        ),
        0.0,
    )
