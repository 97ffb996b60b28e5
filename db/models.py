"""Beanie ODM document models for MongoDB collections.

Usage:
    from db.models import Journey

    # Find a user's journeys
    journeys = await Journey.find(Journey.userId == "user-1").to_list()

    # Insert a new document
    journey = Journey(userId="user-1", departureTime=..., sections=[...])
    await journey.insert()
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pymongo import ASCENDING, DESCENDING, IndexModel

from date_utils import get_current_utc_time, parse_timestamp


class StationPass(BaseModel):
    """A stop along one section of a journey.

    Coordinates come from the connections API as ``x`` = latitude and
    ``y`` = longitude. GeoJSON positions are therefore ``[y, x]``.
    """

    stationName: str | None = None
    stationCoordinateX: float | None = None
    stationCoordinateY: float | None = None

    model_config = ConfigDict(extra="allow")

    def lon_lat(self) -> list[float] | None:
        """Return ``[lon, lat]`` or None when a coordinate is missing."""
        if self.stationCoordinateX is None or self.stationCoordinateY is None:
            return None
        return [self.stationCoordinateY, self.stationCoordinateX]


class JourneySection(BaseModel):
    """One leg of a journey: an ordered list of passes."""

    departureStation: str | None = None
    arrivalStation: str | None = None
    line: str | None = None
    passes: list[StationPass] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class Journey(Document):
    """A saved public-transport journey owned by one user."""

    userId: Indexed(str)
    departureTime: datetime
    arrivalTime: datetime | None = None
    duration: float | None = None
    departureStation: str | None = None
    arrivalStation: str | None = None
    sections: list[JourneySection] = Field(default_factory=list)
    # Identifies the connection; a user saves each connection once.
    connectionKey: str | None = None
    createdAt: datetime = Field(default_factory=get_current_utc_time)

    @field_validator("departureTime", "arrivalTime", "createdAt", mode="before")
    @classmethod
    def parse_datetime_fields(cls, v: Any) -> datetime | None:
        """Parse datetime fields using the centralized date_utils."""
        if v is None:
            return None
        parsed = parse_timestamp(v)
        if parsed is None:
            msg = f"Invalid timestamp: {v!r}"
            raise ValueError(msg)
        return parsed

    class Settings:
        name = "journeys"
        indexes = [
            IndexModel(
                [("userId", ASCENDING), ("departureTime", DESCENDING)],
                name="journeys_user_departure_idx",
            ),
            IndexModel(
                [("userId", ASCENDING), ("connectionKey", ASCENDING)],
                name="journeys_user_connection_idx",
            ),
        ]


ALL_DOCUMENT_MODELS = [
    Journey,
]
