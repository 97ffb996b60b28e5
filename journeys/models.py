"""Pydantic models for journey-related API and service operations."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from db.models import JourneySection


class JourneyCreateRequest(BaseModel):
    """Payload for saving a journey picked from the connection search."""

    departureTime: datetime
    arrivalTime: datetime | None = None
    duration: float | None = Field(default=None, ge=0)
    departureStation: str | None = None
    arrivalStation: str | None = None
    sections: list[JourneySection] = Field(min_length=1)

    model_config = ConfigDict(extra="ignore")
