"""
Connection search state for one user session.

Holds what the user is searching for (stations, departure time) and the
connections the last search returned. The state is owned by the session
that created it and is only changed through the methods below.

``departure_time`` is always held as an aware UTC datetime. The connections
API expects local wall-clock date and time, so ``query_params`` converts it
to the local timezone (``STATS_TIMEZONE`` by default, the zone the charts
use) before formatting.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

import pytz

from config import STATS_TIMEZONE
from date_utils import ensure_utc, get_current_utc_time, parse_timestamp

logger = logging.getLogger(__name__)

PAGE_SHIFT_HOURS = 2


def result_key(connection: dict[str, Any]) -> str:
    """Stable key of a connection returned by the search API.

    Built from departure timestamp and station, then arrival timestamp and
    station, matching how the connections API identifies a connection.
    """
    origin = connection.get("from") or {}
    destination = connection.get("to") or {}
    return (
        f"{origin.get('departureTimestamp', '')}{origin.get('departure', '')}"
        f"{destination.get('arrivalTimestamp', '')}{destination.get('arrival', '')}"
    )


class JourneySearchState:
    """Search parameters and results of a single session."""

    def __init__(self, departure_time: datetime | None = None) -> None:
        self.from_station: str | None = None
        self.to_station: str | None = None
        self.departure_time: datetime = (
            ensure_utc(departure_time) or get_current_utc_time()
        )
        # None means no search has run yet; [] means nothing was found.
        self.results: list[dict[str, Any]] | None = None

    def set_stations(self, from_station: str | None, to_station: str | None) -> None:
        """Change origin/destination; previous results no longer apply."""
        self.from_station = from_station
        self.to_station = to_station
        self.results = None

    def set_departure_time(self, value: str | datetime) -> None:
        parsed = parse_timestamp(value)
        if parsed is None:
            msg = f"Invalid departure time: {value!r}"
            raise ValueError(msg)
        self.departure_time = ensure_utc(parsed)

    def shift_departure_time(self, hours: float) -> datetime:
        """Move the departure time by ``hours`` (negative = earlier)."""
        self.departure_time = self.departure_time + timedelta(hours=hours)
        logger.debug("Search departure time shifted to %s", self.departure_time)
        return self.departure_time

    def show_earlier(self) -> datetime:
        return self.shift_departure_time(-PAGE_SHIFT_HOURS)

    def show_later(self) -> datetime:
        return self.shift_departure_time(PAGE_SHIFT_HOURS)

    def set_results(self, connections: list[dict[str, Any]]) -> None:
        """Store the connections of the latest search, dropping repeated ones."""
        unique: dict[str, dict[str, Any]] = {}
        for connection in connections:
            unique.setdefault(result_key(connection), connection)
        self.results = list(unique.values())

    @property
    def has_searched(self) -> bool:
        return self.results is not None

    @property
    def is_ready(self) -> bool:
        """Both stations are set, so a search can be issued."""
        return bool(self.from_station and self.to_station)

    def query_params(self, tz_name: str = STATS_TIMEZONE) -> dict[str, str]:
        """Parameters for the connections API request, in ``tz_name`` local time."""
        if not self.is_ready:
            msg = "Both stations must be set before searching"
            raise ValueError(msg)
        local = self.departure_time.astimezone(pytz.timezone(tz_name))
        return {
            "from": self.from_station,
            "to": self.to_station,
            "date": local.strftime("%Y-%m-%d"),
            "time": local.strftime("%H:%M"),
        }

    def reset(self) -> None:
        self.from_station = None
        self.to_station = None
        self.departure_time = get_current_utc_time()
        self.results = None
