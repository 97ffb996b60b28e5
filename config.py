"""Centralized configuration for environment variables.

This module is the single source of truth for configuration used across the
application. Import constants from here rather than calling os.getenv directly
in multiple places.

MongoDB connection settings are read by db.manager.DatabaseManager.
"""

from __future__ import annotations

import logging
import os
from typing import Final

import pytz
from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()

logger = logging.getLogger(__name__)


def _resolve_timezone(name: str) -> str:
    """Return ``name`` if pytz knows it, otherwise fall back to UTC."""
    try:
        pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown STATS_TIMEZONE %r, falling back to UTC", name)
        return "UTC"
    return name


# --- Statistics ---
# Calendar days and months of the chart buckets are taken in this timezone.
STATS_TIMEZONE: Final[str] = _resolve_timezone(os.getenv("STATS_TIMEZONE", "UTC"))
DISTANCE_UNIT: Final[str] = os.getenv("DISTANCE_UNIT", "km")

# --- Auth gateway ---
# The upstream gateway authenticates the user and forwards the id here.
USER_ID_HEADER: Final[str] = os.getenv("USER_ID_HEADER", "X-User-Id")

# --- Server ---
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOWED_ORIGINS: Final[list[str]] = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
    if origin.strip()
]
PORT: Final[int] = int(os.getenv("PORT", "8080"))


__all__ = [
    "CORS_ALLOWED_ORIGINS",
    "DISTANCE_UNIT",
    "LOG_LEVEL",
    "PORT",
    "STATS_TIMEZONE",
    "USER_ID_HEADER",
]
