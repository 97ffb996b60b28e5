"""Database package for MongoDB operations using Beanie ODM.

Modules:
    manager: DatabaseManager singleton for connection handling
    models: Beanie Document models
    aggregation: raw aggregation pipeline helper
"""

from db.aggregation import aggregate_to_list
from db.manager import DatabaseManager, db_manager
from db.models import ALL_DOCUMENT_MODELS, Journey, JourneySection, StationPass


async def init_database() -> None:
    """Initialize Beanie (and with it the model indexes) at startup."""
    await db_manager.init_beanie()


__all__ = [
    "ALL_DOCUMENT_MODELS",
    "DatabaseManager",
    "Journey",
    "JourneySection",
    "StationPass",
    "aggregate_to_list",
    "db_manager",
    "init_database",
]
