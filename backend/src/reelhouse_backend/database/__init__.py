"""Database connectivity helpers and snapshot persistence."""

from reelhouse_backend.database.base import BaseSchema
from reelhouse_backend.database.dependencies import (
    get_database,
    get_snapshot_store,
)
from reelhouse_backend.database.repositories import SnapshotRepository
from reelhouse_backend.database.schemas import StudioSnapshotSchema
from reelhouse_backend.database.service import DatabaseService
from reelhouse_backend.database.store import SqlSnapshotStore

__all__ = [
    "BaseSchema",
    "DatabaseService",
    "SnapshotRepository",
    "SqlSnapshotStore",
    "StudioSnapshotSchema",
    "get_database",
    "get_snapshot_store",
]
