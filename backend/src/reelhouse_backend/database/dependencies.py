"""FastAPI dependencies wiring the database into the snapshot store."""

from functools import cache
from typing import Annotated

from fastapi import Depends

from reelhouse_backend.database.service import DatabaseService
from reelhouse_backend.database.store import SqlSnapshotStore
from reelhouse_backend.settings import BackendSettings, get_settings

SettingsDep = Annotated[BackendSettings, Depends(get_settings)]


@cache
def _open_database(database_url: str) -> DatabaseService:
    """Connect once per URL and make sure the snapshot table exists."""
    database = DatabaseService(database_url)
    database.create_schema()
    return database


@cache
def _build_snapshot_store(database: DatabaseService) -> SqlSnapshotStore:
    return SqlSnapshotStore(database)


def get_database(settings: SettingsDep) -> DatabaseService:
    """Return the database service for the configured URL."""
    return _open_database(settings.database_url)


def get_snapshot_store(
    database: Annotated[DatabaseService, Depends(get_database)],
) -> SqlSnapshotStore:
    """Return the snapshot store writing through *database*."""
    return _build_snapshot_store(database)
