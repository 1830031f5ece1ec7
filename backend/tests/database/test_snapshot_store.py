"""Snapshot persistence against a real SQLite database."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import pytest

from reelhouse_backend.database import (
    DatabaseService,
    SnapshotRepository,
    SqlSnapshotStore,
    StudioSnapshotSchema,
    get_database,
    get_snapshot_store,
)
from reelhouse_backend.game_logic import BalanceConfiguration, StudioManager
from reelhouse_backend.settings import BackendSettings

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy import Table


@pytest.fixture
def database(tmp_path: Path) -> DatabaseService:
    service = DatabaseService(f"sqlite:///{tmp_path / 'reelhouse.db'}")
    service.create_schema()
    return service


def test_snapshot_schema_is_keyed_by_studio() -> None:
    table = cast("Table", StudioSnapshotSchema.__table__)
    assert table.name == "studio_snapshots"
    assert [column.name for column in table.primary_key] == ["studio_id"]


def test_saved_snapshot_loads_back_unchanged(
    database: DatabaseService, configuration: BalanceConfiguration
) -> None:
    store = SqlSnapshotStore(database)
    studio = StudioManager(configuration)
    studio.end_week()
    snapshot = studio.to_snapshot()

    store.save_snapshot("studio-sql", snapshot)
    loaded = store.load_snapshot("studio-sql")

    assert loaded is not None
    assert loaded.model_dump(mode="json") == snapshot.model_dump(mode="json")
    restored = StudioManager.from_snapshot(loaded)
    assert restored.week == 2
    assert restored.cash == studio.cash


def test_saving_again_replaces_the_row(
    database: DatabaseService, configuration: BalanceConfiguration
) -> None:
    store = SqlSnapshotStore(database)
    studio = StudioManager(configuration)
    store.save_snapshot("studio-sql", studio.to_snapshot())
    studio.end_week()
    store.save_snapshot("studio-sql", studio.to_snapshot())

    with database.session() as session:
        row = SnapshotRepository(session).get("studio-sql")
        assert row is not None
        assert row.week == 2
        assert row.version == 1
        assert session.query(StudioSnapshotSchema).count() == 1


def test_missing_snapshot_loads_as_none(database: DatabaseService) -> None:
    store = SqlSnapshotStore(database)

    assert store.load_snapshot("studio-unknown") is None
    assert store.delete_snapshot("studio-unknown") is False


def test_deleted_snapshot_is_gone(
    database: DatabaseService, configuration: BalanceConfiguration
) -> None:
    store = SqlSnapshotStore(database)
    store.save_snapshot("studio-sql", StudioManager(configuration).to_snapshot())

    assert store.delete_snapshot("studio-sql") is True
    assert store.load_snapshot("studio-sql") is None


def test_dependencies_share_one_store_per_database_url(tmp_path: Path) -> None:
    settings = BackendSettings(database_url=f"sqlite:///{tmp_path / 'deps.db'}")

    database = get_database(settings)
    store = get_snapshot_store(database)

    assert get_database(settings) is database
    assert get_snapshot_store(database) is store
    assert store.load_snapshot("studio-new") is None
