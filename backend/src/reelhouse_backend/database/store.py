"""SQL-backed implementation of the studio snapshot store."""

from __future__ import annotations

import logging

from reelhouse_backend.database.repositories import SnapshotRepository
from reelhouse_backend.database.service import DatabaseService  # noqa: TC001
from reelhouse_backend.game_logic.persistence import StudioSnapshot

logger = logging.getLogger(__name__)


class SqlSnapshotStore:
    """Persist :class:`StudioSnapshot` objects as JSON rows."""

    def __init__(self, database: DatabaseService) -> None:
        self._database = database

    def save_snapshot(self, studio_id: str, snapshot: StudioSnapshot) -> None:
        """Store *snapshot* for *studio_id*, replacing any previous row."""
        payload = snapshot.model_dump(mode="json")
        with self._database.session() as session:
            SnapshotRepository(session).upsert(
                studio_id,
                version=snapshot.version,
                week=snapshot.state.week,
                payload=payload,
            )
        logger.debug("Saved studio %s at week %s", studio_id, snapshot.state.week)

    def load_snapshot(self, studio_id: str) -> StudioSnapshot | None:
        """Return the stored snapshot for *studio_id* or ``None``."""
        with self._database.session() as session:
            row = SnapshotRepository(session).get(studio_id)
            if row is None:
                return None
            payload = row.payload
        return StudioSnapshot.model_validate(payload)

    def delete_snapshot(self, studio_id: str) -> bool:
        """Drop the stored snapshot for *studio_id*."""
        with self._database.session() as session:
            return SnapshotRepository(session).delete(studio_id)


__all__ = ["SqlSnapshotStore"]
