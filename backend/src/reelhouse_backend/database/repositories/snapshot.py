"""Repository helpers for working with studio snapshots."""

from typing import Any

from sqlalchemy.orm import Session

from reelhouse_backend.database.schemas import StudioSnapshotSchema


class SnapshotRepository:
    """Encapsulates persistence operations for :class:`StudioSnapshotSchema`."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, studio_id: str) -> StudioSnapshotSchema | None:
        """Return the stored snapshot row for *studio_id*."""
        return self._session.get(StudioSnapshotSchema, studio_id)

    def upsert(
        self, studio_id: str, *, version: int, week: int, payload: dict[str, Any]
    ) -> StudioSnapshotSchema:
        """Insert or replace the snapshot row for *studio_id*."""
        row = self.get(studio_id)
        if row is None:
            row = StudioSnapshotSchema(
                studio_id=studio_id, version=version, week=week, payload=payload
            )
            self._session.add(row)
        else:
            row.version = version
            row.week = week
            row.payload = payload
        self._session.flush()
        return row

    def delete(self, studio_id: str) -> bool:
        """Remove the snapshot for *studio_id*; return whether one existed."""
        row = self.get(studio_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
