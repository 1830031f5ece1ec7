"""SQLAlchemy schemas."""

from reelhouse_backend.database.schemas.studio_snapshot import StudioSnapshotSchema

__all__ = ["StudioSnapshotSchema"]
