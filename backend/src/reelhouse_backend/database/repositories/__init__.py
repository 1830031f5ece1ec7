"""Repositories wrapping SQLAlchemy sessions."""

from reelhouse_backend.database.repositories.snapshot import SnapshotRepository

__all__ = ["SnapshotRepository"]
