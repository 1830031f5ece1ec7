"""Dependency providers for FastAPI routers."""

from __future__ import annotations

from functools import cache

from fastapi import Depends

from reelhouse_backend.api.services import StudioService
from reelhouse_backend.database import SqlSnapshotStore, get_snapshot_store


@cache
def _build_studio_service(store: SqlSnapshotStore) -> StudioService:
    """Create one :class:`StudioService` per snapshot store."""
    return StudioService(store)


def get_studio_service(
    store: SqlSnapshotStore = Depends(get_snapshot_store),
) -> StudioService:
    """Return the shared :class:`StudioService` instance."""

    return _build_studio_service(store)


__all__ = ["get_studio_service"]
