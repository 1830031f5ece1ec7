"""Persistence abstractions for studio snapshots.

These interfaces let the game logic layer store the authoritative state of a
studio without depending on the database layer. The API layer provides the
concrete adapter (in-memory or SQL-backed) that complies with the protocol.
"""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from reelhouse_backend.game_logic.configuration import (  # noqa: TC001
    BalanceConfiguration,
)
from reelhouse_backend.game_logic.state import StudioState  # noqa: TC001

SNAPSHOT_VERSION = 1


class StudioSnapshot(BaseModel):
    """Immutable, fully self-describing copy of a studio at rest."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(default=SNAPSHOT_VERSION, ge=1)
    state: StudioState
    configuration: BalanceConfiguration
    rng_state: list[Any] | None = None


class SnapshotStore(Protocol):
    """Protocol describing how studio snapshots are persisted.

    ``save_snapshot`` signals failure by raising.
    """

    def save_snapshot(self, studio_id: str, snapshot: StudioSnapshot) -> None:
        """Persist *snapshot* for *studio_id*, replacing any previous value."""

    def load_snapshot(self, studio_id: str) -> StudioSnapshot | None:
        """Return the latest stored snapshot for *studio_id* or ``None``."""


class InMemorySnapshotStore:
    """Trivial in-memory implementation of :class:`SnapshotStore`."""

    def __init__(self) -> None:
        self._snapshots: dict[str, StudioSnapshot] = {}

    def save_snapshot(self, studio_id: str, snapshot: StudioSnapshot) -> None:
        """Store *snapshot* keyed by *studio_id*."""
        self._snapshots[studio_id] = snapshot

    def load_snapshot(self, studio_id: str) -> StudioSnapshot | None:
        """Return the stored snapshot for *studio_id* if available."""
        return self._snapshots.get(studio_id)


__all__ = [
    "SNAPSHOT_VERSION",
    "InMemorySnapshotStore",
    "SnapshotStore",
    "StudioSnapshot",
]
