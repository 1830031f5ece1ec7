"""Studio session registry exposed to the API layer."""

from __future__ import annotations

import logging
from threading import Lock
from typing import TYPE_CHECKING, TypeVar

from reelhouse_backend.api.models import ActionResponse, StudioStateResponse
from reelhouse_backend.game_logic import StudioSession

if TYPE_CHECKING:
    from collections.abc import Callable

    from reelhouse_backend.game_logic import (
        BalanceConfiguration,
        SnapshotStore,
        StudioManager,
    )

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class StudioService:
    """Keep one :class:`StudioSession` per studio id, backed by *store*."""

    def __init__(
        self,
        store: SnapshotStore,
        *,
        configuration: BalanceConfiguration | None = None,
    ) -> None:
        self._store = store
        self._configuration = configuration
        self._sessions: dict[str, StudioSession] = {}
        self._lock = Lock()

    def session_for(self, studio_id: str) -> StudioSession:
        """Return the live session for *studio_id*, loading it on first use."""
        with self._lock:
            session = self._sessions.get(studio_id)
            if session is None:
                session = StudioSession(
                    studio_id, self._store, configuration=self._configuration
                )
                self._sessions[studio_id] = session
                logger.info("Opened studio session %s", studio_id)
            return session

    def perform(
        self,
        studio_id: str,
        action: Callable[[StudioManager], object],
    ) -> ActionResponse:
        """Run *action* for *studio_id* and wrap the outcome for the client."""
        session = self.session_for(studio_id)
        with session.exclusive() as manager:
            result = session.perform(action)
            return ActionResponse(
                result=result,
                week=manager.week,
                cash=manager.cash,
                is_bankrupt=manager.is_bankrupt,
            )

    def query(self, studio_id: str, read: Callable[[StudioManager], _T]) -> _T:
        """Run the read-only *read* while no action is in flight."""
        with self.session_for(studio_id).exclusive() as manager:
            return read(manager)

    def restart(self, studio_id: str) -> StudioStateResponse:
        """Replace *studio_id* with a fresh studio."""
        session = self.session_for(studio_id)
        with session.exclusive():
            session.restart()
            return self.describe(studio_id)

    def describe(self, studio_id: str) -> StudioStateResponse:
        """Return the read-only view of *studio_id*."""
        session = self.session_for(studio_id)
        with session.exclusive() as manager:
            state = manager.state_view()
            last_save_succeeded = session.last_save_succeeded
        return StudioStateResponse(
            studio_id=studio_id,
            studio_name=state.studio_name,
            week=state.week,
            cash=state.cash,
            tier=state.tier,
            heat=state.heat,
            specialization=state.specialization,
            is_bankrupt=state.is_bankrupt,
            bankruptcy_reason=state.bankruptcy_reason,
            projects=state.projects,
            talent=state.talent,
            script_market=state.script_market,
            pending_crises=state.pending_crises,
            decision_queue=state.decision_queue,
            arcs=state.arcs,
            last_save_succeeded=last_save_succeeded,
        )

    def close(self) -> None:
        """Flush and stop every open session."""
        with self._lock:
            sessions, self._sessions = list(self._sessions.values()), {}
        for session in sessions:
            session.close()


__all__ = ["StudioService"]
