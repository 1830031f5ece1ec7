"""High-level orchestration connecting a studio to its snapshot store.

:class:`StudioSession` is the façade the API layer talks to. It loads (or
creates) the studio, runs player actions against the :class:`StudioManager`
and queues a snapshot save after each successful mutation. Saves run on a
single background worker and their outcome only updates
``last_save_succeeded``; gameplay is never rolled back because a save failed.
Every action and read runs under the session lock, so concurrent callers
see one action at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator  # noqa: TC003
from concurrent.futures import Future, ThreadPoolExecutor, wait
from contextlib import contextmanager
from threading import RLock
from typing import TypeVar

from reelhouse_backend.game_logic.configuration import (  # noqa: TC001
    BalanceConfiguration,
)
from reelhouse_backend.game_logic.errors import SnapshotRestoreError
from reelhouse_backend.game_logic.manager import StudioManager
from reelhouse_backend.game_logic.persistence import (  # noqa: TC001
    SnapshotStore,
    StudioSnapshot,
)
from reelhouse_backend.game_logic.results import ActionRejected, rejected

logger = logging.getLogger(__name__)

_R = TypeVar("_R")


class StudioSession:
    """Own one studio's manager and keep its snapshot store up to date."""

    def __init__(
        self,
        studio_id: str,
        store: SnapshotStore,
        *,
        configuration: BalanceConfiguration | None = None,
    ) -> None:
        self._studio_id = studio_id
        self._store = store
        self._configuration = configuration
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"studio-save-{studio_id}"
        )
        self._pending: list[Future[None]] = []
        self._lock = RLock()
        self.last_save_succeeded: bool | None = None
        self.last_save_error: str | None = None
        self.restored_from_snapshot = False
        self._manager = self._load()

    @property
    def studio_id(self) -> str:
        """Return the identifier the studio is stored under."""
        return self._studio_id

    @property
    def manager(self) -> StudioManager:
        """Return the live studio manager."""
        return self._manager

    @contextmanager
    def exclusive(self) -> Iterator[StudioManager]:
        """Hold the session lock and yield the live manager."""
        with self._lock:
            yield self._manager

    def perform(
        self,
        action: Callable[[StudioManager], _R],
        *,
        allow_when_bankrupt: bool = False,
    ) -> _R | ActionRejected:
        """Run *action* against the studio and persist it when it succeeds."""
        with self._lock:
            if self._manager.is_bankrupt and not allow_when_bankrupt:
                return rejected(f"Game over: {self._manager.bankruptcy_reason}")
            result = action(self._manager)
            if not isinstance(result, ActionRejected):
                self._queue_save()
            return result

    def restart(self) -> StudioManager:
        """Discard the current studio and open a fresh one in its place."""
        with self._lock:
            logger.info("Restarting studio %s", self._studio_id)
            self._manager = StudioManager(self._configuration)
            self._queue_save()
            return self._manager

    def flush(self, timeout: float | None = None) -> None:
        """Block until every queued save has finished."""
        with self._lock:
            pending, self._pending = self._pending, []
        wait(pending, timeout=timeout)

    def close(self) -> None:
        """Flush outstanding saves and stop the save worker."""
        self.flush()
        self._executor.shutdown(wait=True)

    def _load(self) -> StudioManager:
        try:
            snapshot = self._store.load_snapshot(self._studio_id)
            if snapshot is not None:
                manager = StudioManager.from_snapshot(snapshot)
                self.restored_from_snapshot = True
                logger.info(
                    "Studio %s restored at week %s", self._studio_id, manager.week
                )
                return manager
        except SnapshotRestoreError:
            logger.warning(
                "Stored snapshot for %s is invalid; starting fresh",
                self._studio_id,
                exc_info=True,
            )
        except Exception:  # noqa: BLE001
            logger.warning(
                "Could not load studio %s; starting fresh",
                self._studio_id,
                exc_info=True,
            )
        return StudioManager(self._configuration)

    def _queue_save(self) -> None:
        snapshot = self._manager.to_snapshot()
        future = self._executor.submit(self._save, snapshot)
        self._pending = [f for f in self._pending if not f.done()]
        self._pending.append(future)

    def _save(self, snapshot: StudioSnapshot) -> None:
        # Status is recorded here, before the future completes, so flush() sees it.
        try:
            self._store.save_snapshot(self._studio_id, snapshot)
        except Exception as error:  # noqa: BLE001
            self.last_save_succeeded = False
            self.last_save_error = str(error)
            logger.warning("Saving studio %s failed: %s", self._studio_id, error)
            return
        self.last_save_succeeded = True
        self.last_save_error = None


__all__ = ["StudioSession"]
