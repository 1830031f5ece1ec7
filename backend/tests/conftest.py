"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from reelhouse_backend.game_logic import (
    BalanceConfiguration,
    BalanceDefaults,
    StudioManager,
    StudioState,
    WeekAdvanced,
)
from reelhouse_backend.game_logic.configuration import (
    get_default_balance_configuration,
)
from reelhouse_backend.game_logic.seeds import build_starting_state
from reelhouse_backend.settings import get_settings

TEST_SEED = 1234


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are loaded with predictable values during tests."""
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    get_settings.cache_clear()
    get_default_balance_configuration.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_balance_configuration.cache_clear()


@pytest.fixture
def configuration() -> BalanceConfiguration:
    """Seeded balance configuration shared by gameplay tests."""
    return BalanceDefaults(rng_seed=TEST_SEED).to_config()


@pytest.fixture
def state(configuration: BalanceConfiguration) -> StudioState:
    """Opening studio state with an empty script market and decision queue."""
    return build_starting_state(configuration)


@pytest.fixture
def manager(configuration: BalanceConfiguration, state: StudioState) -> StudioManager:
    """Manager that owns the ``state`` fixture, so tests can arrange it directly."""
    return StudioManager(configuration, state=state)


@pytest.fixture
def play_week() -> Callable[[StudioManager], WeekAdvanced]:
    """Return a helper that settles pending crises and then ends the week."""

    def _play(studio: StudioManager) -> WeekAdvanced:
        for crisis in studio.pending_crises():
            studio.resolve_crisis(crisis.id, crisis.options[0].id)
        result = studio.end_week()
        assert isinstance(result, WeekAdvanced), result.message
        return result

    return _play
