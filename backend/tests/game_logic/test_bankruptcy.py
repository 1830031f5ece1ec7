"""Low-cash tracking and the bankruptcy end state."""

from __future__ import annotations

import pytest

from reelhouse_backend.game_logic import (
    ActionRejected,
    BalanceConfiguration,
    InMemorySnapshotStore,
    StudioManager,
    StudioSession,
    StudioState,
    WeekAdvanced,
)
from reelhouse_backend.shared import Money, Specialization

HARBOR = "project-harbor-lights"
BANKRUPTCY_REASON = "Bankruptcy declared at week 2 with cash -$130,000."


@pytest.fixture
def broke_configuration(configuration: BalanceConfiguration) -> BalanceConfiguration:
    return configuration.model_copy(update={"starting_cash": Money.of(100_000)})


def test_burn_below_zero_declares_bankruptcy(
    manager: StudioManager, state: StudioState
) -> None:
    state.cash = Money.of(100_000)

    result = manager.end_week()

    assert isinstance(result, WeekAdvanced)
    assert manager.is_bankrupt
    assert manager.bankruptcy_reason == BANKRUPTCY_REASON
    assert BANKRUPTCY_REASON in result.events
    assert manager.cash == Money.of(-130_000)


def test_bankruptcy_is_sticky_and_blocks_every_action(
    manager: StudioManager, state: StudioState
) -> None:
    state.cash = Money.of(100_000)
    manager.end_week()
    state.cash = Money.of(90_000_000)
    before = state.model_copy(deep=True)

    results = [
        manager.end_week(),
        manager.advance_project_phase(HARBOR),
        manager.negotiate_and_attach_talent(HARBOR, "talent-tom-okafor"),
        manager.run_optional_action(),
        manager.fund_marketing(HARBOR, Money.of(10_000)),
        manager.set_specialization(Specialization.INDIE),
    ]

    for result in results:
        assert isinstance(result, ActionRejected)
        assert result.message == f"Game over: {BANKRUPTCY_REASON}"
    assert state == before
    assert manager.is_bankrupt


def test_low_cash_weeks_are_counted(manager: StudioManager, state: StudioState) -> None:
    state.cash = Money.of(800_000)

    manager.end_week()
    manager.end_week()

    assert state.consecutive_low_cash_weeks == 2
    assert not manager.is_bankrupt


def test_session_refuses_play_until_restarted(
    broke_configuration: BalanceConfiguration,
) -> None:
    session = StudioSession(
        "studio-broke", InMemorySnapshotStore(), configuration=broke_configuration
    )
    try:
        session.perform(lambda studio: studio.end_week())
        assert session.manager.is_bankrupt

        refused = session.perform(lambda studio: studio.run_optional_action())
        assert isinstance(refused, ActionRejected)
        assert refused.message.startswith("Game over:")

        fresh = session.restart()
        assert fresh is session.manager
        assert not fresh.is_bankrupt
        assert fresh.week == 1
        assert fresh.cash == Money.of(100_000)
    finally:
        session.close()
