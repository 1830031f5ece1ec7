"""End-of-week processing, crises and queued decisions."""

from __future__ import annotations

from decimal import Decimal

import pytest

from reelhouse_backend.game_logic import (
    ActionRejected,
    BalanceConfiguration,
    Crisis,
    CrisisOption,
    CrisisResolved,
    DecisionItem,
    DecisionOption,
    StudioManager,
    StudioState,
    UnknownCrisisError,
    UnknownDecisionError,
    UnknownOptionError,
    WeekAdvanced,
)
from reelhouse_backend.shared import ChronicleCategory, CrisisSeverity, Money

HARBOR = "project-harbor-lights"


def _permit_crisis(project_id: str = HARBOR) -> Crisis:
    return Crisis(
        id="crisis-permit",
        project_id=project_id,
        title="Location Permit Reversal",
        body="The city pulled the permit.",
        severity=CrisisSeverity.MEDIUM,
        options=(
            CrisisOption(
                id="pay",
                label="Pay the expedited fee",
                preview="-$250K",
                cash_delta=Money.of(-250_000),
            ),
            CrisisOption(
                id="relocate",
                label="Relocate",
                preview="+2 weeks",
                cash_delta=Money.of(-80_000),
                schedule_delta=2,
                hype_delta=-2,
            ),
        ),
        raised_week=1,
    )


def _decision(decision_id: str, weeks: int) -> DecisionItem:
    return DecisionItem(
        id=decision_id,
        title="Streaming Pre-Buy Offer",
        body="A streamer wants first-window rights.",
        weeks_until_expiry=weeks,
        options=[
            DecisionOption(
                id=f"{decision_id}-decline",
                label="Decline",
                preview="Nothing changes.",
                cash_delta=Money.zero(),
            ),
            DecisionOption(
                id=f"{decision_id}-accept",
                label="Accept",
                preview="+$1.5M now.",
                cash_delta=Money.of(1_500_000),
            ),
        ],
    )


def test_end_week_is_refused_while_a_crisis_is_pending(
    manager: StudioManager, state: StudioState
) -> None:
    state.pending_crises.append(_permit_crisis())
    cash_before = state.cash

    result = manager.end_week()

    assert isinstance(result, ActionRejected)
    assert result.blockers == ("Location Permit Reversal",)
    assert state.week == 1
    assert state.cash == cash_before


def test_end_week_charges_development_burn_and_advances_the_week(
    manager: StudioManager,
) -> None:
    result = manager.end_week()

    assert isinstance(result, WeekAdvanced)
    assert result.week == 2
    assert manager.week == 2
    # Harbor Lights (drama, 18M) and Night Circuit (action, 28M) at 0.5% a week.
    assert result.cash_delta == Money.of(-230_000)
    assert manager.cash == Money.of(49_770_000)


def test_crisis_resolution_applies_once_and_unblocks_the_week(
    manager: StudioManager, state: StudioState
) -> None:
    state.pending_crises.append(_permit_crisis())
    cash_before = state.cash

    result = manager.resolve_crisis("crisis-permit", "relocate")

    assert isinstance(result, CrisisResolved)
    project = state.find_project(HARBOR)
    assert project is not None
    assert project.scheduled_weeks_remaining == 2
    assert state.cash == cash_before.subtract(Money.of(80_000))
    assert state.pending_crises == []
    assert len(manager.chronicle().entries) == 1
    assert manager.chronicle().entries[0].category is ChronicleCategory.CRISIS_RESOLVED

    with pytest.raises(UnknownCrisisError):
        manager.resolve_crisis("crisis-permit", "relocate")
    assert state.cash == cash_before.subtract(Money.of(80_000))
    assert isinstance(manager.end_week(), WeekAdvanced)


def test_unknown_crisis_option_raises_and_keeps_the_crisis(
    manager: StudioManager, state: StudioState
) -> None:
    state.pending_crises.append(_permit_crisis())

    with pytest.raises(UnknownOptionError):
        manager.resolve_crisis("crisis-permit", "bribe")

    assert [crisis.id for crisis in state.pending_crises] == ["crisis-permit"]


def test_crisis_schedule_delta_is_floored_at_zero(
    manager: StudioManager, state: StudioState
) -> None:
    crisis = _permit_crisis()
    rushed = crisis.model_copy(
        update={
            "options": (
                CrisisOption(
                    id="rush",
                    label="Rush it",
                    preview="-5 weeks",
                    cash_delta=Money.zero(),
                    schedule_delta=-5,
                ),
            )
        }
    )
    state.pending_crises.append(rushed)

    manager.resolve_crisis("crisis-permit", "rush")

    project = state.find_project(HARBOR)
    assert project is not None
    assert project.scheduled_weeks_remaining == 0


def test_resolve_decision_applies_only_the_cash_delta(
    manager: StudioManager, state: StudioState
) -> None:
    state.decision_queue.append(_decision("decision-a", weeks=3))
    cash_before = state.cash
    heat_before = state.heat

    result = manager.resolve_decision("decision-a", "decision-a-accept")

    assert result.succeeded
    assert state.cash == cash_before.add(Money.of(1_500_000))
    assert state.heat == heat_before
    assert state.decision_queue == []
    with pytest.raises(UnknownDecisionError):
        manager.resolve_decision("decision-a", "decision-a-accept")


def test_decision_with_one_week_left_expires_on_end_week(
    manager: StudioManager, state: StudioState
) -> None:
    state.decision_queue.extend(
        [_decision("decision-soon", weeks=1), _decision("decision-later", weeks=3)]
    )

    result = manager.end_week()

    assert isinstance(result, WeekAdvanced)
    queued = {item.id: item for item in state.decision_queue}
    assert "decision-soon" not in queued
    assert queued["decision-later"].weeks_until_expiry == 2
    assert any("defaulted to 'Decline'" in line for line in result.events)
    assert state.heat == pytest.approx(11.0)


def test_schedules_count_down_each_week(
    manager: StudioManager, state: StudioState
) -> None:
    project = state.find_project(HARBOR)
    assert project is not None
    project.scheduled_weeks_remaining = 3

    manager.end_week()

    assert project.scheduled_weeks_remaining == 2


def test_fresh_studio_opens_with_market_and_a_decision(
    configuration: BalanceConfiguration,
) -> None:
    studio = StudioManager(configuration)

    assert len(studio.script_market()) == 4
    assert len(studio.decision_queue()) == 1
    assert studio.cash == configuration.starting_cash
    assert all(
        pitch.asking_price.amount >= Decimal(300_000)
        for pitch in studio.script_market()
    )


def test_read_only_projections_are_detached(manager: StudioManager) -> None:
    projects = manager.projects()
    projects[0].hype = 99.0
    projects.clear()

    assert len(manager.projects()) == 2
    assert manager.projects()[0].hype != 99.0
