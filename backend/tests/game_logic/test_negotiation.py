"""Talent negotiation, script buying and greenlight approval."""

from __future__ import annotations

import pytest

from reelhouse_backend.game_logic import (
    ActionRejected,
    ScriptAcquired,
    ScriptPitch,
    StudioManager,
    StudioState,
    TalentAttached,
)
from reelhouse_backend.shared import Genre, Money, TalentAvailability, TalentRole

HARBOR = "project-harbor-lights"
NIGHT_CIRCUIT = "project-night-circuit"
AVA = "talent-ava-mercer"


def _pitch() -> ScriptPitch:
    return ScriptPitch(
        id="script-test",
        title="Paper Moons",
        genre=Genre.COMEDY,
        logline="Two forgers fall for the same mark.",
        asking_price=Money.of(450_000),
        script_quality=7.1,
        concept_strength=5.0,
    )


def test_attaching_a_director_charges_the_agency_retainer(
    manager: StudioManager, state: StudioState
) -> None:
    cash_before = state.cash

    result = manager.negotiate_and_attach_talent(HARBOR, AVA)

    assert isinstance(result, TalentAttached)
    assert result.role is TalentRole.DIRECTOR
    assert result.cost == Money.of(1_680_000)
    assert state.cash == cash_before.subtract(Money.of(1_680_000))
    project = state.find_project(HARBOR)
    talent = state.find_talent(AVA)
    assert project is not None
    assert talent is not None
    assert project.director_id == AVA
    assert project.hype == pytest.approx(17.6)
    assert talent.availability is TalentAvailability.ATTACHED
    assert talent.attached_project_id == HARBOR


def test_actors_join_the_cast_list(manager: StudioManager, state: StudioState) -> None:
    manager.negotiate_and_attach_talent(HARBOR, "talent-lena-park")
    manager.negotiate_and_attach_talent(HARBOR, "talent-tom-okafor")

    project = state.find_project(HARBOR)
    assert project is not None
    assert project.cast_ids == ["talent-lena-park", "talent-tom-okafor"]
    assert project.director_id is None


def test_second_director_is_rejected(
    manager: StudioManager, state: StudioState
) -> None:
    manager.negotiate_and_attach_talent(HARBOR, AVA)
    cash_before = state.cash

    result = manager.negotiate_and_attach_talent(HARBOR, "talent-jon-reyes")

    assert isinstance(result, ActionRejected)
    assert "Harbor Lights already has a director." in result.blockers
    assert state.cash == cash_before
    jon = state.find_talent("talent-jon-reyes")
    assert jon is not None
    assert jon.availability is TalentAvailability.AVAILABLE


def test_talent_committed_elsewhere_cannot_double_book(
    manager: StudioManager, state: StudioState
) -> None:
    manager.negotiate_and_attach_talent(HARBOR, AVA)

    result = manager.negotiate_and_attach_talent(NIGHT_CIRCUIT, AVA)

    assert isinstance(result, ActionRejected)
    assert "Ava Mercer is already committed elsewhere." in result.blockers
    night_circuit = state.find_project(NIGHT_CIRCUIT)
    assert night_circuit is not None
    assert night_circuit.director_id is None


def test_insufficient_funds_leaves_the_studio_untouched(
    manager: StudioManager, state: StudioState
) -> None:
    state.cash = Money.of(100_000)
    before = state.model_copy(deep=True)

    result = manager.negotiate_and_attach_talent(HARBOR, AVA)

    assert isinstance(result, ActionRejected)
    assert result.blockers == (
        "Insufficient funds: Ava Mercer needs a $1,680,000 retainer.",
    )
    assert state == before


def test_unknown_talent_is_rejected(manager: StudioManager) -> None:
    result = manager.negotiate_and_attach_talent(HARBOR, "talent-nobody")

    assert isinstance(result, ActionRejected)
    assert result.message == "Talent 'talent-nobody' not found."


def test_acquiring_a_script_opens_a_development_project(
    manager: StudioManager, state: StudioState
) -> None:
    state.script_market.append(_pitch())
    cash_before = state.cash

    result = manager.acquire_script("script-test")

    assert isinstance(result, ScriptAcquired)
    assert state.find_script("script-test") is None
    assert state.cash == cash_before.subtract(Money.of(450_000))
    project = state.find_project(result.project_id)
    assert project is not None
    assert project.title == "Paper Moons"
    assert project.genre is Genre.COMEDY
    assert project.script_quality == pytest.approx(7.1)
    assert project.hype == pytest.approx(12.0)
    assert project.budget == Money.of(18_000_000)


def test_acquiring_an_unaffordable_script_is_rejected(
    manager: StudioManager, state: StudioState
) -> None:
    state.script_market.append(_pitch())
    state.cash = Money.of(200_000)

    result = manager.acquire_script("script-test")

    assert isinstance(result, ActionRejected)
    assert state.find_script("script-test") is not None
    assert len(state.projects) == 2


def test_passing_on_a_script_removes_it_from_the_market(
    manager: StudioManager, state: StudioState
) -> None:
    state.script_market.append(_pitch())

    assert manager.pass_script("script-test").succeeded
    assert state.script_market == []
    assert isinstance(manager.pass_script("script-test"), ActionRejected)


def test_rewrite_lifts_the_script_and_revokes_the_greenlight(
    manager: StudioManager, state: StudioState
) -> None:
    project = state.find_project(HARBOR)
    assert project is not None
    project.greenlight_approved = True

    result = manager.send_back_for_rewrite(HARBOR)

    assert result.succeeded
    assert project.script_quality == pytest.approx(6.6)
    assert project.hype == pytest.approx(11.0)
    assert project.rewrite_count == 1
    assert project.greenlight_approved is False


def test_greenlight_charges_the_approval_fee(
    manager: StudioManager, state: StudioState
) -> None:
    cash_before = state.cash

    assert manager.approve_greenlight(HARBOR).succeeded
    assert state.cash == cash_before.subtract(Money.of(360_000))
    assert isinstance(manager.approve_greenlight(HARBOR), ActionRejected)
