"""Sequel eligibility, franchise fatigue and sequel creation."""

from __future__ import annotations

import pytest

from reelhouse_backend.game_logic import (
    ActionRejected,
    MovieProject,
    ReleaseReport,
    SequelEligibilityCalculator,
    SequelStarted,
    StudioManager,
    StudioState,
)
from reelhouse_backend.shared import Money, ProjectPhase, ReleaseOutcome

HARBOR = "project-harbor-lights"


def _report(
    outcome: ReleaseOutcome = ReleaseOutcome.HIT, *, release_week: int = 1
) -> ReleaseReport:
    return ReleaseReport(
        outcome=outcome,
        was_record_opening=False,
        profit=Money.of(21_000_000),
        roi=2.0,
        score=20.0,
        breakdown={"script": 12.5, "timing": 7.5},
        opening_weekend_gross=Money.of(14_000_000),
        final_box_office=Money.of(42_000_000),
        total_cost=Money.of(21_000_000),
        critical_score=70.0,
        audience_score=75.0,
        awards_nominations=0,
        awards_wins=0,
        release_week=release_week,
    )


def _released_harbor(
    state: StudioState, outcome: ReleaseOutcome = ReleaseOutcome.HIT
) -> MovieProject:
    project = state.find_project(HARBOR)
    assert project is not None
    project.record_release(_report(outcome))
    state.heat = 40.0
    return project


def test_unreleased_project_cannot_spawn_a_sequel(state: StudioState) -> None:
    project = state.find_project(HARBOR)
    assert project is not None

    eligibility = SequelEligibilityCalculator().evaluate(project, state)

    assert not eligibility.eligible
    assert eligibility.reason == "Only released films can spawn sequels."
    assert eligibility.next_episode == 2


def test_released_hit_projects_an_eligible_sequel(state: StudioState) -> None:
    project = _released_harbor(state)

    eligibility = SequelEligibilityCalculator().evaluate(project, state)

    assert eligibility.eligible
    assert eligibility.reason is None
    assert eligibility.next_episode == 2
    assert eligibility.upfront_cost == Money.of(850_000)
    assert eligibility.projected_fatigue == pytest.approx(0.0)
    assert 8.0 <= eligibility.carryover_hype <= 78.0


def test_evaluation_does_not_touch_the_studio(state: StudioState) -> None:
    project = _released_harbor(state)
    before = state.model_copy(deep=True)

    SequelEligibilityCalculator().evaluate(project, state)

    assert state == before


def test_flop_or_cold_studio_blocks_the_sequel(state: StudioState) -> None:
    project = _released_harbor(state, outcome=ReleaseOutcome.FLOP)
    calculator = SequelEligibilityCalculator()

    flop = calculator.evaluate(project, state)
    assert not flop.eligible
    assert flop.reason == (
        "Sequels need at least a solid outcome; Harbor Lights was a flop."
    )

    project.release_report = _report()
    state.heat = 10.0
    cold = calculator.evaluate(project, state)
    assert cold.reason == "Studio heat 10 is below 20."


def test_start_sequel_opens_the_next_franchise_entry(
    manager: StudioManager, state: StudioState
) -> None:
    parent = _released_harbor(state)
    cash_before = state.cash

    result = manager.start_sequel(HARBOR)

    assert isinstance(result, SequelStarted)
    assert result.episode == 2
    assert result.cost == Money.of(850_000)
    assert state.cash == cash_before.subtract(Money.of(850_000))
    sequel = state.find_project(result.project_id)
    assert sequel is not None
    assert sequel.title == "Harbor Lights 2"
    assert sequel.phase is ProjectPhase.DEVELOPMENT
    assert sequel.franchise_id == HARBOR
    assert sequel.parent_project_id == HARBOR
    assert parent.franchise_id == HARBOR

    again = manager.start_sequel(HARBOR)
    assert isinstance(again, ActionRejected)
    assert again.blockers == (
        "Another film in this franchise is already in the works.",
    )


def test_third_entry_numbers_from_the_franchise_title(
    manager: StudioManager, state: StudioState
) -> None:
    _released_harbor(state)
    first = manager.start_sequel(HARBOR)
    assert isinstance(first, SequelStarted)
    sequel = state.find_project(first.project_id)
    assert sequel is not None
    sequel.record_release(_report(release_week=30))

    result = manager.start_sequel(sequel.id)

    assert isinstance(result, SequelStarted)
    assert result.episode == 3
    third = state.find_project(result.project_id)
    assert third is not None
    assert third.title == "Harbor Lights 3"
    assert third.franchise_id == HARBOR
    assert manager.sequel_eligibility("project-missing") is None


def test_fatigue_counts_every_released_entry_in_the_franchise(
    manager: StudioManager, state: StudioState
) -> None:
    parent = _released_harbor(state)
    started = manager.start_sequel(HARBOR)
    assert isinstance(started, SequelStarted)
    sequel = state.find_project(started.project_id)
    assert sequel is not None
    sequel.record_release(_report(release_week=30))
    calculator = SequelEligibilityCalculator()

    original = calculator.evaluate(parent, state)
    follow_up = calculator.evaluate(sequel, state)

    assert original.projected_fatigue == pytest.approx(11.0)
    assert original.next_episode == 3
    assert follow_up.projected_fatigue == pytest.approx(12 * 0.62 + 11)
