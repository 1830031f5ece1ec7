"""Tier promotion and the narrative arcs the studio gets pulled into."""

from __future__ import annotations

import pytest

from reelhouse_backend.game_logic import (
    BalanceConfiguration,
    Crisis,
    CrisisOption,
    MovieProject,
    PhaseAdvanced,
    ReleaseReport,
    ScriptAcquired,
    ScriptPitch,
    SequelStarted,
    StudioManager,
    StudioState,
    WeekAdvanced,
)
from reelhouse_backend.game_logic.finance import FinancialLedger
from reelhouse_backend.game_logic.progression import ArcManager
from reelhouse_backend.shared import (
    ArcKey,
    ArcStatus,
    ChronicleCategory,
    ChronicleLog,
    CrisisSeverity,
    Genre,
    Money,
    PartnerStance,
    ProjectPhase,
    ReleaseOutcome,
    StudioTier,
)

PARTNER = "Aster Peak Pictures"
HARBOR = "project-harbor-lights"
NIGHT_CIRCUIT = "project-night-circuit"


@pytest.fixture
def arcs(configuration: BalanceConfiguration, state: StudioState) -> ArcManager:
    return ArcManager(
        state, FinancialLedger(state, configuration), ChronicleLog(state.chronicle)
    )


def test_tiers_climb_through_every_satisfied_gate_and_never_regress(
    manager: StudioManager, state: StudioState
) -> None:
    state.release_count = 3
    state.heat = 50.0

    result = manager.end_week()

    assert isinstance(result, WeekAdvanced)
    assert manager.tier is StudioTier.MID_TIER
    assert "Promoted to Established Indie." in result.events
    assert "Promoted to Mid-Tier Studio." in result.events
    promotions = [
        entry
        for entry in manager.chronicle().entries
        if entry.category is ChronicleCategory.TIER_ADVANCE
    ]
    assert len(promotions) == 2

    state.heat = 0.0
    manager.end_week()

    assert manager.tier is StudioTier.MID_TIER


def test_tier_gate_needs_both_releases_and_heat(
    manager: StudioManager, state: StudioState
) -> None:
    state.heat = 90.0

    manager.end_week()

    assert manager.tier is StudioTier.INDIE_STUDIO


def test_hostile_partner_opens_an_exhibitor_war_that_cordiality_resolves(
    arcs: ArcManager, state: StudioState
) -> None:
    heat_before = state.heat

    arcs.set_stance(PARTNER, PartnerStance.HOSTILE)

    war = state.find_arc(ArcKey.EXHIBITOR_WAR)
    assert war is not None
    assert war.status is ArcStatus.ACTIVE
    assert war.partner == PARTNER

    closed = arcs.set_stance(PARTNER, PartnerStance.RESPECTFUL)

    assert closed == [war]
    assert war.status is ArcStatus.RESOLVED
    assert war.stage == 1
    assert state.heat == pytest.approx(heat_before + 3)
    assert state.chronicle[-1].headline == "Exhibitor War resolved"


def test_exhibitor_war_collapses_after_its_deadline(
    arcs: ArcManager, state: StudioState
) -> None:
    arcs.set_stance(PARTNER, PartnerStance.HOSTILE)
    cash_before = state.cash
    state.week = 13

    arcs.on_week_ended()

    war = state.find_arc(ArcKey.EXHIBITOR_WAR)
    assert war is not None
    assert war.status is ArcStatus.FAILED
    assert state.cash == cash_before.subtract(Money.of(500_000))


def test_arcs_are_not_duplicated_for_the_same_target(arcs: ArcManager) -> None:
    assert arcs.open(ArcKey.FINANCIER_CONTROL) is not None
    assert arcs.open(ArcKey.FINANCIER_CONTROL) is None
    assert len(arcs.active()) == 1


def test_unchanged_stance_is_a_no_op(arcs: ArcManager, state: StudioState) -> None:
    assert arcs.set_stance(PARTNER, PartnerStance.NEUTRAL) == []
    assert state.arcs == []


def test_persistent_low_cash_brings_in_the_financiers(
    manager: StudioManager, state: StudioState
) -> None:
    state.cash = Money.of(800_000)

    manager.end_week()
    manager.end_week()

    arc = state.find_arc(ArcKey.FINANCIER_CONTROL)
    assert arc is not None
    assert arc.status is ArcStatus.ACTIVE
    assert [a.key for a in manager.arcs()] == [ArcKey.FINANCIER_CONTROL]


def _report(
    outcome: ReleaseOutcome = ReleaseOutcome.SOLID, *, critical: float = 70.0
) -> ReleaseReport:
    return ReleaseReport(
        outcome=outcome,
        was_record_opening=False,
        profit=Money.of(4_000_000),
        roi=1.2,
        score=6.0,
        breakdown={"script": 4.0, "timing": 2.0},
        opening_weekend_gross=Money.of(8_000_000),
        final_box_office=Money.of(24_000_000),
        total_cost=Money.of(20_000_000),
        critical_score=critical,
        audience_score=66.0,
        awards_nominations=0,
        awards_wins=0,
        release_week=10,
    )


def _release(
    state: StudioState, project_id: str, report: ReleaseReport
) -> MovieProject:
    project = state.find_project(project_id)
    assert project is not None
    project.record_release(report)
    return project


def _crisis(title: str, severity: CrisisSeverity, project_id: str = HARBOR) -> Crisis:
    return Crisis(
        id=f"crisis-{project_id}",
        project_id=project_id,
        title=title,
        body="Trouble on set.",
        severity=severity,
        options=(
            CrisisOption(
                id="absorb",
                label="Absorb it",
                preview="-$100K",
                cash_delta=Money.of(-100_000),
            ),
        ),
        raised_week=1,
    )


def _pitch(script_id: str, quality: float, concept: float) -> ScriptPitch:
    return ScriptPitch(
        id=script_id,
        title="Ground Truth",
        genre=Genre.DOCUMENTARY,
        asking_price=Money.of(120_000),
        script_quality=quality,
        concept_strength=concept,
    )


def _into_distribution(manager: StudioManager, state: StudioState) -> MovieProject:
    project = state.find_project(HARBOR)
    assert project is not None
    project.phase = ProjectPhase.POST_PRODUCTION
    project.marketing_budget = Money.of(2_000_000)
    result = manager.advance_project_phase(HARBOR)
    assert isinstance(result, PhaseAdvanced), result.message
    return project


def test_acclaimed_release_opens_an_awards_run(
    arcs: ArcManager, state: StudioState
) -> None:
    arcs.on_release(_release(state, NIGHT_CIRCUIT, _report(critical=74.9)))
    assert state.find_arc(ArcKey.AWARDS_CIRCUIT) is None

    arcs.on_release(_release(state, HARBOR, _report(critical=75.0)))

    run = state.find_arc(ArcKey.AWARDS_CIRCUIT)
    assert run is not None
    assert run.status is ArcStatus.ACTIVE
    assert run.project_id == HARBOR


def test_screening_leak_arc_is_settled_by_the_release(
    arcs: ArcManager, state: StudioState
) -> None:
    arcs.on_crisis_resolved(_crisis("Test Screening Leak", CrisisSeverity.LOW))
    leak = state.find_arc(ArcKey.LEAK_PIRACY)
    assert leak is not None
    assert leak.project_id == HARBOR
    heat_before = state.heat

    closed = arcs.on_release(_release(state, HARBOR, _report(ReleaseOutcome.SOLID)))

    assert closed == [leak]
    assert leak.status is ArcStatus.RESOLVED
    assert state.heat == pytest.approx(heat_before + 2)


def test_leak_arc_collapses_when_the_film_flops(
    arcs: ArcManager, state: StudioState
) -> None:
    arcs.on_crisis_resolved(
        _crisis("Test Screening Leak", CrisisSeverity.LOW, NIGHT_CIRCUIT)
    )
    cash_before = state.cash

    arcs.on_release(_release(state, NIGHT_CIRCUIT, _report(ReleaseOutcome.FLOP)))

    leak = state.find_arc(ArcKey.LEAK_PIRACY)
    assert leak is not None
    assert leak.status is ArcStatus.FAILED
    assert state.cash == cash_before.subtract(Money.of(250_000))


def test_high_severity_crisis_opens_a_talent_meltdown(
    arcs: ArcManager, state: StudioState
) -> None:
    arcs.on_crisis_resolved(_crisis("Location Scout Quits", CrisisSeverity.MEDIUM))
    assert state.arcs == []

    arcs.on_crisis_resolved(_crisis("Set Build Failure", CrisisSeverity.HIGH))
    meltdown = state.find_arc(ArcKey.TALENT_MELTDOWN)
    assert meltdown is not None
    heat_before = state.heat

    arcs.on_release(_release(state, HARBOR, _report(critical=45.0)))

    assert meltdown.status is ArcStatus.FAILED
    assert state.heat == pytest.approx(heat_before - 3)


def test_a_passion_script_opens_a_passion_project(
    manager: StudioManager, state: StudioState
) -> None:
    state.script_market.append(_pitch("script-safe", quality=7.0, concept=6.0))
    assert manager.acquire_script("script-safe").succeeded
    assert state.arcs == []

    state.script_market.append(_pitch("script-passion", quality=8.0, concept=5.0))
    result = manager.acquire_script("script-passion")

    assert isinstance(result, ScriptAcquired)
    arc = state.find_arc(ArcKey.PASSION_PROJECT)
    assert arc is not None
    assert arc.status is ArcStatus.ACTIVE
    assert arc.project_id == result.project_id


def test_a_sequel_bets_on_a_franchise_pivot(
    manager: StudioManager, arcs: ArcManager, state: StudioState
) -> None:
    _release(state, HARBOR, _report(ReleaseOutcome.HIT))
    state.heat = 40.0

    started = manager.start_sequel(HARBOR)

    assert isinstance(started, SequelStarted)
    pivot = state.find_arc(ArcKey.FRANCHISE_PIVOT)
    assert pivot is not None
    assert pivot.project_id == started.project_id
    heat_before = state.heat

    arcs.on_release(_release(state, started.project_id, _report(ReleaseOutcome.HIT)))

    assert pivot.status is ArcStatus.RESOLVED
    assert state.heat == pytest.approx(heat_before + 5)


def test_passing_over_the_top_bidder_cools_that_partner(
    manager: StudioManager, state: StudioState
) -> None:
    project = _into_distribution(manager, state)
    offers = sorted(
        project.distribution_offers, key=lambda o: o.minimum_guarantee.amount
    )
    lowest, top = offers[0], offers[-1]

    assert manager.accept_distribution_offer(HARBOR, lowest.id).succeeded

    assert state.partner_stances[lowest.partner] is PartnerStance.RESPECTFUL
    assert state.partner_stances[top.partner] is PartnerStance.COMPETITIVE
    power_play = state.find_arc(ArcKey.EXHIBITOR_POWER_PLAY)
    assert power_play is not None
    assert power_play.partner == top.partner


def test_snubbing_a_competitive_partner_starts_an_exhibitor_war(
    manager: StudioManager, state: StudioState
) -> None:
    project = _into_distribution(manager, state)
    offers = sorted(
        project.distribution_offers, key=lambda o: o.minimum_guarantee.amount
    )
    lowest, top = offers[0], offers[-1]
    state.partner_stances[top.partner] = PartnerStance.COMPETITIVE

    assert manager.accept_distribution_offer(HARBOR, lowest.id).succeeded

    assert state.partner_stances[top.partner] is PartnerStance.HOSTILE
    war = state.find_arc(ArcKey.EXHIBITOR_WAR)
    assert war is not None
    assert war.partner == top.partner


def test_taking_the_top_bid_snubs_nobody(
    manager: StudioManager, state: StudioState
) -> None:
    project = _into_distribution(manager, state)
    top = max(project.distribution_offers, key=lambda o: o.minimum_guarantee.amount)

    assert manager.accept_distribution_offer(HARBOR, top.id).succeeded

    for offer in project.distribution_offers:
        if offer.id != top.id:
            assert state.partner_stances[offer.partner] is PartnerStance.NEUTRAL
    assert state.arcs == []
