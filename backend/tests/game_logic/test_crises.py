"""Crisis rolls, the production gate and the decision queue cap."""

from __future__ import annotations

import pytest

from reelhouse_backend.game_logic import (
    BalanceConfiguration,
    Crisis,
    CrisisOption,
    StudioState,
)
from reelhouse_backend.game_logic.crises import (
    CRISIS_BASE_CHANCE,
    CRISIS_TEMPLATES,
    MAX_QUEUED_DECISIONS,
    CrisisEngine,
    DecisionEngine,
)
from reelhouse_backend.game_logic.finance import FinancialLedger
from reelhouse_backend.game_logic.phases import phase_blockers
from reelhouse_backend.shared import (
    ChronicleLog,
    CrisisSeverity,
    DeterministicRandomService,
    Money,
    ProjectPhase,
)

HARBOR = "project-harbor-lights"
NIGHT_CIRCUIT = "project-night-circuit"


class AlwaysRandom(DeterministicRandomService):
    """Random source whose every roll succeeds."""

    def chance(self, probability: float) -> bool:
        return True


def _crisis(crisis_id: str, project_id: str) -> Crisis:
    return Crisis(
        id=crisis_id,
        project_id=project_id,
        title="Lead Actor Injured",
        body="Stunt rehearsal went wrong.",
        severity=CrisisSeverity.HIGH,
        options=(
            CrisisOption(
                id=f"{crisis_id}-wait",
                label="Shoot around them",
                preview="+2 weeks.",
                cash_delta=Money.of(0),
                schedule_delta=2,
            ),
        ),
    )


def _crisis_engine(
    state: StudioState, configuration: BalanceConfiguration
) -> CrisisEngine:
    return CrisisEngine(
        state,
        FinancialLedger(state, configuration),
        ChronicleLog(state.chronicle),
        AlwaysRandom(7),
    )


def test_production_gate_waits_only_on_its_own_crises(state: StudioState) -> None:
    project = state.find_project(HARBOR)
    assert project is not None
    project.phase = ProjectPhase.PRODUCTION

    state.pending_crises.append(_crisis("crisis-elsewhere", NIGHT_CIRCUIT))
    assert phase_blockers(project, state) == []

    state.pending_crises.append(_crisis("crisis-here", HARBOR))
    assert phase_blockers(project, state) == [
        "1 unresolved crisis(es) on this project"
    ]


@pytest.mark.parametrize(
    ("phase", "at_risk"),
    [
        (ProjectPhase.DEVELOPMENT, False),
        (ProjectPhase.PRE_PRODUCTION, True),
        (ProjectPhase.PRODUCTION, True),
        (ProjectPhase.POST_PRODUCTION, True),
        (ProjectPhase.DISTRIBUTION, False),
    ],
)
def test_crises_only_strike_projects_in_the_making(
    configuration: BalanceConfiguration,
    state: StudioState,
    phase: ProjectPhase,
    at_risk: bool,
) -> None:
    for project in state.projects:
        project.phase = phase
    events: list[str] = []

    raised = _crisis_engine(state, configuration).roll(events)

    assert (phase in CRISIS_BASE_CHANCE) is at_risk
    if not at_risk:
        assert raised == []
        return
    assert {crisis.project_id for crisis in raised} == {HARBOR, NIGHT_CIRCUIT}
    titles = {template.title for template in CRISIS_TEMPLATES[phase]}
    assert all(crisis.title in titles for crisis in raised)
    assert len(events) == len(raised)


def test_a_project_carries_at_most_one_pending_crisis(
    configuration: BalanceConfiguration, state: StudioState
) -> None:
    project = state.find_project(HARBOR)
    assert project is not None
    project.phase = ProjectPhase.PRODUCTION
    engine = _crisis_engine(state, configuration)

    first = engine.roll([])
    second = engine.roll([])

    assert [crisis.project_id for crisis in first] == [HARBOR]
    assert second == []
    assert len(state.crises_for(HARBOR)) == 1


def test_decision_queue_stops_growing_at_its_cap(
    configuration: BalanceConfiguration, state: StudioState
) -> None:
    ledger = FinancialLedger(state, configuration)
    engine = DecisionEngine(state, ledger, AlwaysRandom(3))
    state.decision_queue.clear()

    generated = [engine.maybe_generate([]) for _ in range(MAX_QUEUED_DECISIONS + 2)]

    assert all(item is not None for item in generated[:MAX_QUEUED_DECISIONS])
    assert generated[MAX_QUEUED_DECISIONS:] == [None, None]
    assert len(state.decision_queue) == MAX_QUEUED_DECISIONS
