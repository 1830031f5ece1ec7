"""Project phase state machine and its gates."""

from __future__ import annotations

import logging

from reelhouse_backend.game_logic.balance import (
    MIN_GREENLIGHT_SCRIPT_QUALITY,
    PHASE_SCHEDULE_WEEKS,
    RELEASE_LEAD_WEEKS,
)
from reelhouse_backend.game_logic.distribution import DistributionDesk  # noqa: TC001
from reelhouse_backend.game_logic.finance import FinancialLedger  # noqa: TC001
from reelhouse_backend.game_logic.negotiation import NegotiationEngine  # noqa: TC001
from reelhouse_backend.game_logic.progression import (  # noqa: TC001
    ArcManager,
    TierProgressionTracker,
)
from reelhouse_backend.game_logic.release import ReleaseSimulator, studio_rental
from reelhouse_backend.game_logic.results import (
    ActionRejected,
    PhaseAdvanced,
    rejected,
)
from reelhouse_backend.game_logic.state import (
    MovieProject,
    ReleaseReport,
    StudioState,
)
from reelhouse_backend.shared.enums import (
    ChronicleCategory,
    ChronicleImpact,
    ProjectPhase,
    ReleaseOutcome,
)
from reelhouse_backend.shared.events import ChronicleLog  # noqa: TC001

logger = logging.getLogger(__name__)

PHASE_SEQUENCE: tuple[ProjectPhase, ...] = (
    ProjectPhase.DEVELOPMENT,
    ProjectPhase.PRE_PRODUCTION,
    ProjectPhase.PRODUCTION,
    ProjectPhase.POST_PRODUCTION,
    ProjectPhase.DISTRIBUTION,
    ProjectPhase.RELEASED,
)


def next_phase(phase: ProjectPhase) -> ProjectPhase | None:
    """Return the phase following *phase*, or ``None`` once released."""
    index = PHASE_SEQUENCE.index(phase)
    return PHASE_SEQUENCE[index + 1] if index + 1 < len(PHASE_SEQUENCE) else None


def phase_blockers(project: MovieProject, state: StudioState) -> list[str]:
    """Return every reason *project* cannot leave its current phase."""
    blockers: list[str] = []
    weeks = project.scheduled_weeks_remaining
    match project.phase:
        case ProjectPhase.DEVELOPMENT:
            if project.director_id is None:
                blockers.append("Director not attached")
            if not project.cast_ids:
                blockers.append("No cast attached")
            if project.script_quality < MIN_GREENLIGHT_SCRIPT_QUALITY:
                blockers.append(
                    f"Script quality {project.script_quality:.2f} is below "
                    f"{MIN_GREENLIGHT_SCRIPT_QUALITY:.1f}"
                )
            if not project.greenlight_approved:
                blockers.append("Greenlight not approved")
        case ProjectPhase.PRE_PRODUCTION:
            if weeks > 0:
                blockers.append(f"{weeks} scheduled week(s) remaining")
        case ProjectPhase.PRODUCTION:
            if weeks > 0:
                blockers.append(f"{weeks} scheduled week(s) remaining")
            open_crises = len(state.crises_for(project.id))
            if open_crises:
                blockers.append(f"{open_crises} unresolved crisis(es) on this project")
        case ProjectPhase.POST_PRODUCTION:
            if weeks > 0:
                blockers.append(f"{weeks} scheduled week(s) remaining")
            if not project.marketing_budget.is_positive:
                blockers.append("Marketing budget not set")
        case ProjectPhase.DISTRIBUTION:
            if weeks > 0:
                blockers.append(f"{weeks} scheduled week(s) remaining")
            if project.release_window is None:
                blockers.append("No distribution deal accepted")
            if project.release_week is None or state.week < project.release_week:
                blockers.append(
                    f"Release week {project.release_week} not reached "
                    f"(current week {state.week})"
                )
        case ProjectPhase.RELEASED:
            blockers.append("Project already released")
    return blockers


class ProjectPhaseMachine:
    """Move projects forward one phase at a time, all-or-nothing."""

    def __init__(
        self,
        state: StudioState,
        *,
        ledger: FinancialLedger,
        chronicle: ChronicleLog,
        simulator: ReleaseSimulator,
        tiers: TierProgressionTracker,
        arcs: ArcManager,
        negotiation: NegotiationEngine,
        distribution: DistributionDesk,
    ) -> None:
        self._state = state
        self._ledger = ledger
        self._chronicle = chronicle
        self._simulator = simulator
        self._tiers = tiers
        self._arcs = arcs
        self._negotiation = negotiation
        self._distribution = distribution

    def advance(self, project_id: str) -> PhaseAdvanced | ActionRejected:
        """Try to move *project_id* into its next phase."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        blockers = phase_blockers(project, self._state)
        target = next_phase(project.phase)
        if blockers or target is None:
            logger.debug("Project %s blocked: %s", project_id, blockers)
            return ActionRejected(
                message=f"{project.title} cannot leave {project.phase} yet.",
                blockers=tuple(blockers),
            )

        previous = project.phase
        report: ReleaseReport | None = None
        if target is ProjectPhase.RELEASED:
            report = self._release(project)
        else:
            project.phase = target
            project.scheduled_weeks_remaining = PHASE_SCHEDULE_WEEKS[target]
            if target is ProjectPhase.DISTRIBUTION:
                project.release_week = self._state.week + RELEASE_LEAD_WEEKS
                self._distribution.generate_offers(project)

        logger.info("Project %s advanced %s -> %s", project.id, previous, target)
        return PhaseAdvanced(
            message=f"{project.title} moved to {target}.",
            project_id=project.id,
            previous_phase=previous,
            phase=target,
            release_report=report,
        )

    def _release(self, project: MovieProject) -> ReleaseReport:
        state = self._state
        report = self._simulator.simulate(project, state)
        project.record_release(report)
        project.scheduled_weeks_remaining = 0

        offer = project.accepted_offer()
        if offer is not None:
            self._ledger.credit(
                studio_rental(report, offer.revenue_share, offer.minimum_guarantee)
            )
        if report.was_record_opening:
            state.record_opening = report.opening_weekend_gross
        state.release_count += 1
        state.adjust_heat(ReleaseSimulator.heat_delta(report))

        self._chronicle.record(
            week=state.week,
            category=ChronicleCategory.FILM_RELEASE,
            headline=(
                f"{project.title} opens to "
                f"{report.opening_weekend_gross.describe()}"
            ),
            detail=(
                f"{report.outcome}; critics {report.critical_score:.0f}, "
                f"audience {report.audience_score:.0f}, "
                f"profit {report.profit.describe()}."
            ),
            project_title=project.title,
            impact=_release_impact(report.outcome),
        )
        self._negotiation.release_talent(project)
        self._tiers.evaluate()
        self._arcs.on_release(project)
        return report


def _release_impact(outcome: ReleaseOutcome) -> ChronicleImpact:
    match outcome:
        case ReleaseOutcome.BLOCKBUSTER | ReleaseOutcome.HIT:
            return ChronicleImpact.POSITIVE
        case ReleaseOutcome.SOLID:
            return ChronicleImpact.NEUTRAL
        case ReleaseOutcome.FLOP | ReleaseOutcome.BOMB:
            return ChronicleImpact.NEGATIVE


__all__ = [
    "PHASE_SEQUENCE",
    "ProjectPhaseMachine",
    "next_phase",
    "phase_blockers",
]
