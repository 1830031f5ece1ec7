"""Root aggregate that owns a studio and exposes every player operation.

:class:`StudioManager` is the only writer of :class:`StudioState`. It builds
the sub-components around the state it owns, routes each player action to the
component responsible for it and returns a tagged result. ``end_week`` is the
only operation that advances simulated time.
"""

from __future__ import annotations

import logging

from reelhouse_backend.game_logic.configuration import (
    BalanceConfiguration,
    build_studio_configuration,
)
from reelhouse_backend.game_logic.crises import (
    DECISION_TEMPLATES,
    CrisisEngine,
    DecisionEngine,
)
from reelhouse_backend.game_logic.distribution import DistributionDesk
from reelhouse_backend.game_logic.errors import SnapshotRestoreError
from reelhouse_backend.game_logic.festivals import AwardsCeremony, FestivalCircuit
from reelhouse_backend.game_logic.finance import FinancialLedger
from reelhouse_backend.game_logic.franchise import (
    SequelEligibility,
    SequelEligibilityCalculator,
)
from reelhouse_backend.game_logic.market import ScriptMarket
from reelhouse_backend.game_logic.negotiation import NegotiationEngine
from reelhouse_backend.game_logic.persistence import (
    SNAPSHOT_VERSION,
    StudioSnapshot,
)
from reelhouse_backend.game_logic.phases import ProjectPhaseMachine
from reelhouse_backend.game_logic.production import ProductionDesk
from reelhouse_backend.game_logic.progression import (
    ArcManager,
    TierProgressionTracker,
)
from reelhouse_backend.game_logic.release import ReleaseSimulator
from reelhouse_backend.game_logic.results import (
    ActionApplied,
    ActionRejected,
    CrisisResolved,
    DecisionResolved,
    OptionalActionApplied,
    PhaseAdvanced,
    ScriptAcquired,
    ScriptPassed,
    SequelStarted,
    TalentAttached,
    WeekAdvanced,
    rejected,
)
from reelhouse_backend.game_logic.seeds import build_starting_state
from reelhouse_backend.game_logic.state import (
    Crisis,
    DecisionItem,
    MovieProject,
    NarrativeArc,
    ReleaseReport,
    ScriptPitch,
    StudioState,
    Talent,
)
from reelhouse_backend.shared.enums import (
    Festival,
    Specialization,
    StudioTier,
)
from reelhouse_backend.shared.events import ChronicleHistory, ChronicleLog
from reelhouse_backend.shared.rng import DeterministicRandomService
from reelhouse_backend.shared.value_objects import Money

logger = logging.getLogger(__name__)


class StudioManager:
    """Own a studio's canonical state and run every operation against it."""

    def __init__(
        self,
        configuration: BalanceConfiguration | None = None,
        *,
        state: StudioState | None = None,
        rng: DeterministicRandomService | None = None,
    ) -> None:
        self._configuration = configuration or build_studio_configuration()
        self._rng = rng or DeterministicRandomService(self._configuration.rng_seed)
        fresh = state is None
        self._state = (
            state if state is not None else build_starting_state(self._configuration)
        )
        self._wire()
        if fresh:
            self._market.refill()
            self._state.decision_queue.append(
                self._decisions.build(DECISION_TEMPLATES[0])
            )

    def _wire(self) -> None:
        state = self._state
        config = self._configuration
        self._chronicle = ChronicleLog(state.chronicle)
        self._ledger = FinancialLedger(state, config)
        self._simulator = ReleaseSimulator(self._rng)
        self._sequels = SequelEligibilityCalculator()
        self._tiers = TierProgressionTracker(state, self._chronicle)
        self._arcs = ArcManager(state, self._ledger, self._chronicle)
        self._crises = CrisisEngine(state, self._ledger, self._chronicle, self._rng)
        self._decisions = DecisionEngine(state, self._ledger, self._rng)
        self._negotiation = NegotiationEngine(state, self._ledger, config, self._arcs)
        self._distribution = DistributionDesk(
            state, self._ledger, self._arcs, self._rng
        )
        self._market = ScriptMarket(state, self._rng)
        self._festivals = FestivalCircuit(state, self._chronicle, self._rng, config)
        self._awards = AwardsCeremony(state, self._chronicle, self._arcs, config)
        self._production = ProductionDesk(
            state, self._ledger, config, self._arcs, self._sequels
        )
        self._phases = ProjectPhaseMachine(
            state,
            ledger=self._ledger,
            chronicle=self._chronicle,
            simulator=self._simulator,
            tiers=self._tiers,
            arcs=self._arcs,
            negotiation=self._negotiation,
            distribution=self._distribution,
        )

    def to_snapshot(self) -> StudioSnapshot:
        """Return a detached snapshot from which this studio can be rebuilt."""
        return StudioSnapshot(
            state=self._state.model_copy(deep=True),
            configuration=self._configuration,
            rng_state=self._rng.export_state(),
        )

    @classmethod
    def from_snapshot(cls, snapshot: StudioSnapshot) -> StudioManager:
        """Rebuild a manager, RNG position included, from *snapshot*."""
        if snapshot.version != SNAPSHOT_VERSION:
            msg = f"Unsupported snapshot version {snapshot.version}."
            raise SnapshotRestoreError(msg)
        state = snapshot.state.model_copy(deep=True)
        _check_references(state)
        rng = DeterministicRandomService(snapshot.configuration.rng_seed)
        if snapshot.rng_state is not None:
            try:
                rng.restore_state(snapshot.rng_state)
            except (TypeError, ValueError) as exc:
                msg = "Snapshot carries an unreadable random state."
                raise SnapshotRestoreError(msg) from exc
        return cls(snapshot.configuration, state=state, rng=rng)

    @property
    def configuration(self) -> BalanceConfiguration:
        """Return the balance configuration this studio runs with."""
        return self._configuration

    @property
    def week(self) -> int:
        """Return the current week number."""
        return self._state.week

    @property
    def cash(self) -> Money:
        """Return the current cash balance."""
        return self._state.cash

    @property
    def tier(self) -> StudioTier:
        """Return the current studio tier."""
        return self._state.tier

    @property
    def heat(self) -> float:
        """Return the current studio heat."""
        return self._state.heat

    @property
    def is_bankrupt(self) -> bool:
        """Return ``True`` once bankruptcy has been declared."""
        return self._state.is_bankrupt

    @property
    def bankruptcy_reason(self) -> str | None:
        """Return why the studio went bankrupt, if it has."""
        return self._state.bankruptcy_reason

    def state_view(self) -> StudioState:
        """Return a deep copy of the whole studio state."""
        return self._state.model_copy(deep=True)

    def pending_crises(self) -> tuple[Crisis, ...]:
        """Return the crises blocking the end of the week."""
        return tuple(self._state.pending_crises)

    def decision_queue(self) -> list[DecisionItem]:
        """Return copies of the queued decisions."""
        return [item.model_copy(deep=True) for item in self._state.decision_queue]

    def projects(self) -> list[MovieProject]:
        """Return copies of every project on the slate."""
        return [project.model_copy(deep=True) for project in self._state.projects]

    def project(self, project_id: str) -> MovieProject | None:
        """Return a copy of a single project, if it exists."""
        project = self._state.find_project(project_id)
        return project.model_copy(deep=True) if project is not None else None

    def talent(self) -> list[Talent]:
        """Return copies of the talent roster."""
        return [talent.model_copy(deep=True) for talent in self._state.talent]

    def script_market(self) -> list[ScriptPitch]:
        """Return copies of the pitches currently for sale."""
        return [pitch.model_copy(deep=True) for pitch in self._state.script_market]

    def arcs(self) -> list[NarrativeArc]:
        """Return copies of every narrative arc, closed ones included."""
        return [arc.model_copy(deep=True) for arc in self._state.arcs]

    def release_report(self, project_id: str) -> ReleaseReport | None:
        """Return the release report of *project_id* once it has released."""
        project = self._state.find_project(project_id)
        return project.release_report if project is not None else None

    def sequel_eligibility(self, project_id: str) -> SequelEligibility | None:
        """Return the sequel projection for *project_id*, if it exists."""
        project = self._state.find_project(project_id)
        if project is None:
            return None
        return self._sequels.evaluate(project, self._state)

    def chronicle(self) -> ChronicleHistory:
        """Return the chronicle as a frozen projection."""
        return ChronicleHistory(entries=self._chronicle.entries())

    def end_week(self) -> WeekAdvanced | ActionRejected:
        """Advance the simulation by one week."""
        if (refusal := self._game_over()) is not None:
            return refusal
        state = self._state
        if state.pending_crises:
            return ActionRejected(
                message="Resolve every pending crisis before ending the week.",
                blockers=tuple(crisis.title for crisis in state.pending_crises),
            )

        opening_cash = state.cash
        events: list[str] = []
        self._decisions.tick_expiry(events)
        for project in state.projects:
            if project.scheduled_weeks_remaining > 0:
                project.scheduled_weeks_remaining -= 1
        burn = self._ledger.apply_weekly_burn()
        if burn.is_positive:
            events.append(f"Weekly burn: {burn.describe()}.")
        self._market.tick(events)
        self._festivals.resolve_due(events)
        self._crises.roll(events)
        self._decisions.maybe_generate(events)

        state.week += 1
        if self._awards.is_due():
            self._awards.hold(events)
        for tier in self._tiers.evaluate():
            events.append(f"Promoted to {tier.label}.")
        self._arcs.on_week_ended()
        if self._ledger.evaluate_bankruptcy():
            events.append(state.bankruptcy_reason or "Bankruptcy declared.")

        cash_delta = state.cash.subtract(opening_cash)
        logger.info(
            "Week %s begins; cash %s (%s)",
            state.week,
            state.cash.describe(),
            cash_delta.describe(),
        )
        return WeekAdvanced(
            message=f"Week {state.week} begins.",
            week=state.week,
            cash_delta=cash_delta,
            events=tuple(events),
            pending_crisis_count=len(state.pending_crises),
            decision_count=len(state.decision_queue),
        )

    def resolve_crisis(
        self, crisis_id: str, option_id: str
    ) -> CrisisResolved | ActionRejected:
        """Settle a pending crisis; unknown ids raise ``LookupError``."""
        if (refusal := self._game_over()) is not None:
            return refusal
        crisis = next(
            (c for c in self._state.pending_crises if c.id == crisis_id), None
        )
        result = self._crises.resolve(crisis_id, option_id)
        if crisis is not None:
            self._arcs.on_crisis_resolved(crisis)
        return result

    def resolve_decision(
        self, decision_id: str, option_id: str
    ) -> DecisionResolved | ActionRejected:
        """Answer a queued decision; unknown ids raise ``LookupError``."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._decisions.resolve(decision_id, option_id)

    def acquire_script(self, script_id: str) -> ScriptAcquired | ActionRejected:
        """Buy a script off the market."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._negotiation.acquire_script(script_id)

    def pass_script(self, script_id: str) -> ScriptPassed | ActionRejected:
        """Remove a script from the market."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._negotiation.pass_script(script_id)

    def negotiate_and_attach_talent(
        self, project_id: str, talent_id: str
    ) -> TalentAttached | ActionRejected:
        """Sign talent onto a project."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._negotiation.negotiate_and_attach_talent(project_id, talent_id)

    def approve_greenlight(self, project_id: str) -> ActionApplied | ActionRejected:
        """Greenlight a development project."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._negotiation.approve_greenlight(project_id)

    def send_back_for_rewrite(
        self, project_id: str
    ) -> ActionApplied | ActionRejected:
        """Send a development script back for another draft."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._negotiation.send_back_for_rewrite(project_id)

    def advance_project_phase(
        self, project_id: str
    ) -> PhaseAdvanced | ActionRejected:
        """Move a project into its next phase, releasing it at the end."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._phases.advance(project_id)

    def run_optional_action(self) -> OptionalActionApplied | ActionRejected:
        """Buy a publicity push for the least-marketed unreleased project."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._production.run_optional_action()

    def run_script_sprint(self, project_id: str) -> ActionApplied | ActionRejected:
        """Pay for a script sprint on a development project."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._production.run_script_sprint(project_id)

    def run_polish_pass(self, project_id: str) -> ActionApplied | ActionRejected:
        """Pay for a polish pass on a post-production project."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._production.run_polish_pass(project_id)

    def fund_marketing(
        self, project_id: str, amount: Money
    ) -> ActionApplied | ActionRejected:
        """Add to a project's marketing budget."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._production.fund_marketing(project_id, amount)

    def start_sequel(self, project_id: str) -> SequelStarted | ActionRejected:
        """Open a sequel to a released project."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._production.start_sequel(project_id)

    def accept_distribution_offer(
        self, project_id: str, offer_id: str
    ) -> ActionApplied | ActionRejected:
        """Sign a distribution deal for a project in distribution."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._distribution.accept_offer(project_id, offer_id)

    def set_release_week(
        self, project_id: str, week: int
    ) -> ActionApplied | ActionRejected:
        """Push a project's release date later."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._distribution.set_release_week(project_id, week)

    def submit_to_festival(
        self, project_id: str, festival: Festival
    ) -> ActionApplied | ActionRejected:
        """Enter a finished project into a festival."""
        if (refusal := self._game_over()) is not None:
            return refusal
        return self._festivals.submit(project_id, festival)

    def set_specialization(
        self, specialization: Specialization
    ) -> ActionApplied | ActionRejected:
        """Change the studio's strategic leaning."""
        if (refusal := self._game_over()) is not None:
            return refusal
        if specialization is self._state.specialization:
            return rejected(f"The studio already specializes in {specialization}.")
        self._state.specialization = specialization
        return ActionApplied(message=f"Studio now specializes in {specialization}.")

    def _game_over(self) -> ActionRejected | None:
        if not self._state.is_bankrupt:
            return None
        return rejected(f"Game over: {self._state.bankruptcy_reason}")


def _check_references(state: StudioState) -> None:
    """Reject snapshots whose cross references do not line up."""
    talent_ids = {talent.id for talent in state.talent}
    project_ids = {project.id for project in state.projects}
    if len(project_ids) != len(state.projects):
        msg = "Snapshot contains duplicate project ids."
        raise SnapshotRestoreError(msg)
    for project in state.projects:
        attached = [*project.cast_ids]
        if project.director_id is not None:
            attached.append(project.director_id)
        missing = [talent_id for talent_id in attached if talent_id not in talent_ids]
        if missing:
            msg = f"Project {project.id} references unknown talent {missing}."
            raise SnapshotRestoreError(msg)
    for crisis in state.pending_crises:
        if crisis.project_id is not None and crisis.project_id not in project_ids:
            msg = (
                f"Crisis {crisis.id} references unknown project {crisis.project_id}."
            )
            raise SnapshotRestoreError(msg)


__all__ = ["StudioManager"]
