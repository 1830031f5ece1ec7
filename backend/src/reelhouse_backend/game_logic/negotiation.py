"""Talent deals, script purchases and greenlight review."""

from __future__ import annotations

import logging

from reelhouse_backend.game_logic.balance import (
    GENRE_BUDGETS,
    MIN_GREENLIGHT_SCRIPT_QUALITY,
    clamp,
)
from reelhouse_backend.game_logic.configuration import (  # noqa: TC001
    BalanceConfiguration,
)
from reelhouse_backend.game_logic.finance import FinancialLedger  # noqa: TC001
from reelhouse_backend.game_logic.progression import ArcManager  # noqa: TC001
from reelhouse_backend.game_logic.results import (
    ActionApplied,
    ActionRejected,
    ScriptAcquired,
    ScriptPassed,
    TalentAttached,
    rejected,
)
from reelhouse_backend.game_logic.state import (
    MovieProject,
    StudioState,
    Talent,
)
from reelhouse_backend.shared.enums import (
    AgentTier,
    ProjectPhase,
    TalentAvailability,
    TalentRole,
)
from reelhouse_backend.shared.value_objects import Money

logger = logging.getLogger(__name__)

AGENT_MULTIPLIERS: dict[AgentTier, float] = {
    AgentTier.INDEPENDENT: 1.0,
    AgentTier.UTA: 1.2,
    AgentTier.WME: 1.3,
    AgentTier.CAA: 1.4,
}

ATTACHMENT_HYPE_FACTOR = 0.8
REWRITE_SCRIPT_BONUS = 0.2
REWRITE_HYPE_PENALTY = 1.0


class NegotiationEngine:
    """Accept-or-reject dealmaking; a rejection never mutates the studio."""

    def __init__(
        self,
        state: StudioState,
        ledger: FinancialLedger,
        configuration: BalanceConfiguration,
        arcs: ArcManager,
    ) -> None:
        self._state = state
        self._ledger = ledger
        self._configuration = configuration
        self._arcs = arcs

    @staticmethod
    def retainer(talent: Talent) -> Money:
        """Return what signing *talent* costs after the agency markup."""
        return talent.asking_fee.multiply(AGENT_MULTIPLIERS[talent.agent_tier])

    def negotiate_and_attach_talent(
        self, project_id: str, talent_id: str
    ) -> TalentAttached | ActionRejected:
        """Sign *talent_id* onto *project_id* as director or cast."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        talent = self._state.find_talent(talent_id)
        if talent is None:
            return rejected(f"Talent '{talent_id}' not found.")

        blockers: list[str] = []
        if project.is_released:
            blockers.append("Released projects cannot take new attachments.")
        if talent.availability is TalentAvailability.ATTACHED:
            if talent.attached_project_id == project.id:
                blockers.append(
                    f"{talent.name} is already attached to this project."
                )
            else:
                blockers.append(f"{talent.name} is already committed elsewhere.")
        if talent.role is TalentRole.DIRECTOR and project.director_id is not None:
            blockers.append(f"{project.title} already has a director.")
        cost = self.retainer(talent)
        if not self._ledger.can_afford(cost):
            blockers.append(
                f"Insufficient funds: {talent.name} needs a {cost.describe()} retainer."
            )
        if blockers:
            logger.debug(
                "Deal for %s on %s rejected: %s", talent_id, project_id, blockers
            )
            return ActionRejected(
                message=f"Could not sign {talent.name}.", blockers=tuple(blockers)
            )

        self._ledger.debit(cost)
        match talent.role:
            case TalentRole.DIRECTOR:
                project.director_id = talent.id
            case TalentRole.LEAD_ACTOR:
                project.cast_ids.append(talent.id)
        talent.availability = TalentAvailability.ATTACHED
        talent.attached_project_id = project.id
        project.hype = clamp(
            project.hype + talent.star_power * ATTACHMENT_HYPE_FACTOR, 0.0, 100.0
        )
        return TalentAttached(
            message=f"{talent.name} signed to {project.title} for {cost.describe()}.",
            project_id=project.id,
            talent_id=talent.id,
            role=talent.role,
            cost=cost,
        )

    def release_talent(self, project: MovieProject) -> None:
        """Free every talent attached to *project* once it has released."""
        for talent in self._state.talent:
            if talent.attached_project_id == project.id:
                talent.availability = TalentAvailability.AVAILABLE
                talent.attached_project_id = None

    def acquire_script(self, script_id: str) -> ScriptAcquired | ActionRejected:
        """Buy a pitch off the market and open it as a development project."""
        pitch = self._state.find_script(script_id)
        if pitch is None:
            return rejected(f"Script '{script_id}' is no longer on the market.")
        if not self._ledger.can_afford(pitch.asking_price):
            return rejected(
                f"Insufficient funds to buy {pitch.title}.",
                f"Asking price is {pitch.asking_price.describe()}.",
            )

        self._ledger.debit(pitch.asking_price)
        self._state.script_market.remove(pitch)
        project = MovieProject(
            id=self._state.next_id("project"),
            title=pitch.title,
            genre=pitch.genre,
            script_quality=pitch.script_quality,
            concept_strength=pitch.concept_strength,
            hype=round(6 + pitch.concept_strength * 1.2, 2),
            budget=GENRE_BUDGETS[pitch.genre],
        )
        self._state.projects.append(project)
        self._arcs.on_script_acquired(project)
        return ScriptAcquired(
            message=f"Acquired {pitch.title} for {pitch.asking_price.describe()}.",
            script_id=pitch.id,
            project_id=project.id,
            cost=pitch.asking_price,
        )

    def pass_script(self, script_id: str) -> ScriptPassed | ActionRejected:
        """Drop a pitch from the market."""
        pitch = self._state.find_script(script_id)
        if pitch is None:
            return rejected(f"Script '{script_id}' is no longer on the market.")
        self._state.script_market.remove(pitch)
        return ScriptPassed(message=f"Passed on {pitch.title}.", script_id=pitch.id)

    def approve_greenlight(self, project_id: str) -> ActionApplied | ActionRejected:
        """Pay the approval fee and greenlight a development project."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        blockers: list[str] = []
        if project.phase is not ProjectPhase.DEVELOPMENT:
            blockers.append("Greenlight review happens during development.")
        if project.greenlight_approved:
            blockers.append(f"{project.title} is already greenlit.")
        if project.script_quality < MIN_GREENLIGHT_SCRIPT_QUALITY:
            blockers.append(
                f"Script quality {project.script_quality:.1f} is below "
                f"{MIN_GREENLIGHT_SCRIPT_QUALITY:.1f}."
            )
        fee = project.budget.multiply(self._configuration.greenlight_fee_rate)
        if not self._ledger.can_afford(fee):
            blockers.append(
                f"Insufficient funds for the {fee.describe()} approval fee."
            )
        if blockers:
            return ActionRejected(
                message=f"Greenlight denied for {project.title}.",
                blockers=tuple(blockers),
            )
        self._ledger.debit(fee)
        project.greenlight_approved = True
        return ActionApplied(
            message=f"{project.title} greenlit ({fee.describe()} approval fee).",
            project_id=project.id,
        )

    def send_back_for_rewrite(self, project_id: str) -> ActionApplied | ActionRejected:
        """Return a development script for another draft."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        if project.phase is not ProjectPhase.DEVELOPMENT:
            return rejected("Only development scripts can go back for a rewrite.")
        project.script_quality = round(
            clamp(project.script_quality + REWRITE_SCRIPT_BONUS, 0.0, 10.0), 2
        )
        project.hype = clamp(project.hype - REWRITE_HYPE_PENALTY, 0.0, 100.0)
        project.rewrite_count += 1
        project.greenlight_approved = False
        return ActionApplied(
            message=(
                f"{project.title} sent back for a rewrite "
                f"(script {project.script_quality:.1f})."
            ),
            project_id=project.id,
        )


__all__ = ["AGENT_MULTIPLIERS", "NegotiationEngine"]
