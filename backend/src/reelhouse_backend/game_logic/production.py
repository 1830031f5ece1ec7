"""Discretionary spending on projects: rewrites, polish, marketing and sequels."""

from __future__ import annotations

import logging

from reelhouse_backend.game_logic.balance import GENRE_BUDGETS, clamp
from reelhouse_backend.game_logic.configuration import (  # noqa: TC001
    BalanceConfiguration,
)
from reelhouse_backend.game_logic.finance import FinancialLedger  # noqa: TC001
from reelhouse_backend.game_logic.franchise import SequelEligibilityCalculator
from reelhouse_backend.game_logic.progression import ArcManager  # noqa: TC001
from reelhouse_backend.game_logic.results import (
    ActionApplied,
    ActionRejected,
    OptionalActionApplied,
    SequelStarted,
    rejected,
)
from reelhouse_backend.game_logic.state import MovieProject, StudioState
from reelhouse_backend.shared.enums import ProjectPhase
from reelhouse_backend.shared.value_objects import Money  # noqa: TC001

logger = logging.getLogger(__name__)

SCRIPT_SPRINT_BONUS = 0.5
SCRIPT_SPRINT_CAP = 8.5
POLISH_HYPE = 2.0
MAX_POLISH_PASSES = 2


class ProductionDesk:
    """Paid project improvements; every rejection leaves the studio untouched."""

    def __init__(
        self,
        state: StudioState,
        ledger: FinancialLedger,
        configuration: BalanceConfiguration,
        arcs: ArcManager,
        sequels: SequelEligibilityCalculator | None = None,
    ) -> None:
        self._state = state
        self._ledger = ledger
        self._configuration = configuration
        self._arcs = arcs
        self._sequels = sequels or SequelEligibilityCalculator()

    def run_optional_action(self) -> OptionalActionApplied | ActionRejected:
        """Push the least-marketed unreleased project with a publicity burst."""
        candidates = [p for p in self._state.projects if not p.is_released]
        if not candidates:
            return rejected("No unreleased project to promote.")
        cost = self._configuration.optional_action_cost
        if not self._ledger.can_afford(cost):
            return rejected(
                "Insufficient funds for a publicity push.",
                f"A push costs {cost.describe()}.",
            )
        project = min(candidates, key=lambda p: p.marketing_budget.amount)
        self._ledger.debit(cost)
        project.marketing_budget = project.marketing_budget.add(cost)
        project.hype = clamp(
            project.hype + self._configuration.optional_action_hype, 0.0, 100.0
        )
        return OptionalActionApplied(
            message=f"Publicity push for {project.title} ({cost.describe()}).",
            project_id=project.id,
            cost=cost,
        )

    def run_script_sprint(self, project_id: str) -> ActionApplied | ActionRejected:
        """Pay a writers' room to lift a development script."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        cost = self._configuration.script_sprint_cost
        blockers: list[str] = []
        if project.phase is not ProjectPhase.DEVELOPMENT:
            blockers.append("Script sprints only run during development.")
        if project.script_quality >= SCRIPT_SPRINT_CAP:
            blockers.append(
                f"Script already at the {SCRIPT_SPRINT_CAP:.1f} sprint ceiling."
            )
        if not self._ledger.can_afford(cost):
            blockers.append(f"Insufficient funds: a sprint costs {cost.describe()}.")
        if blockers:
            return ActionRejected(
                message=f"Script sprint unavailable for {project.title}.",
                blockers=tuple(blockers),
            )
        self._ledger.debit(cost)
        project.script_quality = round(
            min(SCRIPT_SPRINT_CAP, project.script_quality + SCRIPT_SPRINT_BONUS), 2
        )
        return ActionApplied(
            message=(
                f"Script sprint lifted {project.title} "
                f"to {project.script_quality:.1f}."
            ),
            project_id=project.id,
        )

    def run_polish_pass(self, project_id: str) -> ActionApplied | ActionRejected:
        """Pay for extra post-production polish."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        cost = self._configuration.polish_pass_cost
        blockers: list[str] = []
        if project.phase is not ProjectPhase.POST_PRODUCTION:
            blockers.append("Polish passes only run during post-production.")
        if project.polish_passes_used >= MAX_POLISH_PASSES:
            blockers.append(f"All {MAX_POLISH_PASSES} polish passes already used.")
        if not self._ledger.can_afford(cost):
            blockers.append(f"Insufficient funds: a pass costs {cost.describe()}.")
        if blockers:
            return ActionRejected(
                message=f"Polish pass unavailable for {project.title}.",
                blockers=tuple(blockers),
            )
        self._ledger.debit(cost)
        project.polish_passes_used += 1
        project.hype = clamp(project.hype + POLISH_HYPE, 0.0, 100.0)
        return ActionApplied(
            message=f"Polish pass {project.polish_passes_used} on {project.title}.",
            project_id=project.id,
        )

    def fund_marketing(
        self, project_id: str, amount: Money
    ) -> ActionApplied | ActionRejected:
        """Commit *amount* to *project_id*'s marketing budget."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        blockers: list[str] = []
        if project.is_released:
            blockers.append("Released projects no longer take marketing spend.")
        if not amount.is_positive:
            blockers.append("Marketing spend must be positive.")
        elif not self._ledger.can_afford(amount):
            blockers.append(f"Insufficient funds for {amount.describe()} of marketing.")
        if blockers:
            return ActionRejected(
                message=f"Marketing not funded for {project.title}.",
                blockers=tuple(blockers),
            )
        self._ledger.debit(amount)
        project.marketing_budget = project.marketing_budget.add(amount)
        return ActionApplied(
            message=(
                f"{project.title} marketing now "
                f"{project.marketing_budget.describe()}."
            ),
            project_id=project.id,
        )

    def start_sequel(self, project_id: str) -> SequelStarted | ActionRejected:
        """Open the next franchise entry for a released project."""
        parent = self._state.find_project(project_id)
        if parent is None:
            return rejected(f"Project '{project_id}' not found.")
        eligibility = self._sequels.evaluate(parent, self._state)
        if not eligibility.eligible:
            return rejected(
                f"{parent.title} cannot spawn a sequel.", eligibility.reason or ""
            )
        self._ledger.debit(eligibility.upfront_cost)
        sequel = MovieProject(
            id=self._state.next_id("project"),
            title=f"{_franchise_title(parent)} {eligibility.next_episode}",
            genre=parent.genre,
            script_quality=round(max(5.0, parent.script_quality - 0.4), 2),
            concept_strength=parent.concept_strength,
            hype=eligibility.carryover_hype,
            budget=GENRE_BUDGETS[parent.genre],
            franchise_id=parent.franchise_id or parent.id,
            episode=eligibility.next_episode,
            parent_project_id=parent.id,
        )
        self._state.projects.append(sequel)
        if parent.franchise_id is None:
            parent.franchise_id = parent.id
        self._arcs.on_sequel_started(sequel)
        logger.info("Sequel %s opened from %s", sequel.id, parent.id)
        return SequelStarted(
            message=f"{sequel.title} enters development.",
            project_id=sequel.id,
            parent_project_id=parent.id,
            episode=sequel.episode,
            cost=eligibility.upfront_cost,
        )


def _franchise_title(project: MovieProject) -> str:
    suffix = f" {project.episode}"
    if project.episode > 1 and project.title.endswith(suffix):
        return project.title.removesuffix(suffix)
    return project.title


__all__ = ["ProductionDesk"]
