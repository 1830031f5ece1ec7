"""Crisis and decision generation, queueing and resolution."""

from __future__ import annotations

import logging
from decimal import Decimal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from reelhouse_backend.game_logic.balance import clamp
from reelhouse_backend.game_logic.errors import (
    UnknownCrisisError,
    UnknownDecisionError,
    UnknownOptionError,
)
from reelhouse_backend.game_logic.finance import FinancialLedger  # noqa: TC001
from reelhouse_backend.game_logic.results import CrisisResolved, DecisionResolved
from reelhouse_backend.game_logic.state import (
    Crisis,
    CrisisOption,
    DecisionItem,
    DecisionOption,
    MovieProject,
    StudioState,
)
from reelhouse_backend.shared.enums import (
    ChronicleCategory,
    ChronicleImpact,
    CrisisSeverity,
    ProjectPhase,
)
from reelhouse_backend.shared.events import ChronicleLog  # noqa: TC001
from reelhouse_backend.shared.rng import DeterministicRandomService  # noqa: TC001
from reelhouse_backend.shared.value_objects import Money

logger = logging.getLogger(__name__)


class OptionTemplate(BaseModel):
    """Blueprint for a crisis or decision option."""

    model_config = ConfigDict(frozen=True)

    label: str
    preview: str
    cash_delta: int = 0
    schedule_delta: int = 0
    hype_delta: float = 0.0


class CrisisTemplate(BaseModel):
    """Blueprint for a crisis tied to a production phase."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    severity: CrisisSeverity
    options: tuple[OptionTemplate, ...] = Field(min_length=1)


class DecisionTemplate(BaseModel):
    """Blueprint for a timed, non-blocking decision."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    weeks_until_expiry: int = Field(ge=1)
    options: tuple[OptionTemplate, ...] = Field(min_length=1)
    default_option_index: int = 0


CRISIS_BASE_CHANCE: dict[ProjectPhase, float] = {
    ProjectPhase.PRE_PRODUCTION: 0.08,
    ProjectPhase.PRODUCTION: 0.16,
    ProjectPhase.POST_PRODUCTION: 0.10,
}

CRISIS_TEMPLATES: dict[ProjectPhase, tuple[CrisisTemplate, ...]] = {
    ProjectPhase.PRE_PRODUCTION: (
        CrisisTemplate(
            title="Location Permit Reversal",
            body="The city pulled the permit for the main exterior location.",
            severity=CrisisSeverity.MEDIUM,
            options=(
                OptionTemplate(
                    label="Pay the expedited permit fee",
                    preview="Keep the schedule; -$250K.",
                    cash_delta=-250_000,
                ),
                OptionTemplate(
                    label="Relocate to a backlot",
                    preview="-$80K, +2 weeks, hype -2.",
                    cash_delta=-80_000,
                    schedule_delta=2,
                    hype_delta=-2,
                ),
            ),
        ),
        CrisisTemplate(
            title="Lead Actor Scheduling Conflict",
            body="Your lead double-booked a studio tentpole over the shoot window.",
            severity=CrisisSeverity.MEDIUM,
            options=(
                OptionTemplate(
                    label="Buy out the conflicting booking",
                    preview="-$400K, schedule holds.",
                    cash_delta=-400_000,
                ),
                OptionTemplate(
                    label="Shoot around the lead",
                    preview="+3 weeks, hype -3.",
                    schedule_delta=3,
                    hype_delta=-3,
                ),
            ),
        ),
    ),
    ProjectPhase.PRODUCTION: (
        CrisisTemplate(
            title="Set Build Failure",
            body="The centerpiece set failed its structural inspection.",
            severity=CrisisSeverity.HIGH,
            options=(
                OptionTemplate(
                    label="Rebuild overnight with overtime crews",
                    preview="-$600K, +1 week.",
                    cash_delta=-600_000,
                    schedule_delta=1,
                ),
                OptionTemplate(
                    label="Rewrite scenes for a standing set",
                    preview="-$150K, +3 weeks, hype -4.",
                    cash_delta=-150_000,
                    schedule_delta=3,
                    hype_delta=-4,
                ),
            ),
        ),
        CrisisTemplate(
            title="Second Unit Incident",
            body="A stunt rehearsal went wrong and the second unit is grounded.",
            severity=CrisisSeverity.HIGH,
            options=(
                OptionTemplate(
                    label="Pause for a full safety review",
                    preview="-$350K, +2 weeks.",
                    cash_delta=-350_000,
                    schedule_delta=2,
                ),
                OptionTemplate(
                    label="Keep rolling with a reduced unit",
                    preview="-$100K, +1 week, hype -5.",
                    cash_delta=-100_000,
                    schedule_delta=1,
                    hype_delta=-5,
                ),
            ),
        ),
        CrisisTemplate(
            title="Weather Wipes Out Exterior Week",
            body="A storm front flattened the exterior schedule.",
            severity=CrisisSeverity.LOW,
            options=(
                OptionTemplate(
                    label="Move interiors forward",
                    preview="+1 week.",
                    schedule_delta=1,
                ),
                OptionTemplate(
                    label="Build a weather cover",
                    preview="-$180K, schedule holds.",
                    cash_delta=-180_000,
                ),
            ),
        ),
    ),
    ProjectPhase.POST_PRODUCTION: (
        CrisisTemplate(
            title="VFX Vendor Capacity Crunch",
            body="Your effects house is overbooked and slipping shots.",
            severity=CrisisSeverity.MEDIUM,
            options=(
                OptionTemplate(
                    label="Pay a rush premium",
                    preview="-$500K, delivery holds.",
                    cash_delta=-500_000,
                ),
                OptionTemplate(
                    label="Push the delivery date",
                    preview="+2 weeks, hype -2.",
                    schedule_delta=2,
                    hype_delta=-2,
                ),
            ),
        ),
        CrisisTemplate(
            title="Test Screening Leak",
            body="Unflattering reactions from a test screening hit social media.",
            severity=CrisisSeverity.LOW,
            options=(
                OptionTemplate(
                    label="Fund a counter-campaign",
                    preview="-$150K, hype +1.",
                    cash_delta=-150_000,
                    hype_delta=1,
                ),
                OptionTemplate(
                    label="Let it blow over",
                    preview="Hype -4.",
                    hype_delta=-4,
                ),
            ),
        ),
    ),
}

DECISION_CHANCE = 0.18
MAX_QUEUED_DECISIONS = 4

DECISION_TEMPLATES: tuple[DecisionTemplate, ...] = (
    DecisionTemplate(
        title="Streaming Pre-Buy Offer",
        body="A streamer wants a first-look deal on your next slate.",
        weeks_until_expiry=3,
        options=(
            OptionTemplate(label="Decline", preview="Keep the rights."),
            OptionTemplate(
                label="Sign the first-look deal",
                preview="+$1.2M now.",
                cash_delta=1_200_000,
            ),
        ),
    ),
    DecisionTemplate(
        title="Trade Press Profile",
        body="A trade outlet offers a cover profile if you fund the shoot.",
        weeks_until_expiry=2,
        options=(
            OptionTemplate(label="Pass", preview="No cost."),
            OptionTemplate(
                label="Fund the profile",
                preview="-$120K.",
                cash_delta=-120_000,
            ),
        ),
    ),
    DecisionTemplate(
        title="Equipment Fire Sale",
        body="A shuttered rental house is liquidating camera packages.",
        weeks_until_expiry=2,
        options=(
            OptionTemplate(label="Ignore it", preview="No cost."),
            OptionTemplate(
                label="Buy the lot and sublease",
                preview="+$90K after resale.",
                cash_delta=90_000,
            ),
        ),
    ),
)


def _money(value: int) -> Money:
    return Money(amount=Decimal(value))


class CrisisEngine:
    """Roll, queue and resolve blocking crises."""

    def __init__(
        self,
        state: StudioState,
        ledger: FinancialLedger,
        chronicle: ChronicleLog,
        rng: DeterministicRandomService,
    ) -> None:
        self._state = state
        self._ledger = ledger
        self._chronicle = chronicle
        self._rng = rng

    def roll(self, events: list[str]) -> list[Crisis]:
        """Roll for new crises on every at-risk project."""
        raised: list[Crisis] = []
        for project in self._state.projects:
            base = CRISIS_BASE_CHANCE.get(project.phase)
            if base is None or self._state.crises_for(project.id):
                continue
            if not self._rng.chance(base + self.overrun_risk(project) * 0.2):
                continue
            template = self._rng.choice(CRISIS_TEMPLATES[project.phase])
            crisis = self.build(project, template)
            self._state.pending_crises.append(crisis)
            raised.append(crisis)
            events.append(f"Crisis on {project.title}: {crisis.title}.")
            logger.info("Crisis %s raised on project %s", crisis.id, project.id)
        return raised

    def build(self, project: MovieProject, template: CrisisTemplate) -> Crisis:
        """Instantiate *template* as a pending crisis for *project*."""
        options = tuple(
            CrisisOption(
                id=self._state.next_id("option"),
                label=option.label,
                preview=option.preview,
                cash_delta=_money(option.cash_delta),
                schedule_delta=option.schedule_delta,
                hype_delta=option.hype_delta,
            )
            for option in template.options
        )
        return Crisis(
            id=self._state.next_id("crisis"),
            project_id=project.id,
            title=template.title,
            body=template.body,
            severity=template.severity,
            options=options,
            raised_week=self._state.week,
        )

    @staticmethod
    def overrun_risk(project: MovieProject) -> float:
        """Share of the budget already burned, as a 0-1 pressure signal."""
        if not project.budget.is_positive:
            return 0.0
        ratio = project.production_spend.amount / project.budget.amount
        return clamp(float(ratio), 0.0, 1.0)

    def resolve(self, crisis_id: str, option_id: str) -> CrisisResolved:
        """Apply *option_id* of *crisis_id* exactly once and dequeue the crisis."""
        crisis = next(
            (c for c in self._state.pending_crises if c.id == crisis_id), None
        )
        if crisis is None:
            msg = f"Unknown crisis '{crisis_id}'."
            raise UnknownCrisisError(msg)
        option = crisis.option(option_id)
        if option is None:
            msg = f"Crisis '{crisis_id}' has no option '{option_id}'."
            raise UnknownOptionError(msg)

        self._ledger.apply_delta(option.cash_delta)
        project = (
            self._state.find_project(crisis.project_id) if crisis.project_id else None
        )
        if project is not None:
            project.scheduled_weeks_remaining = max(
                0, project.scheduled_weeks_remaining + option.schedule_delta
            )
            project.hype = clamp(project.hype + option.hype_delta, 0.0, 100.0)
        self._state.pending_crises.remove(crisis)
        self._chronicle.record(
            week=self._state.week,
            category=ChronicleCategory.CRISIS_RESOLVED,
            headline=f"{crisis.title}: {option.label}",
            detail=option.preview,
            project_title=project.title if project else None,
            impact=(
                ChronicleImpact.NEGATIVE
                if option.cash_delta.is_negative or option.schedule_delta > 0
                else ChronicleImpact.NEUTRAL
            ),
        )
        return CrisisResolved(
            message=f"Resolved {crisis.title} with '{option.label}'.",
            crisis_id=crisis.id,
            option_id=option.id,
            cash_delta=option.cash_delta,
            schedule_delta=option.schedule_delta,
        )


class DecisionEngine:
    """Queue, resolve and expire non-blocking decisions."""

    def __init__(
        self,
        state: StudioState,
        ledger: FinancialLedger,
        rng: DeterministicRandomService,
    ) -> None:
        self._state = state
        self._ledger = ledger
        self._rng = rng

    def resolve(self, decision_id: str, option_id: str) -> DecisionResolved:
        """Apply the cash delta of *option_id* and dequeue the decision."""
        item = next(
            (d for d in self._state.decision_queue if d.id == decision_id), None
        )
        if item is None:
            msg = f"Unknown decision '{decision_id}'."
            raise UnknownDecisionError(msg)
        option = item.option(option_id)
        if option is None:
            msg = f"Decision '{decision_id}' has no option '{option_id}'."
            raise UnknownOptionError(msg)
        self._apply(item, option)
        return DecisionResolved(
            message=f"{item.title}: {option.label}.",
            decision_id=item.id,
            option_id=option.id,
            cash_delta=option.cash_delta,
        )

    def tick_expiry(self, events: list[str]) -> list[DecisionItem]:
        """Count every item down and auto-resolve those that ran out."""
        for item in self._state.decision_queue:
            item.weeks_until_expiry -= 1
        expired = [
            item for item in self._state.decision_queue if item.weeks_until_expiry <= 0
        ]
        for item in expired:
            option = item.default_option()
            if option is None:
                self._state.decision_queue.remove(item)
                events.append(f"{item.title} lapsed with no response.")
            else:
                self._apply(item, option)
                events.append(f"{item.title} expired; defaulted to '{option.label}'.")
            self._state.adjust_heat(-1)
        return expired

    def maybe_generate(self, events: list[str]) -> DecisionItem | None:
        """Occasionally queue a new opportunity from the template deck."""
        if len(self._state.decision_queue) >= MAX_QUEUED_DECISIONS:
            return None
        if not self._rng.chance(DECISION_CHANCE):
            return None
        template = self._rng.choice(DECISION_TEMPLATES)
        item = self.build(template)
        self._state.decision_queue.append(item)
        events.append(f"New decision: {item.title}.")
        return item

    def build(
        self, template: DecisionTemplate, project_id: str | None = None
    ) -> DecisionItem:
        """Instantiate *template* as a queued decision."""
        options = [
            DecisionOption(
                id=self._state.next_id("option"),
                label=option.label,
                preview=option.preview,
                cash_delta=_money(option.cash_delta),
            )
            for option in template.options
        ]
        return DecisionItem(
            id=self._state.next_id("decision"),
            project_id=project_id,
            title=template.title,
            body=template.body,
            weeks_until_expiry=template.weeks_until_expiry,
            options=options,
            default_option_id=options[template.default_option_index].id,
        )

    def _apply(self, item: DecisionItem, option: DecisionOption) -> None:
        self._ledger.apply_delta(option.cash_delta)
        self._state.decision_queue.remove(item)


__all__ = [
    "CRISIS_BASE_CHANCE",
    "CRISIS_TEMPLATES",
    "DECISION_TEMPLATES",
    "CrisisEngine",
    "CrisisTemplate",
    "DecisionEngine",
    "DecisionTemplate",
    "MAX_QUEUED_DECISIONS",
    "OptionTemplate",
]
