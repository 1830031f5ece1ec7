"""Studio tier advancement and narrative arc lifecycle."""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel
from pydantic.config import ConfigDict

from reelhouse_backend.game_logic.finance import FinancialLedger  # noqa: TC001
from reelhouse_backend.game_logic.state import (
    Crisis,
    MovieProject,
    NarrativeArc,
    StudioState,
)
from reelhouse_backend.shared.enums import (
    ArcKey,
    ArcStatus,
    ChronicleCategory,
    ChronicleImpact,
    CrisisSeverity,
    PartnerStance,
    ReleaseOutcome,
    StudioTier,
)
from reelhouse_backend.shared.events import ChronicleLog  # noqa: TC001
from reelhouse_backend.shared.value_objects import Money

logger = logging.getLogger(__name__)


class TierGate(BaseModel):
    """Requirements for entering a tier."""

    model_config = ConfigDict(frozen=True)

    min_releases: int
    min_heat: float


TIER_GATES: dict[StudioTier, TierGate] = {
    StudioTier.INDIE_STUDIO: TierGate(min_releases=0, min_heat=0),
    StudioTier.ESTABLISHED_INDIE: TierGate(min_releases=1, min_heat=25),
    StudioTier.MID_TIER: TierGate(min_releases=3, min_heat=45),
    StudioTier.MAJOR_STUDIO: TierGate(min_releases=6, min_heat=65),
    StudioTier.GLOBAL_POWERHOUSE: TierGate(min_releases=10, min_heat=80),
}


def next_tier(tier: StudioTier) -> StudioTier | None:
    """Return the tier above *tier*, or ``None`` at the top."""
    members = list(StudioTier)
    index = members.index(tier)
    return members[index + 1] if index + 1 < len(members) else None


class TierProgressionTracker:
    """Promote the studio when the next gate is met; tiers never regress."""

    def __init__(self, state: StudioState, chronicle: ChronicleLog) -> None:
        self._state = state
        self._chronicle = chronicle

    def evaluate(self) -> list[StudioTier]:
        """Advance through every satisfied gate and return the tiers reached."""
        reached: list[StudioTier] = []
        while (candidate := next_tier(self._state.tier)) is not None:
            gate = TIER_GATES[candidate]
            if (
                self._state.release_count < gate.min_releases
                or self._state.heat < gate.min_heat
            ):
                break
            self._state.tier = candidate
            reached.append(candidate)
            self._chronicle.record(
                week=self._state.week,
                category=ChronicleCategory.TIER_ADVANCE,
                headline=f"Promoted to {candidate.label}",
                detail=(
                    f"{self._state.release_count} releases and heat "
                    f"{self._state.heat:.0f}."
                ),
                impact=ChronicleImpact.POSITIVE,
            )
            logger.info("Studio promoted to %s", candidate)
        return reached


class ArcTrigger(StrEnum):
    """Events an arc can react to."""

    RELEASE = "release"
    CRISIS_RESOLVED = "crisis_resolved"
    STANCE_CHANGED = "stance_changed"
    WEEK_ENDED = "week_ended"
    AWARDS = "awards"


class ArcPayoff(BaseModel):
    """What closing an arc does to the studio."""

    model_config = ConfigDict(frozen=True)

    heat_delta: float = 0.0
    cash_delta: int = 0
    warm_partner: bool = False


ARC_LABELS: dict[ArcKey, str] = {
    ArcKey.AWARDS_CIRCUIT: "Awards Run",
    ArcKey.EXHIBITOR_POWER_PLAY: "Theater Access Battle",
    ArcKey.EXHIBITOR_WAR: "Exhibitor War",
    ArcKey.FINANCIER_CONTROL: "Financier Control",
    ArcKey.FRANCHISE_PIVOT: "Franchise Pivot",
    ArcKey.LEAK_PIRACY: "Leak & Piracy",
    ArcKey.TALENT_MELTDOWN: "Talent Meltdown",
    ArcKey.PASSION_PROJECT: "Passion Project",
}

# (resolved payoff, failed payoff)
ARC_PAYOFFS: dict[ArcKey, tuple[ArcPayoff, ArcPayoff]] = {
    ArcKey.AWARDS_CIRCUIT: (ArcPayoff(heat_delta=6), ArcPayoff(heat_delta=-2)),
    ArcKey.EXHIBITOR_POWER_PLAY: (
        ArcPayoff(heat_delta=2, warm_partner=True),
        ArcPayoff(heat_delta=-2),
    ),
    ArcKey.EXHIBITOR_WAR: (
        ArcPayoff(heat_delta=3),
        ArcPayoff(heat_delta=-4, cash_delta=-500_000),
    ),
    ArcKey.FINANCIER_CONTROL: (ArcPayoff(heat_delta=2), ArcPayoff(heat_delta=-5)),
    ArcKey.FRANCHISE_PIVOT: (ArcPayoff(heat_delta=5), ArcPayoff(heat_delta=-3)),
    ArcKey.LEAK_PIRACY: (
        ArcPayoff(heat_delta=2),
        ArcPayoff(heat_delta=-3, cash_delta=-250_000),
    ),
    ArcKey.TALENT_MELTDOWN: (ArcPayoff(heat_delta=1), ArcPayoff(heat_delta=-3)),
    ArcKey.PASSION_PROJECT: (ArcPayoff(heat_delta=4), ArcPayoff(heat_delta=-2)),
}

AWARDS_ARC_CRITICAL_FLOOR = 75.0
EXHIBITOR_WAR_TIMEOUT_WEEKS = 12
FINANCIER_TIMEOUT_WEEKS = 8
FINANCIER_RECOVERY_CASH = Money(amount=Decimal(5_000_000))
FINANCIER_LOW_CASH_WEEKS = 2
LEAK_CRISIS_TITLE = "Test Screening Leak"
# Script quality must beat concept strength by this much to be a passion project.
PASSION_QUALITY_GAP = 2.5


class ArcManager:
    """Open, evaluate and close narrative arcs in response to studio events."""

    def __init__(
        self,
        state: StudioState,
        ledger: FinancialLedger,
        chronicle: ChronicleLog,
    ) -> None:
        self._state = state
        self._ledger = ledger
        self._chronicle = chronicle

    def active(self) -> list[NarrativeArc]:
        """Return the arcs still in play."""
        return [arc for arc in self._state.arcs if arc.status is ArcStatus.ACTIVE]

    def open(
        self,
        key: ArcKey,
        *,
        project_id: str | None = None,
        partner: str | None = None,
    ) -> NarrativeArc | None:
        """Start an arc unless an identical one is already running."""
        for arc in self.active():
            same_target = arc.project_id == project_id and arc.partner == partner
            if arc.key is key and same_target:
                return None
        arc = NarrativeArc(
            key=key,
            label=ARC_LABELS[key],
            project_id=project_id,
            partner=partner,
            started_week=self._state.week,
            last_updated_week=self._state.week,
        )
        self._state.arcs.append(arc)
        logger.info("Arc %s opened (project=%s partner=%s)", key, project_id, partner)
        return arc

    def on_release(self, project: MovieProject) -> list[NarrativeArc]:
        """Evaluate arcs against a new release and open follow-on arcs."""
        closed = self._evaluate(ArcTrigger.RELEASE, project=project)
        report = project.release_report
        if report is not None and report.critical_score >= AWARDS_ARC_CRITICAL_FLOOR:
            self.open(ArcKey.AWARDS_CIRCUIT, project_id=project.id)
        return closed

    def on_script_acquired(self, project: MovieProject) -> NarrativeArc | None:
        """Open a passion project for a fine script with a hard-to-sell concept."""
        if project.script_quality - project.concept_strength < PASSION_QUALITY_GAP:
            return None
        return self.open(ArcKey.PASSION_PROJECT, project_id=project.id)

    def on_sequel_started(self, sequel: MovieProject) -> NarrativeArc | None:
        """Bet the studio's direction on a new franchise entry."""
        return self.open(ArcKey.FRANCHISE_PIVOT, project_id=sequel.id)

    def on_crisis_resolved(self, crisis: Crisis) -> list[NarrativeArc]:
        """Evaluate arcs after a crisis and open arcs the crisis sparks."""
        closed = self._evaluate(ArcTrigger.CRISIS_RESOLVED)
        if crisis.title == LEAK_CRISIS_TITLE:
            self.open(ArcKey.LEAK_PIRACY, project_id=crisis.project_id)
        elif crisis.severity is CrisisSeverity.HIGH:
            self.open(ArcKey.TALENT_MELTDOWN, project_id=crisis.project_id)
        return closed

    def on_awards(self) -> list[NarrativeArc]:
        """Close awards runs once the ceremony has been held."""
        return self._evaluate(ArcTrigger.AWARDS)

    def on_week_ended(self) -> list[NarrativeArc]:
        """Evaluate time-based arcs and open financier pressure when cash is low."""
        closed = self._evaluate(ArcTrigger.WEEK_ENDED)
        if self._state.consecutive_low_cash_weeks >= FINANCIER_LOW_CASH_WEEKS:
            self.open(ArcKey.FINANCIER_CONTROL)
        return closed

    def set_stance(self, partner: str, stance: PartnerStance) -> list[NarrativeArc]:
        """Change the stance of *partner* and evaluate the arcs that care."""
        previous = self._state.partner_stances.get(partner, PartnerStance.NEUTRAL)
        if previous is stance:
            return []
        self._state.partner_stances[partner] = stance
        closed = self._evaluate(ArcTrigger.STANCE_CHANGED, partner=partner)
        if stance is PartnerStance.COMPETITIVE:
            self.open(ArcKey.EXHIBITOR_POWER_PLAY, partner=partner)
        elif stance is PartnerStance.HOSTILE:
            self.open(ArcKey.EXHIBITOR_WAR, partner=partner)
        return closed

    def snub(self, partner: str) -> list[NarrativeArc]:
        """Cool *partner* one step after the studio passes them over."""
        current = self._state.partner_stances.get(partner, PartnerStance.NEUTRAL)
        return self.set_stance(partner, current.colder())

    def _evaluate(
        self,
        trigger: ArcTrigger,
        *,
        project: MovieProject | None = None,
        partner: str | None = None,
    ) -> list[NarrativeArc]:
        closed: list[NarrativeArc] = []
        for arc in self.active():
            status = self._check(arc, trigger, project, partner)
            if status is None:
                continue
            self._close(arc, status)
            closed.append(arc)
        return closed

    def _check(
        self,
        arc: NarrativeArc,
        trigger: ArcTrigger,
        project: MovieProject | None,
        partner: str | None,
    ) -> ArcStatus | None:
        state = self._state
        weeks_active = state.week - arc.started_week
        report = project.release_report if project is not None else None
        own_release = (
            trigger is ArcTrigger.RELEASE
            and project is not None
            and report is not None
            and arc.project_id == project.id
        )
        stance = state.partner_stances.get(arc.partner or "", PartnerStance.NEUTRAL)
        partner_moved = trigger is ArcTrigger.STANCE_CHANGED and arc.partner == partner

        match arc.key:
            case ArcKey.AWARDS_CIRCUIT:
                if trigger is not ArcTrigger.AWARDS:
                    return None
                awarded = state.find_project(arc.project_id or "")
                won = awarded is not None and (awarded.awards_wins or 0) > 0
                return ArcStatus.RESOLVED if won else ArcStatus.FAILED
            case ArcKey.EXHIBITOR_POWER_PLAY:
                if not partner_moved:
                    return None
                if stance is PartnerStance.HOSTILE:
                    return ArcStatus.FAILED
                if stance.is_cordial:
                    return ArcStatus.RESOLVED
                return None
            case ArcKey.EXHIBITOR_WAR:
                if partner_moved and stance.is_cordial:
                    return ArcStatus.RESOLVED
                if (
                    trigger is ArcTrigger.WEEK_ENDED
                    and weeks_active >= EXHIBITOR_WAR_TIMEOUT_WEEKS
                ):
                    return ArcStatus.FAILED
                return None
            case ArcKey.FINANCIER_CONTROL:
                if trigger is not ArcTrigger.WEEK_ENDED:
                    return None
                if state.cash.covers(FINANCIER_RECOVERY_CASH):
                    return ArcStatus.RESOLVED
                if weeks_active >= FINANCIER_TIMEOUT_WEEKS:
                    return ArcStatus.FAILED
                return None
            case ArcKey.FRANCHISE_PIVOT:
                if not own_release or report is None:
                    return None
                hit = report.outcome.rank >= ReleaseOutcome.HIT.rank
                return ArcStatus.RESOLVED if hit else ArcStatus.FAILED
            case ArcKey.LEAK_PIRACY:
                if not own_release or report is None:
                    return None
                held = report.outcome.rank >= ReleaseOutcome.SOLID.rank
                return ArcStatus.RESOLVED if held else ArcStatus.FAILED
            case ArcKey.TALENT_MELTDOWN:
                if not own_release or report is None:
                    return None
                held = report.critical_score >= 50
                return ArcStatus.RESOLVED if held else ArcStatus.FAILED
            case ArcKey.PASSION_PROJECT:
                if not own_release or report is None:
                    return None
                acclaimed = report.critical_score >= 70
                return ArcStatus.RESOLVED if acclaimed else ArcStatus.FAILED

    def _close(self, arc: NarrativeArc, status: ArcStatus) -> None:
        resolved_payoff, failed_payoff = ARC_PAYOFFS[arc.key]
        payoff = resolved_payoff if status is ArcStatus.RESOLVED else failed_payoff
        arc.status = status
        arc.stage += 1
        arc.last_updated_week = self._state.week

        self._state.adjust_heat(payoff.heat_delta)
        if payoff.cash_delta:
            self._ledger.apply_delta(Money(amount=Decimal(payoff.cash_delta)))
        if payoff.warm_partner and arc.partner is not None:
            current = self._state.partner_stances.get(
                arc.partner, PartnerStance.NEUTRAL
            )
            self._state.partner_stances[arc.partner] = current.warmer()

        project = self._state.find_project(arc.project_id) if arc.project_id else None
        outcome = "resolved" if status is ArcStatus.RESOLVED else "collapsed"
        self._chronicle.record(
            week=self._state.week,
            category=ChronicleCategory.ARC_RESOLUTION,
            headline=f"{arc.label} {outcome}",
            detail=f"Heat {payoff.heat_delta:+.0f}.",
            project_title=project.title if project else None,
            impact=(
                ChronicleImpact.POSITIVE
                if status is ArcStatus.RESOLVED
                else ChronicleImpact.NEGATIVE
            ),
        )
        logger.info("Arc %s closed as %s", arc.key, status)


__all__ = [
    "ARC_LABELS",
    "ARC_PAYOFFS",
    "PASSION_QUALITY_GAP",
    "TIER_GATES",
    "ArcManager",
    "ArcPayoff",
    "ArcTrigger",
    "TierGate",
    "TierProgressionTracker",
    "next_tier",
]
