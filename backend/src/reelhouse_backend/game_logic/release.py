"""Box-office and critical outcome modelling for theatrical releases.

The simulator scores a project through a fixed set of named drivers. Each
driver is a signed contribution around a neutral baseline, and their sum is the
release score. The opening weekend scales the genre baseline by
``exp(score / 100)`` and the outcome category is read off return-on-cost bands.
With cost held equal a better aggregate grosses more, so it never lands in a
worse category. The only random input is
the ``timing`` driver (plus small review jitter), drawn from the injected
:class:`DeterministicRandomService`.
"""

from __future__ import annotations

import math
from decimal import Decimal
from statistics import fmean

from reelhouse_backend.game_logic.balance import (
    GENRE_OPENING_BASELINES,
    SPECIALIZATION_PROFILES,
    clamp,
)
from reelhouse_backend.game_logic.state import (
    MovieProject,
    ReleaseReport,
    StudioState,
    Talent,
)
from reelhouse_backend.shared.enums import ReleaseOutcome, ReleaseWindow
from reelhouse_backend.shared.rng import DeterministicRandomService  # noqa: TC001
from reelhouse_backend.shared.value_objects import Money

# Lower bound of final gross over total cost for each outcome, best first.
OUTCOME_ROI_BANDS: tuple[tuple[float, ReleaseOutcome], ...] = (
    (3.0, ReleaseOutcome.BLOCKBUSTER),
    (1.5, ReleaseOutcome.HIT),
    (1.0, ReleaseOutcome.SOLID),
    (0.5, ReleaseOutcome.FLOP),
)

TIMING_NOISE = 8.0
LIMITED_WINDOW_FACTOR = 0.6

_OUTCOME_HEAT: dict[ReleaseOutcome, float] = {
    ReleaseOutcome.BOMB: -6.0,
    ReleaseOutcome.FLOP: -3.0,
    ReleaseOutcome.SOLID: 2.0,
    ReleaseOutcome.HIT: 5.0,
    ReleaseOutcome.BLOCKBUSTER: 8.0,
}


def outcome_for_roi(roi: float) -> ReleaseOutcome:
    """Map a return on cost onto its outcome band.

    A loss-making release (roi below 1) is at best a flop.
    """
    for floor, outcome in OUTCOME_ROI_BANDS:
        if roi >= floor:
            return outcome
    return ReleaseOutcome.BOMB


class ReleaseSimulator:
    """Compute the one-time :class:`ReleaseReport` for a project."""

    def __init__(self, rng: DeterministicRandomService) -> None:
        self._rng = rng

    def simulate(self, project: MovieProject, studio: StudioState) -> ReleaseReport:
        """Score *project* against the current *studio* without mutating either."""
        director = (
            studio.find_talent(project.director_id) if project.director_id else None
        )
        cast = [
            talent
            for talent_id in project.cast_ids
            if (talent := studio.find_talent(talent_id)) is not None
        ]
        profile = SPECIALIZATION_PROFILES[studio.specialization]

        breakdown = self._breakdown(
            project, director, cast, profile.opening_multiplier
        )
        score = round(sum(breakdown.values()), 4)

        window_factor = 1.0
        offer = project.accepted_offer()
        if offer is not None and offer.release_window is ReleaseWindow.LIMITED:
            window_factor = LIMITED_WINDOW_FACTOR
        baseline = GENRE_OPENING_BASELINES[project.genre]
        opening = baseline * math.exp(score / 100) * window_factor

        critical = self._critical_score(project, director, cast, profile.critical_delta)
        audience = self._audience_score(project, cast)
        legs = 2.1 + critical / 100 * 0.9 + audience / 100 * 0.8
        final_gross = opening * legs

        total_cost = project.budget.add(project.marketing_budget)
        final_money = Money.of(final_gross)
        profit = final_money.subtract(total_cost)
        exact_roi = 0.0
        if total_cost.is_positive:
            exact_roi = float(final_money.amount / total_cost.amount)
        roi = round(exact_roi, 4)

        nominations, wins = self._awards(critical, profile.awards_boost)
        opening_money = Money.of(opening)
        return ReleaseReport(
            outcome=outcome_for_roi(exact_roi),
            was_record_opening=opening_money.amount > studio.record_opening.amount,
            profit=profit,
            roi=roi,
            score=score,
            breakdown=breakdown,
            opening_weekend_gross=opening_money,
            final_box_office=final_money,
            total_cost=total_cost,
            critical_score=critical,
            audience_score=audience,
            awards_nominations=nominations,
            awards_wins=wins,
            release_week=studio.week,
        )

    @staticmethod
    def heat_delta(report: ReleaseReport) -> float:
        """Return the heat swing a release gives the studio."""
        return _OUTCOME_HEAT[report.outcome] + (report.critical_score - 60) / 10

    def _breakdown(
        self,
        project: MovieProject,
        director: Talent | None,
        cast: list[Talent],
        opening_multiplier: float,
    ) -> dict[str, float]:
        marketing_ratio = 0.0
        if project.budget.is_positive:
            marketing_ratio = float(
                project.marketing_budget.amount / project.budget.amount
            )
        star_power = fmean(t.star_power for t in cast) if cast else 0.0
        drivers = {
            "script": (project.script_quality - 6.5) * 6,
            "direction": (director.craft - 5.5) * 3 if director else -12.0,
            "starPower": (star_power - 5.0) * 3,
            "marketing": clamp((marketing_ratio - 0.2) * 30, -6.0, 24.0),
            "buzz": (project.hype - 30.0) * 0.3,
            "timing": self._rng.uniform(-TIMING_NOISE, TIMING_NOISE),
            "specialization": (opening_multiplier - 1.0) * 50,
        }
        return {name: round(value, 4) for name, value in drivers.items()}

    def _critical_score(
        self,
        project: MovieProject,
        director: Talent | None,
        cast: list[Talent],
        critical_delta: float,
    ) -> float:
        spend = project.production_spend.as_float()
        production_value = 1 - math.exp(-spend / 30_000_000)
        lead_craft = cast[0].craft if cast else 0.0
        editorial = min(10.0, 5.0 + 2.0 * project.polish_passes_used)
        weighted = (
            project.script_quality / 10 * 0.35
            + (director.craft if director else 0.0) / 10 * 0.25
            + lead_craft / 10 * 0.15
            + production_value * 0.1
            + project.concept_strength / 10 * 0.1
            + editorial / 10 * 0.05
        )
        jitter = self._rng.uniform(-3.0, 3.0)
        return round(clamp(weighted * 100 + critical_delta + jitter, 0.0, 100.0), 2)

    def _audience_score(self, project: MovieProject, cast: list[Talent]) -> float:
        star_power = fmean(t.star_power for t in cast) if cast else 0.0
        base = 20 + project.script_quality * 4 + star_power * 2.5 + project.hype * 0.2
        jitter = self._rng.uniform(-3.0, 3.0)
        return round(clamp(base + jitter, 0.0, 100.0), 2)

    @staticmethod
    def _awards(critical: float, awards_boost: float) -> tuple[int, int]:
        adjusted = critical + awards_boost
        nominations = max(0, int((adjusted - 70) / 6))
        wins = min(nominations, max(0, int((adjusted - 80) / 8)))
        return nominations, wins


def studio_rental(report: ReleaseReport, revenue_share: float, advance: Money) -> Money:
    """Return the studio's cash take from a release after recouping *advance*."""
    rental = report.final_box_office.multiply(Decimal(repr(revenue_share)))
    remaining = rental.subtract(advance)
    return remaining if remaining.is_positive else Money.zero()


__all__ = [
    "OUTCOME_ROI_BANDS",
    "ReleaseSimulator",
    "outcome_for_roi",
    "studio_rental",
]
