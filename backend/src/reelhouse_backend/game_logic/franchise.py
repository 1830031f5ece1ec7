"""Sequel eligibility projections for released projects."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from reelhouse_backend.game_logic.balance import GENRE_BUDGETS, clamp
from reelhouse_backend.game_logic.state import MovieProject, StudioState  # noqa: TC001
from reelhouse_backend.shared.enums import ReleaseOutcome
from reelhouse_backend.shared.value_objects import Money

MIN_SEQUEL_OUTCOME = ReleaseOutcome.SOLID
MIN_SEQUEL_HEAT = 20.0
MAX_SEQUEL_FATIGUE = 70.0
FATIGUE_PER_EPISODE = 12.0
SEQUEL_BASE_FEE = Money(amount=Decimal(220_000))
SEQUEL_BUDGET_SHARE = Decimal("0.035")


class SequelEligibility(BaseModel):
    """Recomputable projection describing whether a sequel can be opened."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    eligible: bool
    reason: str | None = None
    next_episode: int = Field(ge=2)
    upfront_cost: Money
    projected_momentum: float = Field(ge=0, le=100)
    projected_fatigue: float = Field(ge=0, le=100)
    carryover_hype: float = Field(ge=0, le=100)

    @model_validator(mode="after")
    def _validate_reason(self) -> SequelEligibility:
        """A reason is present exactly when the sequel is blocked."""
        if self.eligible == (self.reason is not None):
            msg = "Sequel eligibility must carry a reason iff it is not eligible."
            raise ValueError(msg)
        return self


class SequelEligibilityCalculator:
    """Pure evaluation of sequel prospects; never mutates the studio."""

    def evaluate(self, project: MovieProject, studio: StudioState) -> SequelEligibility:
        """Return the sequel projection for *project*."""
        franchise_key = project.franchise_id or project.id
        franchise = [
            entry
            for entry in studio.projects
            if entry.id == franchise_key or entry.franchise_id == franchise_key
        ]
        next_episode = max(entry.episode for entry in franchise) + 1
        budget_share = GENRE_BUDGETS[project.genre].multiply(SEQUEL_BUDGET_SHARE)
        upfront_cost = budget_share.add(SEQUEL_BASE_FEE)

        report = project.release_report
        if report is None:
            return SequelEligibility(
                project_id=project.id,
                eligible=False,
                reason="Only released films can spawn sequels.",
                next_episode=next_episode,
                upfront_cost=upfront_cost,
                projected_momentum=0.0,
                projected_fatigue=0.0,
                carryover_hype=0.0,
            )

        released_entries = sum(1 for entry in franchise if entry.is_released)
        prior_fatigue = FATIGUE_PER_EPISODE * (project.episode - 1)
        audience = report.audience_score
        critical = report.critical_score
        momentum = clamp(
            46
            + (audience - 50) * 0.55
            + (critical - 50) * 0.28
            + (report.roi - 1) * 18
            - prior_fatigue * 0.18,
            10.0,
            95.0,
        )
        # Later episodes count too; the whole franchise tires.
        fatigue = clamp(
            prior_fatigue * 0.62
            + max(0, released_entries - 1) * 11
            + max(0.0, 58 - audience) * 0.35,
            0.0,
            88.0,
        )
        carryover = clamp(
            project.hype * 0.55 + audience * 0.18 + momentum * 0.22 - fatigue * 0.24,
            8.0,
            78.0,
        )

        reason = self._blocking_reason(
            project, studio, franchise, fatigue, upfront_cost
        )
        return SequelEligibility(
            project_id=project.id,
            eligible=reason is None,
            reason=reason,
            next_episode=next_episode,
            upfront_cost=upfront_cost,
            projected_momentum=round(momentum, 2),
            projected_fatigue=round(fatigue, 2),
            carryover_hype=round(carryover, 2),
        )

    @staticmethod
    def _blocking_reason(
        project: MovieProject,
        studio: StudioState,
        franchise: list[MovieProject],
        fatigue: float,
        upfront_cost: Money,
    ) -> str | None:
        report = project.release_report
        if report is not None and report.outcome.rank < MIN_SEQUEL_OUTCOME.rank:
            return (
                f"Sequels need at least a {MIN_SEQUEL_OUTCOME} outcome; "
                f"{project.title} was a {report.outcome}."
            )
        if any(not entry.is_released for entry in franchise):
            return "Another film in this franchise is already in the works."
        if studio.heat < MIN_SEQUEL_HEAT:
            return f"Studio heat {studio.heat:.0f} is below {MIN_SEQUEL_HEAT:.0f}."
        if fatigue >= MAX_SEQUEL_FATIGUE:
            return f"Franchise fatigue {fatigue:.0f} is too high for another entry."
        if not studio.cash.covers(upfront_cost):
            return f"Insufficient cash for the {upfront_cost.describe()} sequel fee."
        return None


__all__ = ["SequelEligibility", "SequelEligibilityCalculator"]
