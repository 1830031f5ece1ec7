"""Static balance tables shared by the simulation components."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel
from pydantic.config import ConfigDict

from reelhouse_backend.shared.enums import Genre, ProjectPhase, Specialization
from reelhouse_backend.shared.value_objects import Money


class SpecializationProfile(BaseModel):
    """Weights a specialization applies to releases, burn and awards."""

    model_config = ConfigDict(frozen=True)

    opening_multiplier: float
    critical_delta: float
    burn_multiplier: float
    awards_boost: float


SPECIALIZATION_PROFILES: dict[Specialization, SpecializationProfile] = {
    Specialization.BALANCED: SpecializationProfile(
        opening_multiplier=1.0,
        critical_delta=0.0,
        burn_multiplier=1.0,
        awards_boost=0.0,
    ),
    Specialization.BLOCKBUSTER: SpecializationProfile(
        opening_multiplier=1.09,
        critical_delta=-3.0,
        burn_multiplier=1.03,
        awards_boost=-4.0,
    ),
    Specialization.PRESTIGE: SpecializationProfile(
        opening_multiplier=0.93,
        critical_delta=4.0,
        burn_multiplier=1.01,
        awards_boost=6.0,
    ),
    Specialization.INDIE: SpecializationProfile(
        opening_multiplier=0.95,
        critical_delta=1.0,
        burn_multiplier=0.92,
        awards_boost=2.0,
    ),
}

GENRE_BUDGETS: dict[Genre, Money] = {
    Genre.ACTION: Money(amount=Decimal(28_000_000)),
    Genre.SCI_FI: Money(amount=Decimal(32_000_000)),
    Genre.ANIMATION: Money(amount=Decimal(36_000_000)),
    Genre.HORROR: Money(amount=Decimal(14_000_000)),
    Genre.DOCUMENTARY: Money(amount=Decimal(6_000_000)),
    Genre.DRAMA: Money(amount=Decimal(18_000_000)),
    Genre.COMEDY: Money(amount=Decimal(18_000_000)),
    Genre.THRILLER: Money(amount=Decimal(18_000_000)),
}

GENRE_OPENING_BASELINES: dict[Genre, float] = {
    Genre.ACTION: 28_000_000.0,
    Genre.DRAMA: 9_000_000.0,
    Genre.COMEDY: 14_000_000.0,
    Genre.HORROR: 12_000_000.0,
    Genre.THRILLER: 13_500_000.0,
    Genre.SCI_FI: 21_000_000.0,
    Genre.ANIMATION: 24_000_000.0,
    Genre.DOCUMENTARY: 2_500_000.0,
}

# Weekly share of the production budget spent while a project sits in a phase.
PHASE_BURN_RATES: dict[ProjectPhase, Decimal] = {
    ProjectPhase.DEVELOPMENT: Decimal("0.005"),
    ProjectPhase.PRE_PRODUCTION: Decimal("0.008"),
    ProjectPhase.PRODUCTION: Decimal("0.015"),
    ProjectPhase.POST_PRODUCTION: Decimal("0.009"),
    ProjectPhase.DISTRIBUTION: Decimal("0.0035"),
    ProjectPhase.RELEASED: Decimal(0),
}

# Weeks scheduled when a project enters a phase.
PHASE_SCHEDULE_WEEKS: dict[ProjectPhase, int] = {
    ProjectPhase.DEVELOPMENT: 0,
    ProjectPhase.PRE_PRODUCTION: 8,
    ProjectPhase.PRODUCTION: 14,
    ProjectPhase.POST_PRODUCTION: 6,
    ProjectPhase.DISTRIBUTION: 3,
    ProjectPhase.RELEASED: 0,
}

RELEASE_LEAD_WEEKS = 4
MIN_GREENLIGHT_SCRIPT_QUALITY = 6.0


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* to the inclusive range ``[low, high]``."""
    return max(low, min(high, value))


__all__ = [
    "GENRE_BUDGETS",
    "GENRE_OPENING_BASELINES",
    "MIN_GREENLIGHT_SCRIPT_QUALITY",
    "PHASE_BURN_RATES",
    "PHASE_SCHEDULE_WEEKS",
    "RELEASE_LEAD_WEEKS",
    "SPECIALIZATION_PROFILES",
    "SpecializationProfile",
    "clamp",
]
