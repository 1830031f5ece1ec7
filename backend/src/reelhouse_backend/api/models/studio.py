"""Pydantic models for the studio HTTP contract."""

# ruff: noqa: TC001

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from reelhouse_backend.game_logic import (
    ActionResult,
    Crisis,
    DecisionItem,
    MovieProject,
    NarrativeArc,
    ScriptPitch,
    Talent,
)
from reelhouse_backend.shared import (
    ChronicleEntry,
    Festival,
    Money,
    Specialization,
    StudioTier,
)


class OptionChoiceRequest(BaseModel):
    """Pick one option of a crisis or decision."""

    option_id: str = Field(min_length=1)


class AttachTalentRequest(BaseModel):
    """Sign a talent onto a project."""

    talent_id: str = Field(min_length=1)


class FundMarketingRequest(BaseModel):
    """Commit extra marketing spend to a project."""

    amount: Decimal = Field(gt=0)


class AcceptOfferRequest(BaseModel):
    """Sign one of the distribution offers on the table."""

    offer_id: str = Field(min_length=1)


class ReleaseWeekRequest(BaseModel):
    """Push a release date later."""

    week: int = Field(ge=1)


class FestivalSubmissionRequest(BaseModel):
    """Enter a project into a festival."""

    festival: Festival


class SpecializationRequest(BaseModel):
    """Change the studio's strategic leaning."""

    specialization: Specialization


class StudioStateResponse(BaseModel):
    """Full read-only view of a studio."""

    studio_id: str
    studio_name: str
    week: int
    cash: Money
    tier: StudioTier
    heat: float
    specialization: Specialization
    is_bankrupt: bool
    bankruptcy_reason: str | None = None
    projects: list[MovieProject]
    talent: list[Talent]
    script_market: list[ScriptPitch]
    pending_crises: list[Crisis]
    decision_queue: list[DecisionItem]
    arcs: list[NarrativeArc]
    last_save_succeeded: bool | None = None


class ActionResponse(BaseModel):
    """Result of a player action plus the headline studio numbers after it."""

    result: ActionResult
    week: int
    cash: Money
    is_bankrupt: bool


class ChronicleResponse(BaseModel):
    """Chronicle entries, oldest first."""

    entries: list[ChronicleEntry]
