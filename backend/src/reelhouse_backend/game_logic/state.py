"""Studio-centric state containers used by the game logic layer.

Entities that change week to week (projects, talent, decisions, arcs and the
studio itself) are mutable pydantic models owned by :class:`StudioState`.
Values that are fixed once produced (crises, offers, release reports) are
frozen.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from reelhouse_backend.shared.enums import (
    AgentTier,
    ArcKey,
    ArcStatus,
    CrisisSeverity,
    Festival,
    FestivalResult,
    Genre,
    PartnerStance,
    ProjectPhase,
    ReleaseOutcome,
    ReleaseWindow,
    Specialization,
    StudioTier,
    TalentAvailability,
    TalentRole,
)
from reelhouse_backend.shared.events import ChronicleEntry
from reelhouse_backend.shared.value_objects import Money


class ReleaseReport(BaseModel):
    """Immutable outcome of a single theatrical release."""

    model_config = ConfigDict(frozen=True)

    outcome: ReleaseOutcome
    was_record_opening: bool
    profit: Money
    roi: float
    score: float
    breakdown: dict[str, float]
    opening_weekend_gross: Money
    final_box_office: Money
    total_cost: Money
    critical_score: float = Field(ge=0, le=100)
    audience_score: float = Field(ge=0, le=100)
    awards_nominations: int = Field(ge=0)
    awards_wins: int = Field(ge=0)
    release_week: int = Field(ge=0)

    @model_validator(mode="after")
    def _validate_breakdown(self) -> ReleaseReport:
        """Ensure the driver breakdown adds up to the reported score."""
        total = round(sum(self.breakdown.values()), 6)
        if abs(total - self.score) > 1e-3:
            msg = f"Breakdown sums to {total} but score is {self.score}."
            raise ValueError(msg)
        if self.awards_wins > self.awards_nominations:
            msg = "Awards wins cannot exceed nominations."
            raise ValueError(msg)
        return self


class DistributionOffer(BaseModel):
    """Terms a distributor puts on the table for a finished project."""

    model_config = ConfigDict(frozen=True)

    id: str
    partner: str
    release_window: ReleaseWindow
    minimum_guarantee: Money
    pa_commitment: Money
    revenue_share: float = Field(gt=0, lt=1)


class MovieProject(BaseModel):
    """A film on the studio slate, from development through release."""

    id: str
    title: str
    genre: Genre
    phase: ProjectPhase = ProjectPhase.DEVELOPMENT
    director_id: str | None = None
    cast_ids: list[str] = Field(default_factory=list)
    script_quality: float = Field(ge=0, le=10)
    concept_strength: float = Field(default=5.0, ge=0, le=10)
    hype: float = Field(default=10.0, ge=0, le=100)
    greenlight_approved: bool = False
    scheduled_weeks_remaining: int = Field(default=0, ge=0)
    budget: Money
    production_spend: Money = Field(default_factory=Money.zero)
    marketing_budget: Money = Field(default_factory=Money.zero)
    release_window: str | None = None
    release_week: int | None = None
    distribution_offers: list[DistributionOffer] = Field(default_factory=list)
    distribution_partner: str | None = None
    franchise_id: str | None = None
    episode: int = Field(default=1, ge=1)
    parent_project_id: str | None = None
    rewrite_count: int = Field(default=0, ge=0)
    polish_passes_used: int = Field(default=0, ge=0)
    festival: Festival | None = None
    festival_result: FestivalResult | None = None
    opening_weekend_gross: Money | None = None
    final_box_office: Money | None = None
    critical_score: float | None = None
    audience_score: float | None = None
    projected_roi: float | None = None
    awards_nominations: int | None = None
    awards_wins: int | None = None
    release_report: ReleaseReport | None = None

    @model_validator(mode="after")
    def _validate_release_fields(self) -> MovieProject:
        """Post-release fields exist only on released projects."""
        released = self.phase is ProjectPhase.RELEASED
        if not released and self.release_report is not None:
            msg = f"Project {self.id} carries a release report before release."
            raise ValueError(msg)
        if released and self.release_report is None:
            msg = f"Released project {self.id} is missing its release report."
            raise ValueError(msg)
        if len(set(self.cast_ids)) != len(self.cast_ids):
            msg = f"Project {self.id} lists the same cast member twice."
            raise ValueError(msg)
        return self

    @property
    def is_released(self) -> bool:
        """Return ``True`` once the project has reached theaters."""
        return self.phase is ProjectPhase.RELEASED

    def accepted_offer(self) -> DistributionOffer | None:
        """Return the distribution offer backing ``release_window``."""
        for offer in self.distribution_offers:
            if offer.id == self.release_window:
                return offer
        return None

    def record_release(self, report: ReleaseReport) -> None:
        """Populate post-release fields; this happens exactly once."""
        if self.release_report is not None:
            msg = f"Project {self.id} has already been released."
            raise ValueError(msg)
        self.release_report = report
        self.phase = ProjectPhase.RELEASED
        self.opening_weekend_gross = report.opening_weekend_gross
        self.final_box_office = report.final_box_office
        self.critical_score = report.critical_score
        self.audience_score = report.audience_score
        self.projected_roi = report.roi
        self.awards_nominations = report.awards_nominations
        self.awards_wins = report.awards_wins


class Talent(BaseModel):
    """Director or actor that can be attached to projects."""

    id: str
    name: str
    role: TalentRole
    star_power: float = Field(ge=0, le=10)
    craft: float = Field(ge=0, le=10)
    ego: float = Field(default=5.0, ge=0, le=10)
    agent_tier: AgentTier = AgentTier.INDEPENDENT
    asking_fee: Money
    availability: TalentAvailability = TalentAvailability.AVAILABLE
    attached_project_id: str | None = None


class ScriptPitch(BaseModel):
    """Script offered on the market."""

    id: str
    title: str
    genre: Genre
    logline: str = ""
    asking_price: Money
    script_quality: float = Field(ge=0, le=10)
    concept_strength: float = Field(ge=0, le=10)
    expires_in_weeks: int = Field(default=4, ge=0)


class CrisisOption(BaseModel):
    """One way of resolving a crisis."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    preview: str
    cash_delta: Money
    schedule_delta: int = 0
    hype_delta: float = 0.0


class Crisis(BaseModel):
    """Blocking event that must be resolved before the week can end."""

    model_config = ConfigDict(frozen=True)

    id: str
    project_id: str | None = None
    title: str
    body: str
    severity: CrisisSeverity
    options: tuple[CrisisOption, ...] = Field(min_length=1)
    raised_week: int = Field(default=0, ge=0)

    def option(self, option_id: str) -> CrisisOption | None:
        """Return the option matching *option_id*, if any."""
        return next((opt for opt in self.options if opt.id == option_id), None)


class DecisionOption(BaseModel):
    """One answer to a queued decision."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    preview: str
    cash_delta: Money


class DecisionItem(BaseModel):
    """Non-blocking decision that auto-resolves when it expires."""

    id: str
    project_id: str | None = None
    title: str
    body: str
    weeks_until_expiry: int
    options: list[DecisionOption] = Field(default_factory=list)
    default_option_id: str | None = None

    def option(self, option_id: str) -> DecisionOption | None:
        """Return the option matching *option_id*, if any."""
        return next((opt for opt in self.options if opt.id == option_id), None)

    def default_option(self) -> DecisionOption | None:
        """Return the option applied on expiry (the first one unless named)."""
        if self.default_option_id is not None:
            return self.option(self.default_option_id)
        return self.options[0] if self.options else None


class NarrativeArc(BaseModel):
    """Multi-step story thread with its own trigger and payoff."""

    key: ArcKey
    label: str
    status: ArcStatus = ArcStatus.ACTIVE
    stage: int = Field(default=0, ge=0)
    project_id: str | None = None
    partner: str | None = None
    started_week: int = Field(default=0, ge=0)
    last_updated_week: int = Field(default=0, ge=0)


class FestivalSubmission(BaseModel):
    """Pending festival entry for a project."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    festival: Festival
    submitted_week: int = Field(ge=0)
    resolves_week: int = Field(ge=0)


class StudioState(BaseModel):
    """Aggregate container capturing every mutable studio attribute."""

    studio_name: str = "Reelhouse Pictures"
    cash: Money
    lifetime_revenue: Money = Field(default_factory=Money.zero)
    lifetime_expenses: Money = Field(default_factory=Money.zero)
    week: int = Field(default=1, ge=1)
    tier: StudioTier = StudioTier.INDIE_STUDIO
    heat: float = Field(default=12.0, ge=0, le=100)
    specialization: Specialization = Specialization.BALANCED
    projects: list[MovieProject] = Field(default_factory=list)
    talent: list[Talent] = Field(default_factory=list)
    script_market: list[ScriptPitch] = Field(default_factory=list)
    pending_crises: list[Crisis] = Field(default_factory=list)
    decision_queue: list[DecisionItem] = Field(default_factory=list)
    chronicle: list[ChronicleEntry] = Field(default_factory=list)
    arcs: list[NarrativeArc] = Field(default_factory=list)
    partner_stances: dict[str, PartnerStance] = Field(default_factory=dict)
    festival_submissions: list[FestivalSubmission] = Field(default_factory=list)
    release_count: int = Field(default=0, ge=0)
    record_opening: Money = Field(default_factory=Money.zero)
    consecutive_low_cash_weeks: int = Field(default=0, ge=0)
    is_bankrupt: bool = False
    bankruptcy_reason: str | None = None
    id_counter: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _validate_bankruptcy(self) -> StudioState:
        """A bankrupt studio always carries its reason."""
        if self.is_bankrupt and not self.bankruptcy_reason:
            msg = "Bankrupt studios must record a bankruptcy reason."
            raise ValueError(msg)
        return self

    def next_id(self, prefix: str) -> str:
        """Return a fresh identifier, unique within this studio."""
        self.id_counter += 1
        return f"{prefix}-{self.id_counter}"

    def find_project(self, project_id: str) -> MovieProject | None:
        """Return the project with *project_id*, if any."""
        return next((p for p in self.projects if p.id == project_id), None)

    def find_talent(self, talent_id: str) -> Talent | None:
        """Return the talent with *talent_id*, if any."""
        return next((t for t in self.talent if t.id == talent_id), None)

    def find_script(self, script_id: str) -> ScriptPitch | None:
        """Return the market pitch with *script_id*, if any."""
        return next((s for s in self.script_market if s.id == script_id), None)

    def find_arc(self, key: ArcKey) -> NarrativeArc | None:
        """Return the most recent arc with *key*, if any."""
        return next((arc for arc in reversed(self.arcs) if arc.key is key), None)

    def crises_for(self, project_id: str) -> list[Crisis]:
        """Return the pending crises tied to *project_id*."""
        return [c for c in self.pending_crises if c.project_id == project_id]

    def adjust_heat(self, delta: float) -> None:
        """Shift heat by *delta*, clamped to the 0-100 scale."""
        self.heat = round(min(100.0, max(0.0, self.heat + delta)), 2)


__all__ = [
    "Crisis",
    "CrisisOption",
    "DecisionItem",
    "DecisionOption",
    "DistributionOffer",
    "FestivalSubmission",
    "MovieProject",
    "NarrativeArc",
    "ReleaseReport",
    "ScriptPitch",
    "StudioState",
    "Talent",
]
