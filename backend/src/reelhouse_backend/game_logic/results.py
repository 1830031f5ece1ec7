"""Tagged result types returned by studio operations.

Every player-facing operation returns one success variant carrying its payload
or :class:`ActionRejected` carrying the reason and blocker list. Callers branch
on ``kind`` (or ``match`` on the class) instead of parsing message strings.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from reelhouse_backend.game_logic.state import ReleaseReport  # noqa: TC001
from reelhouse_backend.shared.enums import ProjectPhase, TalentRole  # noqa: TC001
from reelhouse_backend.shared.value_objects import Money  # noqa: TC001


class _ResultBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str

    @property
    def succeeded(self) -> bool:
        """Return ``True`` for every success variant."""
        return True


class ActionRejected(_ResultBase):
    """Validation failure; the studio state was not touched."""

    kind: Literal["rejected"] = "rejected"
    blockers: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        """Rejections never succeed."""
        return False


class WeekAdvanced(_ResultBase):
    """Summary of a completed week."""

    kind: Literal["week_advanced"] = "week_advanced"
    week: int
    cash_delta: Money
    events: tuple[str, ...] = Field(default_factory=tuple)
    pending_crisis_count: int = 0
    decision_count: int = 0


class PhaseAdvanced(_ResultBase):
    """A project moved to its next phase."""

    kind: Literal["phase_advanced"] = "phase_advanced"
    project_id: str
    previous_phase: ProjectPhase
    phase: ProjectPhase
    release_report: ReleaseReport | None = None


class TalentAttached(_ResultBase):
    """Talent signed on to a project."""

    kind: Literal["talent_attached"] = "talent_attached"
    project_id: str
    talent_id: str
    role: TalentRole
    cost: Money


class ScriptAcquired(_ResultBase):
    """Script bought from the market and opened as a project."""

    kind: Literal["script_acquired"] = "script_acquired"
    script_id: str
    project_id: str
    cost: Money


class ScriptPassed(_ResultBase):
    """Script removed from the market."""

    kind: Literal["script_passed"] = "script_passed"
    script_id: str


class CrisisResolved(_ResultBase):
    """A pending crisis was settled with one of its options."""

    kind: Literal["crisis_resolved"] = "crisis_resolved"
    crisis_id: str
    option_id: str
    cash_delta: Money
    schedule_delta: int


class DecisionResolved(_ResultBase):
    """A queued decision was answered."""

    kind: Literal["decision_resolved"] = "decision_resolved"
    decision_id: str
    option_id: str
    cash_delta: Money


class OptionalActionApplied(_ResultBase):
    """A discretionary push was paid for."""

    kind: Literal["optional_action"] = "optional_action"
    project_id: str
    cost: Money


class SequelStarted(_ResultBase):
    """A follow-up project was opened in an existing franchise."""

    kind: Literal["sequel_started"] = "sequel_started"
    project_id: str
    parent_project_id: str
    episode: int
    cost: Money


class ActionApplied(_ResultBase):
    """Generic success for project-level tweaks that carry no extra payload."""

    kind: Literal["applied"] = "applied"
    project_id: str | None = None


ActionResult = Annotated[
    ActionRejected
    | WeekAdvanced
    | PhaseAdvanced
    | TalentAttached
    | ScriptAcquired
    | ScriptPassed
    | CrisisResolved
    | DecisionResolved
    | OptionalActionApplied
    | SequelStarted
    | ActionApplied,
    Field(discriminator="kind"),
]


def rejected(message: str, *blockers: str) -> ActionRejected:
    """Shorthand for building a rejection."""
    return ActionRejected(message=message, blockers=blockers)


__all__ = [
    "ActionApplied",
    "ActionRejected",
    "ActionResult",
    "CrisisResolved",
    "DecisionResolved",
    "OptionalActionApplied",
    "PhaseAdvanced",
    "ScriptAcquired",
    "ScriptPassed",
    "SequelStarted",
    "TalentAttached",
    "WeekAdvanced",
    "rejected",
]
