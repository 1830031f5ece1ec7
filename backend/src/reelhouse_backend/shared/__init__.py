"""Shared utilities, shared models and cross-cutting helpers for the backend."""

from reelhouse_backend.shared.enums import (
    AgentTier,
    ArcKey,
    ArcStatus,
    ChronicleCategory,
    ChronicleImpact,
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
from reelhouse_backend.shared.events import (
    ChronicleEntry,
    ChronicleHistory,
    ChronicleLog,
)
from reelhouse_backend.shared.rng import DeterministicRandomService
from reelhouse_backend.shared.value_objects import Money

__all__ = [
    "AgentTier",
    "ArcKey",
    "ArcStatus",
    "ChronicleCategory",
    "ChronicleEntry",
    "ChronicleHistory",
    "ChronicleImpact",
    "ChronicleLog",
    "CrisisSeverity",
    "DeterministicRandomService",
    "Festival",
    "FestivalResult",
    "Genre",
    "Money",
    "PartnerStance",
    "ProjectPhase",
    "ReleaseOutcome",
    "ReleaseWindow",
    "Specialization",
    "StudioTier",
    "TalentAvailability",
    "TalentRole",
]
