"""Chronicle primitives recording notable studio events."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from reelhouse_backend.shared.enums import (  # noqa: TC001
    ChronicleCategory,
    ChronicleImpact,
)


class ChronicleEntry(BaseModel):
    """Represents a single immutable history entry."""

    model_config = ConfigDict(frozen=True)

    week: int = Field(..., ge=0)
    category: ChronicleCategory
    headline: str = Field(..., min_length=1)
    detail: str | None = None
    project_title: str | None = None
    impact: ChronicleImpact = ChronicleImpact.NEUTRAL


class ChronicleLog:
    """Append-only view over the studio's chronicle entries.

    The log wraps the list owned by the studio state so that writers can only
    append; existing entries are frozen models and are never replaced.
    """

    def __init__(self, entries: list[ChronicleEntry]) -> None:
        self._entries = entries

    def record(
        self,
        *,
        week: int,
        category: ChronicleCategory,
        headline: str,
        detail: str | None = None,
        project_title: str | None = None,
        impact: ChronicleImpact = ChronicleImpact.NEUTRAL,
    ) -> ChronicleEntry:
        """Append a new entry and return it."""
        entry = ChronicleEntry(
            week=week,
            category=category,
            headline=headline,
            detail=detail,
            project_title=project_title,
            impact=impact,
        )
        self._entries.append(entry)
        return entry

    def entries(self) -> tuple[ChronicleEntry, ...]:
        """Return every entry, oldest first."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class ChronicleHistory(BaseModel):
    """Frozen chronicle projection handed to presentation layers."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[ChronicleEntry, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _validate_ordering(self) -> ChronicleHistory:
        """Ensure entries never go back in time."""
        weeks = [entry.week for entry in self.entries]
        if weeks != sorted(weeks):
            msg = "Chronicle entries must be ordered by week."
            raise ValueError(msg)
        return self


__all__ = ["ChronicleEntry", "ChronicleHistory", "ChronicleLog"]
