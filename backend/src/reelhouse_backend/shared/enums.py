"""Closed enumerations shared by the simulation and API layers."""

from __future__ import annotations

from enum import StrEnum


class Genre(StrEnum):
    """Film genres available on the script market."""

    ACTION = "action"
    DRAMA = "drama"
    COMEDY = "comedy"
    HORROR = "horror"
    THRILLER = "thriller"
    SCI_FI = "sciFi"
    ANIMATION = "animation"
    DOCUMENTARY = "documentary"


class ProjectPhase(StrEnum):
    """Lifecycle stages of a movie project, in production order."""

    DEVELOPMENT = "development"
    PRE_PRODUCTION = "preProduction"
    PRODUCTION = "production"
    POST_PRODUCTION = "postProduction"
    DISTRIBUTION = "distribution"
    RELEASED = "released"


class ReleaseOutcome(StrEnum):
    """Commercial outcome categories ordered from worst to best."""

    BOMB = "bomb"
    FLOP = "flop"
    SOLID = "solid"
    HIT = "hit"
    BLOCKBUSTER = "blockbuster"

    @property
    def rank(self) -> int:
        """Return the ordinal position of the outcome (bomb is 0)."""
        return list(ReleaseOutcome).index(self)


class CrisisSeverity(StrEnum):
    """How damaging a crisis is when left to its worst option."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StudioTier(StrEnum):
    """Studio progression ranks, lowest first."""

    INDIE_STUDIO = "indieStudio"
    ESTABLISHED_INDIE = "establishedIndie"
    MID_TIER = "midTier"
    MAJOR_STUDIO = "majorStudio"
    GLOBAL_POWERHOUSE = "globalPowerhouse"

    @property
    def rank(self) -> int:
        """Return the ordinal position of the tier (indieStudio is 0)."""
        return list(StudioTier).index(self)

    @property
    def label(self) -> str:
        """Return a human-readable tier name."""
        match self:
            case StudioTier.INDIE_STUDIO:
                return "Indie Studio"
            case StudioTier.ESTABLISHED_INDIE:
                return "Established Indie"
            case StudioTier.MID_TIER:
                return "Mid-Tier Studio"
            case StudioTier.MAJOR_STUDIO:
                return "Major Studio"
            case StudioTier.GLOBAL_POWERHOUSE:
                return "Global Powerhouse"


class Specialization(StrEnum):
    """Strategic leaning that weights release and burn calculations."""

    BALANCED = "balanced"
    BLOCKBUSTER = "blockbuster"
    PRESTIGE = "prestige"
    INDIE = "indie"


class PartnerStance(StrEnum):
    """Relationship posture with a distributor or exhibitor, coldest first."""

    HOSTILE = "hostile"
    COMPETITIVE = "competitive"
    NEUTRAL = "neutral"
    RESPECTFUL = "respectful"

    @property
    def is_cordial(self) -> bool:
        """Return ``True`` for neutral or warmer stances."""
        return self in {PartnerStance.NEUTRAL, PartnerStance.RESPECTFUL}

    def warmer(self) -> PartnerStance:
        """Return the next warmer stance (respectful is the ceiling)."""
        members = list(PartnerStance)
        return members[min(len(members) - 1, members.index(self) + 1)]

    def colder(self) -> PartnerStance:
        """Return the next colder stance (hostile is the floor)."""
        members = list(PartnerStance)
        return members[max(0, members.index(self) - 1)]


class ArcKey(StrEnum):
    """Catalog of narrative arcs a studio can be pulled into."""

    AWARDS_CIRCUIT = "awards-circuit"
    EXHIBITOR_POWER_PLAY = "exhibitor-power-play"
    EXHIBITOR_WAR = "exhibitor-war"
    FINANCIER_CONTROL = "financier-control"
    FRANCHISE_PIVOT = "franchise-pivot"
    LEAK_PIRACY = "leak-piracy"
    TALENT_MELTDOWN = "talent-meltdown"
    PASSION_PROJECT = "passion-project"


class ArcStatus(StrEnum):
    """Lifecycle state of a narrative arc."""

    ACTIVE = "active"
    RESOLVED = "resolved"
    FAILED = "failed"


class TalentRole(StrEnum):
    """Roles a talent can fill on a project."""

    DIRECTOR = "director"
    LEAD_ACTOR = "leadActor"


class TalentAvailability(StrEnum):
    """Whether a talent can take a new attachment."""

    AVAILABLE = "available"
    ATTACHED = "attached"


class AgentTier(StrEnum):
    """Representation agency, which scales the retainer a deal costs."""

    INDEPENDENT = "independent"
    UTA = "uta"
    WME = "wme"
    CAA = "caa"


class ReleaseWindow(StrEnum):
    """Theatrical footprint offered by a distributor."""

    WIDE = "wide"
    LIMITED = "limited"


class Festival(StrEnum):
    """Festivals accepting submissions."""

    CANNES = "cannes"
    SUNDANCE = "sundance"
    TORONTO = "toronto"


class FestivalResult(StrEnum):
    """How a festival submission landed."""

    SELECTED = "selected"
    BUZZED = "buzzed"
    SNUBBED = "snubbed"


class ChronicleCategory(StrEnum):
    """Kinds of notable events recorded in the chronicle."""

    FILM_RELEASE = "filmRelease"
    ARC_RESOLUTION = "arcResolution"
    TIER_ADVANCE = "tierAdvance"
    AWARDS_OUTCOME = "awardsOutcome"
    FESTIVAL_OUTCOME = "festivalOutcome"
    CRISIS_RESOLVED = "crisisResolved"


class ChronicleImpact(StrEnum):
    """Tone of a chronicle entry."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


__all__ = [
    "AgentTier",
    "ArcKey",
    "ArcStatus",
    "ChronicleCategory",
    "ChronicleImpact",
    "CrisisSeverity",
    "Festival",
    "FestivalResult",
    "Genre",
    "PartnerStance",
    "ProjectPhase",
    "ReleaseOutcome",
    "ReleaseWindow",
    "Specialization",
    "StudioTier",
    "TalentAvailability",
    "TalentRole",
]
