"""Opening studio roster, slate and script catalog."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel
from pydantic.config import ConfigDict

from reelhouse_backend.game_logic.balance import GENRE_BUDGETS
from reelhouse_backend.game_logic.configuration import (  # noqa: TC001
    BalanceConfiguration,
)
from reelhouse_backend.game_logic.state import (
    MovieProject,
    ScriptPitch,
    StudioState,
    Talent,
)
from reelhouse_backend.shared.enums import (
    AgentTier,
    Genre,
    PartnerStance,
    ProjectPhase,
    TalentRole,
)
from reelhouse_backend.shared.value_objects import Money


class PitchTemplate(BaseModel):
    """Catalog entry the script market draws new pitches from."""

    model_config = ConfigDict(frozen=True)

    title: str
    genre: Genre
    logline: str


PITCH_CATALOG: tuple[PitchTemplate, ...] = (
    PitchTemplate(
        title="Neon Harbor",
        genre=Genre.THRILLER,
        logline="A harbor pilot uncovers a smuggling ring run by her own union.",
    ),
    PitchTemplate(
        title="Paper Moons",
        genre=Genre.DRAMA,
        logline="Two estranged sisters restore their late father's puppet theater.",
    ),
    PitchTemplate(
        title="Static Bloom",
        genre=Genre.SCI_FI,
        logline="A botanist on a relay station hears voices inside the greenhouse.",
    ),
    PitchTemplate(
        title="The Long Weekend",
        genre=Genre.COMEDY,
        logline="Three best men lose the groom, the ring and the rental car.",
    ),
    PitchTemplate(
        title="Hollow Pines",
        genre=Genre.HORROR,
        logline="A summer camp reopens on the anniversary nobody talks about.",
    ),
    PitchTemplate(
        title="Iron Meridian",
        genre=Genre.ACTION,
        logline="A disgraced courier has one night to cross a locked-down city.",
    ),
    PitchTemplate(
        title="Little Lantern",
        genre=Genre.ANIMATION,
        logline="A lighthouse spark sets out to find the ship it once saved.",
    ),
    PitchTemplate(
        title="Ground Truth",
        genre=Genre.DOCUMENTARY,
        logline="Inside the volunteer network mapping a vanishing coastline.",
    ),
    PitchTemplate(
        title="Cold Open",
        genre=Genre.COMEDY,
        logline="A late-night writers' room stages a coup during sweeps week.",
    ),
    PitchTemplate(
        title="Blackwater Verdict",
        genre=Genre.THRILLER,
        logline="A juror realizes the defendant is the only witness to her past.",
    ),
)

STARTING_TALENT: tuple[Talent, ...] = (
    Talent(
        id="talent-ava-mercer",
        name="Ava Mercer",
        role=TalentRole.DIRECTOR,
        star_power=7.0,
        craft=8.0,
        ego=6.0,
        agent_tier=AgentTier.CAA,
        asking_fee=Money(amount=Decimal(1_200_000)),
    ),
    Talent(
        id="talent-jon-reyes",
        name="Jon Reyes",
        role=TalentRole.DIRECTOR,
        star_power=5.0,
        craft=6.5,
        ego=4.0,
        agent_tier=AgentTier.UTA,
        asking_fee=Money(amount=Decimal(600_000)),
    ),
    Talent(
        id="talent-priya-lal",
        name="Priya Lal",
        role=TalentRole.DIRECTOR,
        star_power=3.5,
        craft=7.0,
        ego=3.0,
        agent_tier=AgentTier.INDEPENDENT,
        asking_fee=Money(amount=Decimal(350_000)),
    ),
    Talent(
        id="talent-marcus-hale",
        name="Marcus Hale",
        role=TalentRole.LEAD_ACTOR,
        star_power=8.5,
        craft=6.5,
        ego=8.0,
        agent_tier=AgentTier.WME,
        asking_fee=Money(amount=Decimal(2_500_000)),
    ),
    Talent(
        id="talent-lena-park",
        name="Lena Park",
        role=TalentRole.LEAD_ACTOR,
        star_power=6.0,
        craft=7.5,
        ego=5.0,
        agent_tier=AgentTier.UTA,
        asking_fee=Money(amount=Decimal(900_000)),
    ),
    Talent(
        id="talent-tom-okafor",
        name="Tom Okafor",
        role=TalentRole.LEAD_ACTOR,
        star_power=4.0,
        craft=6.0,
        ego=3.5,
        agent_tier=AgentTier.INDEPENDENT,
        asking_fee=Money(amount=Decimal(300_000)),
    ),
    Talent(
        id="talent-sofia-brandt",
        name="Sofia Brandt",
        role=TalentRole.LEAD_ACTOR,
        star_power=7.0,
        craft=8.0,
        ego=6.5,
        agent_tier=AgentTier.CAA,
        asking_fee=Money(amount=Decimal(1_600_000)),
    ),
)

STARTING_PARTNERS: tuple[str, ...] = (
    "Aster Peak Pictures",
    "Silverline Distribution",
    "Constellation Media",
)

MARKET_SIZE = 4
MIN_PITCH_PRICE = Money(amount=Decimal(300_000))


def starting_projects() -> list[MovieProject]:
    """Return the slate a new studio opens with."""
    return [
        MovieProject(
            id="project-harbor-lights",
            title="Harbor Lights",
            genre=Genre.DRAMA,
            phase=ProjectPhase.DEVELOPMENT,
            script_quality=6.4,
            concept_strength=6.0,
            hype=12.0,
            budget=GENRE_BUDGETS[Genre.DRAMA],
        ),
        MovieProject(
            id="project-night-circuit",
            title="Night Circuit",
            genre=Genre.ACTION,
            phase=ProjectPhase.DEVELOPMENT,
            script_quality=5.6,
            concept_strength=7.0,
            hype=16.0,
            budget=GENRE_BUDGETS[Genre.ACTION],
        ),
    ]


def build_pitch(
    template: PitchTemplate,
    *,
    pitch_id: str,
    script_quality: float,
    concept_strength: float,
    expires_in_weeks: int,
) -> ScriptPitch:
    """Price a catalog entry for the market; stronger pitches cost more."""
    budget = GENRE_BUDGETS[template.genre]
    price = budget.multiply(round(0.01 + script_quality * 0.002, 4))
    if not price.covers(MIN_PITCH_PRICE):
        price = MIN_PITCH_PRICE
    return ScriptPitch(
        id=pitch_id,
        title=template.title,
        genre=template.genre,
        logline=template.logline,
        asking_price=price,
        script_quality=round(script_quality, 2),
        concept_strength=round(concept_strength, 2),
        expires_in_weeks=expires_in_weeks,
    )


def build_starting_state(configuration: BalanceConfiguration) -> StudioState:
    """Assemble a fresh studio; the script market is filled by the caller."""
    return StudioState(
        cash=configuration.starting_cash,
        projects=starting_projects(),
        talent=[talent.model_copy(deep=True) for talent in STARTING_TALENT],
        partner_stances=dict.fromkeys(STARTING_PARTNERS, PartnerStance.NEUTRAL),
    )


__all__ = [
    "MARKET_SIZE",
    "MIN_PITCH_PRICE",
    "PITCH_CATALOG",
    "STARTING_TALENT",
    "PitchTemplate",
    "build_pitch",
    "build_starting_state",
    "starting_projects",
]
