"""Distribution offers, deal acceptance and release dating."""

from __future__ import annotations

import logging

from reelhouse_backend.game_logic.balance import clamp
from reelhouse_backend.game_logic.finance import FinancialLedger  # noqa: TC001
from reelhouse_backend.game_logic.progression import ArcManager  # noqa: TC001
from reelhouse_backend.game_logic.results import (
    ActionApplied,
    ActionRejected,
    rejected,
)
from reelhouse_backend.game_logic.state import (
    DistributionOffer,
    MovieProject,
    StudioState,
)
from reelhouse_backend.shared.enums import PartnerStance, ProjectPhase, ReleaseWindow
from reelhouse_backend.shared.rng import DeterministicRandomService  # noqa: TC001

logger = logging.getLogger(__name__)

DISTRIBUTION_PARTNERS: tuple[str, ...] = (
    "Aster Peak Pictures",
    "Silverline Distribution",
    "Constellation Media",
)

# Partners that only ever offer a platform release.
LIMITED_ONLY_PARTNERS = frozenset({"Constellation Media"})

STANCE_GUARANTEE_FACTORS: dict[PartnerStance, float] = {
    PartnerStance.HOSTILE: 0.8,
    PartnerStance.COMPETITIVE: 0.9,
    PartnerStance.NEUTRAL: 1.0,
    PartnerStance.RESPECTFUL: 1.1,
}

PA_HYPE_FACTOR = 10.0


class DistributionDesk:
    """Generate and settle distribution offers for finished projects."""

    def __init__(
        self,
        state: StudioState,
        ledger: FinancialLedger,
        arcs: ArcManager,
        rng: DeterministicRandomService,
    ) -> None:
        self._state = state
        self._ledger = ledger
        self._arcs = arcs
        self._rng = rng

    def generate_offers(self, project: MovieProject) -> list[DistributionOffer]:
        """Replace *project*'s offers with a fresh round from every partner."""
        offers: list[DistributionOffer] = []
        for partner in DISTRIBUTION_PARTNERS:
            stance = self._state.partner_stances.get(partner, PartnerStance.NEUTRAL)
            guarantee_share = (0.12 + self._rng.uniform(0.0, 0.08)) * (
                STANCE_GUARANTEE_FACTORS[stance]
            )
            window = (
                ReleaseWindow.LIMITED
                if partner in LIMITED_ONLY_PARTNERS or stance is PartnerStance.HOSTILE
                else ReleaseWindow.WIDE
            )
            offers.append(
                DistributionOffer(
                    id=self._state.next_id("offer"),
                    partner=partner,
                    release_window=window,
                    minimum_guarantee=project.budget.multiply(
                        round(guarantee_share, 4)
                    ),
                    pa_commitment=project.budget.multiply(
                        round(self._rng.uniform(0.15, 0.3), 4)
                    ),
                    revenue_share=round(self._rng.uniform(0.45, 0.58), 4),
                )
            )
        project.distribution_offers = offers
        return offers

    def accept_offer(
        self, project_id: str, offer_id: str
    ) -> ActionApplied | ActionRejected:
        """Sign *offer_id* for *project_id*, banking the minimum guarantee."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        if project.phase is not ProjectPhase.DISTRIBUTION:
            return rejected("Distribution deals are signed during distribution.")
        if project.release_window is not None:
            return rejected(f"{project.title} already has a distribution deal.")
        offer = next((o for o in project.distribution_offers if o.id == offer_id), None)
        if offer is None:
            return rejected(f"Offer '{offer_id}' is not on the table.")

        project.release_window = offer.id
        project.distribution_partner = offer.partner
        self._ledger.credit(offer.minimum_guarantee)
        if project.budget.is_positive:
            lift = offer.pa_commitment.amount / project.budget.amount * PA_HYPE_FACTOR
            project.hype = clamp(project.hype + float(lift), 0.0, 100.0)
        stance = self._state.partner_stances.get(offer.partner, PartnerStance.NEUTRAL)
        self._arcs.set_stance(offer.partner, stance.warmer())
        top_bid = max(
            project.distribution_offers, key=lambda o: o.minimum_guarantee.amount
        )
        if top_bid.minimum_guarantee.amount > offer.minimum_guarantee.amount:
            self._arcs.snub(top_bid.partner)
            logger.info("%s was passed over despite the top bid", top_bid.partner)
        logger.info("Project %s signed with %s", project.id, offer.partner)
        return ActionApplied(
            message=(
                f"{project.title} signed with {offer.partner} "
                f"({offer.release_window} release, "
                f"{offer.minimum_guarantee.describe()} guarantee)."
            ),
            project_id=project.id,
        )

    def set_release_week(
        self, project_id: str, week: int
    ) -> ActionApplied | ActionRejected:
        """Move the release date later; dates never move earlier."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        if (
            project.phase is not ProjectPhase.DISTRIBUTION
            or project.release_week is None
        ):
            return rejected("Release dates are set once a project is in distribution.")
        if week < project.release_week:
            return rejected(
                f"Release week can only move later than week {project.release_week}."
            )
        project.release_week = week
        return ActionApplied(
            message=f"{project.title} now opens in week {week}.",
            project_id=project.id,
        )


__all__ = ["DISTRIBUTION_PARTNERS", "DistributionDesk"]
