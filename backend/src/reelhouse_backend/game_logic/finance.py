"""Cash movements, weekly burn and bankruptcy determination."""

from __future__ import annotations

import logging

from reelhouse_backend.game_logic.balance import (
    PHASE_BURN_RATES,
    SPECIALIZATION_PROFILES,
)
from reelhouse_backend.game_logic.configuration import (  # noqa: TC001
    BalanceConfiguration,
)
from reelhouse_backend.game_logic.state import StudioState  # noqa: TC001
from reelhouse_backend.shared.value_objects import Money

logger = logging.getLogger(__name__)


class FinancialLedger:
    """Single entry point for every change to the studio's cash balance."""

    def __init__(self, state: StudioState, configuration: BalanceConfiguration) -> None:
        self._state = state
        self._configuration = configuration

    @property
    def cash(self) -> Money:
        """Return the current cash balance."""
        return self._state.cash

    def can_afford(self, amount: Money) -> bool:
        """Return ``True`` when the balance covers *amount*."""
        return self._state.cash.covers(amount)

    def debit(self, amount: Money) -> None:
        """Spend *amount* and track it as an expense."""
        if amount.is_negative:
            msg = "Debit amounts must be non-negative."
            raise ValueError(msg)
        self._state.cash = self._state.cash.subtract(amount)
        self._state.lifetime_expenses = self._state.lifetime_expenses.add(amount)

    def credit(self, amount: Money) -> None:
        """Receive *amount* and track it as revenue."""
        if amount.is_negative:
            msg = "Credit amounts must be non-negative."
            raise ValueError(msg)
        self._state.cash = self._state.cash.add(amount)
        self._state.lifetime_revenue = self._state.lifetime_revenue.add(amount)

    def apply_delta(self, delta: Money) -> None:
        """Route a signed option delta to :meth:`credit` or :meth:`debit`."""
        if delta.is_negative:
            self.debit(delta.negate())
        elif delta.is_positive:
            self.credit(delta)

    def apply_weekly_burn(self) -> Money:
        """Charge every in-flight project its phase burn and return the total."""
        profile = SPECIALIZATION_PROFILES[self._state.specialization]
        total = Money.zero()
        for project in self._state.projects:
            rate = PHASE_BURN_RATES[project.phase]
            if rate == 0:
                continue
            burn = project.budget.multiply(rate).multiply(profile.burn_multiplier)
            project.production_spend = project.production_spend.add(burn)
            total = total.add(burn)
        if total.is_positive:
            self.debit(total)
        return total

    def evaluate_bankruptcy(self) -> bool:
        """Flag the studio bankrupt once cash falls to the threshold.

        Returns ``True`` only on the week bankruptcy is first declared; the
        flag itself is sticky.
        """
        state = self._state
        if state.cash.covers(self._configuration.low_cash_warning):
            state.consecutive_low_cash_weeks = 0
        else:
            state.consecutive_low_cash_weeks += 1
        if state.is_bankrupt:
            return False
        if state.cash.amount > self._configuration.bankruptcy_threshold.amount:
            return False
        state.is_bankrupt = True
        state.bankruptcy_reason = (
            f"Bankruptcy declared at week {state.week} "
            f"with cash {state.cash.describe()}."
        )
        logger.warning(
            "Studio %s went bankrupt: %s", state.studio_name, state.bankruptcy_reason
        )
        return True


__all__ = ["FinancialLedger"]
