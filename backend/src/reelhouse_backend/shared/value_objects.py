"""Immutable value objects shared across the domain layer."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

_CURRENCY_QUANTIZE = Decimal("0.01")


class Money(BaseModel):
    """Representation of monetary values with fixed precision."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ..., description="Monetary amount expressed in whole currency units."
    )
    currency: str = Field(
        default="USD", min_length=3, max_length=3, description="ISO-like currency code."
    )

    @model_validator(mode="after")
    def _normalize_amount(self) -> Money:
        """Ensure the amount is rounded to two decimal places and currency uppercase."""
        quantized = self.amount.quantize(_CURRENCY_QUANTIZE, rounding=ROUND_HALF_UP)
        object.__setattr__(self, "amount", quantized)
        object.__setattr__(self, "currency", self.currency.upper())
        return self

    @classmethod
    def of(cls, value: Decimal | float | str, currency: str = "USD") -> Money:
        """Build an amount from a float produced by the simulation formulas."""
        if isinstance(value, float):
            value = repr(round(value, 2))
        return cls(amount=Decimal(value), currency=currency)

    @classmethod
    def zero(cls, currency: str = "USD") -> Money:
        """Return a zero amount in *currency*."""
        return cls(amount=Decimal(0), currency=currency)

    def add(self, other: Money) -> Money:
        """Return a new instance with *other* added to this monetary value."""
        self._assert_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def subtract(self, other: Money) -> Money:
        """Return a new instance with *other* subtracted from this monetary value."""
        self._assert_same_currency(other)
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def multiply(self, factor: Decimal | float) -> Money:
        """Scale the amount by *factor* while preserving rounding rules."""
        if isinstance(factor, float):
            factor = Decimal(repr(factor))
        decimal_factor = factor if isinstance(factor, Decimal) else Decimal(factor)
        new_amount = (self.amount * decimal_factor).quantize(
            _CURRENCY_QUANTIZE, rounding=ROUND_HALF_UP
        )
        return Money(amount=new_amount, currency=self.currency)

    def negate(self) -> Money:
        """Return the amount with its sign flipped."""
        return Money(amount=-self.amount, currency=self.currency)

    def covers(self, other: Money) -> bool:
        """Return ``True`` when this amount is at least *other*."""
        self._assert_same_currency(other)
        return self.amount >= other.amount

    @property
    def is_positive(self) -> bool:
        """Return ``True`` for amounts strictly above zero."""
        return self.amount > 0

    @property
    def is_negative(self) -> bool:
        """Return ``True`` for amounts strictly below zero."""
        return self.amount < 0

    def as_float(self) -> float:
        """Return the amount as a float for use in scoring formulas."""
        return float(self.amount)

    def describe(self) -> str:
        """Format the amount the way in-game messages show it."""
        sign = "-" if self.amount < 0 else ""
        return f"{sign}${abs(self.amount):,.0f}"

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            msg = f"Currency mismatch: {self.currency} vs {other.currency}."
            raise ValueError(msg)


__all__ = ["Money"]
