"""Balance configuration objects for studio simulations."""

from __future__ import annotations

from decimal import Decimal
from functools import cache

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from reelhouse_backend.shared.value_objects import Money


class BalanceDefaults(BaseSettings):
    """Load default balance parameters from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REELHOUSE_BALANCE_",
        extra="ignore",
    )

    starting_cash: Decimal = Field(default=Decimal(50_000_000), ge=0)
    bankruptcy_threshold: Decimal = Field(default=Decimal(0))
    low_cash_warning: Decimal = Field(default=Decimal(1_000_000), ge=0)
    optional_action_cost: Decimal = Field(default=Decimal(180_000), ge=0)
    optional_action_hype: int = Field(default=5, ge=0)
    script_sprint_cost: Decimal = Field(default=Decimal(100_000), ge=0)
    polish_pass_cost: Decimal = Field(default=Decimal(120_000), ge=0)
    greenlight_fee_rate: Decimal = Field(default=Decimal("0.02"), ge=0)
    awards_interval_weeks: int = Field(default=52, ge=1)
    festival_resolution_weeks: int = Field(default=2, ge=1)
    rng_seed: int | None = Field(default=None)

    def to_config(self) -> BalanceConfiguration:
        """Convert defaults into an immutable configuration object."""
        return BalanceConfiguration(
            starting_cash=Money(amount=self.starting_cash),
            bankruptcy_threshold=Money(amount=self.bankruptcy_threshold),
            low_cash_warning=Money(amount=self.low_cash_warning),
            optional_action_cost=Money(amount=self.optional_action_cost),
            optional_action_hype=self.optional_action_hype,
            script_sprint_cost=Money(amount=self.script_sprint_cost),
            polish_pass_cost=Money(amount=self.polish_pass_cost),
            greenlight_fee_rate=self.greenlight_fee_rate,
            awards_interval_weeks=self.awards_interval_weeks,
            festival_resolution_weeks=self.festival_resolution_weeks,
            rng_seed=self.rng_seed,
        )


class StudioOverrides(BaseModel):
    """Optional per-studio overrides for balance settings."""

    model_config = ConfigDict(frozen=True)

    starting_cash: Money | None = None
    bankruptcy_threshold: Money | None = None
    optional_action_cost: Money | None = None
    rng_seed: int | None = None

    def apply(self, config: BalanceConfiguration) -> BalanceConfiguration:
        """Return a copy of *config* with overrides applied."""
        update: dict[str, object] = {}
        if self.starting_cash is not None:
            update["starting_cash"] = self.starting_cash
        if self.bankruptcy_threshold is not None:
            update["bankruptcy_threshold"] = self.bankruptcy_threshold
        if self.optional_action_cost is not None:
            update["optional_action_cost"] = self.optional_action_cost
        if self.rng_seed is not None:
            update["rng_seed"] = self.rng_seed
        return config.model_copy(update=update)


class BalanceConfiguration(BaseModel):
    """Immutable representation of the balance parameters for a studio."""

    model_config = ConfigDict(frozen=True)

    starting_cash: Money
    bankruptcy_threshold: Money
    low_cash_warning: Money
    optional_action_cost: Money
    optional_action_hype: int = Field(ge=0)
    script_sprint_cost: Money
    polish_pass_cost: Money
    greenlight_fee_rate: Decimal = Field(ge=0)
    awards_interval_weeks: int = Field(ge=1)
    festival_resolution_weeks: int = Field(ge=1)
    rng_seed: int | None = None

    def for_studio(
        self, overrides: StudioOverrides | None = None
    ) -> BalanceConfiguration:
        """Create a studio-specific configuration by applying overrides if provided."""
        if overrides is None:
            return self
        return overrides.apply(self)


@cache
def get_default_balance_configuration() -> BalanceConfiguration:
    """Return the cached default balance configuration."""
    return BalanceDefaults().to_config()


def build_studio_configuration(
    overrides: StudioOverrides | None = None,
) -> BalanceConfiguration:
    """Construct a configuration for a studio, applying optional overrides."""
    return get_default_balance_configuration().for_studio(overrides)


__all__ = [
    "BalanceConfiguration",
    "BalanceDefaults",
    "StudioOverrides",
    "build_studio_configuration",
    "get_default_balance_configuration",
]
