"""
Billing Settings for the installment engine.

Tunable parameters for reminder scheduling, reporting windows and currency
display. Environment variables use the BILLING_ prefix:
    BILLING_UPCOMING_REMINDER_DAYS=5
    BILLING_ALL_TIME_START=1990-01-01

Usage:
    from installment_billing.service.billing.settings import billing_settings

    lead = billing_settings.upcoming_reminder_days

    # Or build custom settings in tests
    custom = BillingSettings(overdue_reminder_days=7)
"""

from datetime import date
from functools import lru_cache
from typing import FrozenSet

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BillingSettings(BaseSettings):
    """
    Configurable parameters for schedules, reminders and reports.

    All day counts are calendar days.
    """

    model_config = SettingsConfigDict(
        env_prefix="BILLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Reminders ===
    upcoming_reminder_days: int = Field(
        default=3,
        ge=0,
        le=60,
        description="Days before the due date an 'upcoming' reminder fires",
    )
    overdue_reminder_days: int = Field(
        default=3,
        ge=0,
        le=60,
        description="Days after the due date an 'overdue' reminder fires",
    )

    # === Reporting windows ===
    all_time_start: date = Field(
        default=date(2000, 1, 1),
        description="Start of the 'all' reporting window",
    )
    all_time_end: date = Field(
        default=date(2100, 12, 31),
        description="End of the 'all' reporting window",
    )

    # === Currency display ===
    base_currency: str = Field(
        default="PHP",
        min_length=3,
        max_length=3,
        description="Currency every stored amount is denominated in",
    )
    zero_decimal_currencies_csv: str = Field(
        default="JPY,KRW",
        description="Comma separated currency codes formatted without decimals",
    )

    @model_validator(mode="after")
    def validate_window(self) -> "BillingSettings":
        """Ensure the all-time window is not inverted."""
        if self.all_time_start >= self.all_time_end:
            raise ValueError(
                f"all_time_start ({self.all_time_start}) must be before "
                f"all_time_end ({self.all_time_end})"
            )
        return self

    @property
    def zero_decimal_currencies(self) -> FrozenSet[str]:
        return frozenset(
            code.strip().upper()
            for code in self.zero_decimal_currencies_csv.split(",")
            if code.strip()
        )


@lru_cache
def get_billing_settings() -> BillingSettings:
    """Get cached billing settings instance."""
    return BillingSettings()


billing_settings = get_billing_settings()
