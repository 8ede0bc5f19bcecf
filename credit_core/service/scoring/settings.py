"""
Scoring and Approval Settings for the credit decisioning core.

This module contains the configurable parameters of the credit score,
the category tiers and the category-conditioned approval policy. They
can be adjusted via environment variables when the bank's risk policy
changes.

Environment variables use the SCORING_ and APPROVAL_ prefixes:
    SCORING_VIP_THRESHOLD=760
    APPROVAL_STANDARD_MANUAL_REVIEW_AMOUNT=400000

Usage:
    from credit_core.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    floor = scoring_settings.min_score

    # Or create custom settings for testing
    custom = ScoringSettings(vip_threshold=700)
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for the credit score and category tiers.

    All settings can be overridden via environment variables with SCORING_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Score Bounds ===
    min_score: int = Field(default=300, description="Lowest possible credit score")
    max_score: int = Field(default=900, description="Highest possible credit score")
    base_score: int = Field(
        default=500,
        description="Starting score before financial adjustments",
    )

    # === Category Tiers (inclusive lower bounds) ===
    vip_threshold: int = Field(default=750, description="Minimum score for VIP")
    standard_threshold: int = Field(default=600, description="Minimum score for STANDARD")

    # === Income/Expense Ratio ===
    missing_income_penalty: int = Field(
        default=-100,
        description="Points when monthly income is zero or negative",
    )
    ratio_excellent_threshold: Decimal = Field(
        default=Decimal("0.5"),
        description="Expense/income ratio below this earns the excellent bonus",
    )
    ratio_good_threshold: Decimal = Field(
        default=Decimal("0.7"),
        description="Expense/income ratio below this earns the good bonus",
    )
    ratio_fair_threshold: Decimal = Field(
        default=Decimal("0.9"),
        description="Expense/income ratio below this earns the fair bonus",
    )
    ratio_excellent_points: int = Field(default=150)
    ratio_good_points: int = Field(default=100)
    ratio_fair_points: int = Field(default=50)
    ratio_poor_points: int = Field(default=-50)

    # === Credit History ===
    on_time_payment_points: int = Field(
        default=10,
        ge=0,
        description="Points per on-time payment",
    )
    late_payment_points: int = Field(
        default=-20,
        le=0,
        description="Points per late payment",
    )

    # === Bank Activity ===
    account_age_points_per_year: int = Field(default=5, ge=0)
    account_age_max_points: int = Field(default=50, ge=0)
    balance_high_threshold: Decimal = Field(default=Decimal("10000"))
    balance_medium_threshold: Decimal = Field(default=Decimal("5000"))
    balance_low_threshold: Decimal = Field(default=Decimal("1000"))
    balance_high_points: int = Field(default=100)
    balance_medium_points: int = Field(default=50)
    balance_low_points: int = Field(default=25)

    @model_validator(mode="after")
    def validate_bounds(self) -> "ScoringSettings":
        """Ensure bounds and tier thresholds are ordered."""
        if self.min_score > self.max_score:
            raise ValueError(
                f"min_score ({self.min_score}) > max_score ({self.max_score})"
            )
        if self.standard_threshold > self.vip_threshold:
            raise ValueError(
                f"standard_threshold ({self.standard_threshold}) > "
                f"vip_threshold ({self.vip_threshold})"
            )
        return self


class ApprovalSettings(BaseSettings):
    """
    Amount and score thresholds of the category-conditioned approval policy.

    All settings can be overridden via environment variables with APPROVAL_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="APPROVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    vip_manual_review_amount: Decimal = Field(
        default=Decimal("1000000"),
        gt=0,
        description="VIP amounts above this need manual approval",
    )
    standard_manual_review_amount: Decimal = Field(
        default=Decimal("500000"),
        gt=0,
        description="STANDARD amounts above this need manual approval",
    )
    standard_auto_approve_min_score: int = Field(
        default=650,
        description="STANDARD scores below this need manual approval",
    )
    risky_rejection_amount: Decimal = Field(
        default=Decimal("100000"),
        gt=0,
        description="RISKY amounts above this are rejected",
    )
    risky_min_score: int = Field(
        default=500,
        description="RISKY scores below this are rejected",
    )


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


@lru_cache
def get_approval_settings() -> ApprovalSettings:
    """Get cached approval settings instance."""
    return ApprovalSettings()


scoring_settings = get_scoring_settings()
approval_settings = get_approval_settings()
