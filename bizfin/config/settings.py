"""
Configuration Management for bizfin

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Settings are only read at the edges.
The matching heuristics and report windows are turned into frozen policy
objects (see to_policy) and passed explicitly into the pure functions,
so the core never reaches into the environment on its own.
"""

from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from bizfin.classification.policy import MatchPolicy
    from bizfin.reports.policy import ReportPolicy


class MatchingSettings(BaseSettings):
    """Fixed/variable expense matching heuristics."""

    model_config = SettingsConfigDict(
        env_prefix="BIZFIN_MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    amount_tolerance_percent: Decimal = Field(
        default=Decimal("0.08"),
        ge=0,
        le=1,
        description="Relative amount tolerance (fraction of the recurring amount)"
    )
    min_tolerance_cents: int = Field(
        default=200,
        ge=0,
        description="Absolute tolerance floor in cents"
    )

    def to_policy(self) -> "MatchPolicy":
        from bizfin.classification.policy import MatchPolicy

        return MatchPolicy(
            amount_tolerance_percent=self.amount_tolerance_percent,
            min_tolerance_cents=self.min_tolerance_cents,
        )


class ReportSettings(BaseSettings):
    """Windows and defaults used by alerts and the payables summary."""

    model_config = SettingsConfigDict(
        env_prefix="BIZFIN_REPORTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    paid_window_before_days: int = Field(
        default=5,
        ge=0,
        description="Days before the due date a payment still counts"
    )
    paid_window_after_days: int = Field(
        default=10,
        ge=0,
        description="Days after the due date a payment still counts"
    )
    due_soon_days: int = Field(
        default=7,
        ge=0,
        description="Horizon of the 'due this week' bucket"
    )
    by_day_horizon_days: int = Field(
        default=14,
        ge=0,
        description="Horizon of the per-day breakdown"
    )
    paid_amount_slack_cents: int = Field(
        default=100,
        ge=0,
        description="Amount difference (exclusive) for the same-description paid check"
    )
    default_category: str = Field(
        default="Despesas Recorrentes",
        description="Category label for recurring expenses without one"
    )

    @field_validator('default_category')
    @classmethod
    def validate_default_category(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("default_category cannot be blank")
        return v

    def to_policy(self, matching: Optional["MatchPolicy"] = None) -> "ReportPolicy":
        from bizfin.classification.policy import MatchPolicy
        from bizfin.reports.policy import ReportPolicy

        return ReportPolicy(
            matching=matching or MatchPolicy(),
            paid_window_before_days=self.paid_window_before_days,
            paid_window_after_days=self.paid_window_after_days,
            due_soon_days=self.due_soon_days,
            by_day_horizon_days=self.by_day_horizon_days,
            paid_amount_slack_cents=self.paid_amount_slack_cents,
            default_category=self.default_category,
        )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BIZFIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (console renderer otherwise)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def matching(self) -> MatchingSettings:
        return MatchingSettings()

    @property
    def reports(self) -> ReportSettings:
        return ReportSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    def match_policy(self) -> "MatchPolicy":
        return self.matching.to_policy()

    def report_policy(self) -> "ReportPolicy":
        """Report policy carrying the configured matching tolerance."""
        return self.reports.to_policy(matching=self.match_policy())


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
