"""Windows and defaults for the recurring-expense reports."""

from pydantic import BaseModel, ConfigDict, Field

from bizfin.classification.policy import DEFAULT_MATCH_POLICY, MatchPolicy


class ReportPolicy(BaseModel):
    """
    Immutable configuration passed into the report builders.

    Build it from ReportSettings.to_policy() or use DEFAULT_REPORT_POLICY.
    """
    model_config = ConfigDict(frozen=True)

    paid_window_before_days: int = Field(default=5, ge=0)
    paid_window_after_days: int = Field(default=10, ge=0)
    due_soon_days: int = Field(default=7, ge=0)
    by_day_horizon_days: int = Field(default=14, ge=0)
    paid_amount_slack_cents: int = Field(default=100, ge=0)
    default_category: str = Field(default="Despesas Recorrentes", min_length=1)
    matching: MatchPolicy = Field(default=DEFAULT_MATCH_POLICY)


DEFAULT_REPORT_POLICY = ReportPolicy()
