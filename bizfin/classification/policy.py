"""
Matching Policy

The 8% / 200-cent tolerance was tuned by hand against real usage, not
against a labelled dataset. It is kept as the default and exposed here so
it can be adjusted without touching the matching code.
"""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_AMOUNT_TOLERANCE_PERCENT = Decimal("0.08")
DEFAULT_MIN_TOLERANCE_CENTS = 200


class MatchPolicy(BaseModel):
    """Amount tolerance used when matching transactions to recurring expenses."""
    model_config = ConfigDict(frozen=True)

    amount_tolerance_percent: Decimal = Field(
        default=DEFAULT_AMOUNT_TOLERANCE_PERCENT,
        ge=0,
        le=1,
    )
    min_tolerance_cents: int = Field(
        default=DEFAULT_MIN_TOLERANCE_CENTS,
        ge=0,
    )

    def tolerance_for(self, amount_cents: int) -> int:
        """max(round(amount * percent), floor), rounding halves up."""
        relative = (Decimal(amount_cents) * self.amount_tolerance_percent).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
        return max(int(relative), self.min_tolerance_cents)

    def amount_matches(self, actual_cents: int, expected_cents: int) -> bool:
        return abs(actual_cents - expected_cents) <= self.tolerance_for(expected_cents)


DEFAULT_MATCH_POLICY = MatchPolicy()
