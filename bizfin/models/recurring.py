"""
Core Data Models for bizfin

These models define the strict shapes the recurrence and classification
code works on. Raw backend rows never reach the core directly: they go
through bizfin.validation.parser first.

DESIGN DECISION: Every model is frozen.
The core only reads its inputs, and a frozen model makes that a guarantee
rather than a convention.
"""

from datetime import date
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class RecurrenceType(str, Enum):
    """How often a recurring expense comes due."""
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    ANNUAL = "annual"
    CUSTOM = "custom"  # Fixed step of interval_days


class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


# =============================================================================
# DUE RULE - scheduled anchor date or no fixed due date
# =============================================================================

class Scheduled(BaseModel):
    """The expense has an anchor (first) due date."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["scheduled"] = "scheduled"
    anchor: date


class Unscheduled(BaseModel):
    """
    The expense has no fixed due date.

    Payment timing is decided when the payment happens, so there is
    nothing to compute an occurrence from.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["unscheduled"] = "unscheduled"


DueRule = Annotated[Union[Scheduled, Unscheduled], Field(discriminator="kind")]


# =============================================================================
# RECURRING EXPENSE
# =============================================================================

class RecurringExpense(BaseModel):
    """
    A recurring expense definition (rent, subscription, utility...).

    amount_cents == 0 means the amount is variable and only known once paid.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque identifier, unique per definition"
    )
    description: str = Field(
        default="",
        description="Label used for display and for matching transactions"
    )
    category: Optional[str] = Field(
        default=None,
        description="Free-text category"
    )
    amount_cents: int = Field(
        default=0,
        ge=0,
        description="Expected amount in cents (0 = variable amount)"
    )
    recurrence_type: RecurrenceType = Field(
        ...,
        description="Recurrence rule"
    )
    interval_days: Optional[int] = Field(
        default=None,
        description="Step in days, only used by custom recurrences"
    )
    due_rule: DueRule = Field(
        ...,
        description="Anchor due date, or no fixed due date"
    )
    end_date: Optional[date] = Field(
        default=None,
        description="Last date an occurrence may fall on"
    )

    @property
    def start_date(self) -> Optional[date]:
        """Anchor date, or None for unscheduled expenses."""
        if isinstance(self.due_rule, Scheduled):
            return self.due_rule.anchor
        return None

    @property
    def is_scheduled(self) -> bool:
        return isinstance(self.due_rule, Scheduled)

    @property
    def has_valid_interval(self) -> bool:
        """Custom recurrences need a positive step to advance."""
        return self.interval_days is not None and self.interval_days >= 1


# =============================================================================
# TRANSACTION
# =============================================================================

class Transaction(BaseModel):
    """
    A transaction of the period being analysed.

    Owned by the surrounding application; the core only reads it.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    type: TransactionType
    amount_cents: int = Field(
        default=0,
        ge=0,
        description="Amount in cents"
    )
    description: str = Field(
        default="",
        description="Free text entered by the user"
    )
    date: date
    payment_tag: Optional[str] = Field(
        default=None,
        description="recurring_expense:<id>:<key> when paid from a recurring expense"
    )

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


# =============================================================================
# CLASSIFICATION RESULT
# =============================================================================

class ClassificationResult(BaseModel):
    """Expense totals split into fixed (recurring) and variable."""
    model_config = ConfigDict(frozen=True)

    fixed_cents: int = Field(default=0, ge=0)
    variable_cents: int = Field(default=0, ge=0)

    @property
    def total_cents(self) -> int:
        return self.fixed_cents + self.variable_cents
