"""
Report Models

Shapes returned by the alert and payables-summary builders.
Amounts are always integer cents; formatting belongs to the caller
(see bizfin.utils.money).
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bizfin.models.recurring import RecurrenceType


class AlertStatus(str, Enum):
    """Payment state of a recurring expense for its current occurrence."""
    PAID = "paid"
    UNPAID = "unpaid"    # Not paid yet, not late
    OVERDUE = "overdue"  # Due date passed without a matching payment


class AlertStatusFilter(str, Enum):
    """Filters offered on the recurring expenses list."""
    ALL = "all"
    PAID = "paid"
    UNPAID = "unpaid"
    OVERDUE = "overdue"


class RecurringAlert(BaseModel):
    """One row of the recurring expenses alert list."""
    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    category: Optional[str] = None
    amount_cents: int = Field(ge=0)
    recurrence_type: RecurrenceType
    next_date: date
    days_until: int = Field(
        ...,
        description="Days from today to next_date (negative when past)"
    )
    is_paid: bool
    paid_transaction_date: Optional[date] = None

    @property
    def status(self) -> AlertStatus:
        if self.is_paid:
            return AlertStatus.PAID
        if self.days_until < 0:
            return AlertStatus.OVERDUE
        return AlertStatus.UNPAID


class CategoryTotal(BaseModel):
    """Open recurring amounts for one category."""
    model_config = ConfigDict(frozen=True)

    category: str
    total_cents: int = Field(default=0, ge=0)
    overdue_cents: int = Field(default=0, ge=0)


class DayTotal(BaseModel):
    """Open recurring amounts falling on one day."""
    model_config = ConfigDict(frozen=True)

    date: date
    amount_cents: int = Field(default=0, ge=0)


class PayablesSummary(BaseModel):
    """
    Recurring-expense part of the "to pay" aggregation.

    overdue and due_this_week are exclusive buckets; due_this_month
    overlaps both (everything still open up to the end of the month).
    """
    model_config = ConfigDict(frozen=True)

    total_cents: int = Field(default=0, ge=0)
    overdue_cents: int = Field(default=0, ge=0)
    due_this_week_cents: int = Field(default=0, ge=0)
    due_this_month_cents: int = Field(default=0, ge=0)
    from_recurring_cents: int = Field(default=0, ge=0)
    by_category: list[CategoryTotal] = Field(default_factory=list)
    by_day: list[DayTotal] = Field(default_factory=list)

    @property
    def has_open_items(self) -> bool:
        return self.total_cents > 0
