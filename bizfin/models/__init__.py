"""
Data Models Package

This package contains all Pydantic models used by bizfin.
All data reaching the core must conform to these schemas.
"""

from bizfin.models.recurring import (
    ClassificationResult,
    DueRule,
    RecurrenceType,
    RecurringExpense,
    Scheduled,
    Transaction,
    TransactionType,
    Unscheduled,
)
from bizfin.models.reports import (
    AlertStatus,
    AlertStatusFilter,
    CategoryTotal,
    DayTotal,
    PayablesSummary,
    RecurringAlert,
)
from bizfin.models.issues import (
    ParseReport,
    ValidationIssue,
)

__all__ = [
    # Core models
    "ClassificationResult",
    "DueRule",
    "RecurrenceType",
    "RecurringExpense",
    "Scheduled",
    "Transaction",
    "TransactionType",
    "Unscheduled",
    # Report models
    "AlertStatus",
    "AlertStatusFilter",
    "CategoryTotal",
    "DayTotal",
    "PayablesSummary",
    "RecurringAlert",
    # Parsing
    "ParseReport",
    "ValidationIssue",
]
