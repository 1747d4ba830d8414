"""
Tests for bizfin

Test strategy:
1. Unit tests for individual components (models, parser, policies)
2. Behaviour tests for the occurrence, classification and report functions
3. No I/O anywhere: every test builds its inputs in memory
"""

import pytest
from datetime import date

from pydantic import TypeAdapter, ValidationError

from bizfin.models import (
    AlertStatus,
    ClassificationResult,
    DueRule,
    ParseReport,
    RecurrenceType,
    RecurringAlert,
    RecurringExpense,
    Scheduled,
    Transaction,
    TransactionType,
    Unscheduled,
    ValidationIssue,
)


class TestRecurringExpense:
    """Tests for the RecurringExpense model."""

    def test_creation(self):
        """Test RecurringExpense model creation."""
        expense = RecurringExpense(
            id="rec-1",
            description="  Aluguel  ",
            amount_cents=150000,
            recurrence_type=RecurrenceType.MONTHLY,
            due_rule=Scheduled(anchor=date(2024, 1, 10)),
        )
        assert expense.description == "Aluguel"
        assert expense.start_date == date(2024, 1, 10)
        assert expense.is_scheduled is True

    def test_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            RecurringExpense(
                id="rec-1",
                amount_cents=-1,
                recurrence_type=RecurrenceType.MONTHLY,
                due_rule=Scheduled(anchor=date(2024, 1, 10)),
            )

    def test_is_frozen(self):
        """Test the model cannot be mutated."""
        expense = RecurringExpense(
            id="rec-1",
            recurrence_type=RecurrenceType.WEEKLY,
            due_rule=Scheduled(anchor=date(2024, 1, 10)),
        )
        with pytest.raises(ValidationError):
            expense.amount_cents = 10

    def test_unscheduled_has_no_start_date(self):
        """Test an unscheduled expense exposes no start date."""
        expense = RecurringExpense(
            id="rec-1",
            recurrence_type=RecurrenceType.MONTHLY,
            due_rule=Unscheduled(),
        )
        assert expense.start_date is None
        assert expense.is_scheduled is False

    def test_due_rule_discriminator(self):
        """Test DueRule validates from its tagged dict form."""
        adapter = TypeAdapter(DueRule)
        assert adapter.validate_python({"kind": "unscheduled"}) == Unscheduled()
        assert adapter.validate_python(
            {"kind": "scheduled", "anchor": "2024-02-01"}
        ) == Scheduled(anchor=date(2024, 2, 1))

    @pytest.mark.parametrize("interval, valid", [(None, False), (0, False), (1, True), (30, True)])
    def test_has_valid_interval(self, interval, valid):
        """Test custom interval validity."""
        expense = RecurringExpense(
            id="rec-1",
            recurrence_type=RecurrenceType.CUSTOM,
            interval_days=interval,
            due_rule=Scheduled(anchor=date(2024, 1, 1)),
        )
        assert expense.has_valid_interval is valid


class TestTransaction:
    """Tests for the Transaction model."""

    def test_defaults(self):
        """Test description and amount defaults."""
        tx = Transaction(type=TransactionType.EXPENSE, date=date(2024, 3, 1))
        assert tx.description == ""
        assert tx.amount_cents == 0
        assert tx.is_expense is True

    def test_income_is_not_expense(self):
        """Test is_expense for income."""
        tx = Transaction(type="income", amount_cents=100, date=date(2024, 3, 1))
        assert tx.is_expense is False

    def test_description_is_stripped(self):
        """Test surrounding whitespace is removed from the description."""
        tx = Transaction(type="expense", description="  Aluguel ", date=date(2024, 3, 1))
        assert tx.description == "Aluguel"


class TestResults:
    """Tests for result models."""

    def test_classification_total(self):
        """Test total_cents adds both parts."""
        result = ClassificationResult(fixed_cents=700, variable_cents=300)
        assert result.total_cents == 1000

    def test_classification_rejects_negative(self):
        """Test negative parts are rejected."""
        with pytest.raises(ValueError):
            ClassificationResult(fixed_cents=-1, variable_cents=0)

    @pytest.mark.parametrize("is_paid, days_until, status", [
        (True, -3, AlertStatus.PAID),
        (False, -1, AlertStatus.OVERDUE),
        (False, 0, AlertStatus.UNPAID),
        (False, 4, AlertStatus.UNPAID),
    ])
    def test_alert_status(self, is_paid, days_until, status):
        """Test alert status derivation."""
        alert = RecurringAlert(
            id="rec-1",
            description="Aluguel",
            amount_cents=1000,
            recurrence_type=RecurrenceType.MONTHLY,
            next_date=date(2024, 5, 10),
            days_until=days_until,
            is_paid=is_paid,
        )
        assert alert.status == status

    def test_parse_report_counts(self):
        """Test ParseReport error counting."""
        report = ParseReport(
            records=[],
            total_rows=2,
            issues=[
                ValidationIssue(field="date", issue_type="missing", message="x", severity="error"),
                ValidationIssue(field="interval_days", issue_type="custom_interval_missing",
                                message="y", severity="warning"),
            ],
        )
        assert report.skipped_count == 2
        assert report.error_count == 1
        assert report.has_errors is True

    def test_validation_issue_severity_pattern(self):
        """Test issue severity is restricted."""
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
