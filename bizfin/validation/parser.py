"""
Record Parsing Boundary

DESIGN DECISION: Raw rows from the backend are loose. Fields can be missing
or null, dates are ISO strings, "no due date" is encoded as a sentinel date.
All of that is resolved HERE, once, so the occurrence and classification
code only ever sees the strict models.

Normalization rules:
- Null description -> "" ; null amount -> 0
- start_date 9999-12-31 / 1900-01-01 -> Unscheduled
- ISO date strings (or full timestamps) -> calendar dates
- source_device is accepted as the legacy name of payment_tag

Two modes:
1. parse_recurring / parse_transaction: one row, raise InvalidRecordError
2. parse_many_*: a batch, skip bad rows and report them (never silently)
"""

from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from pydantic import ValidationError

from bizfin.logger import get_logger
from bizfin.models.issues import ParseReport, ValidationIssue, issue_from_error
from bizfin.models.recurring import (
    RecurrenceType,
    RecurringExpense,
    Scheduled,
    Transaction,
    Unscheduled,
)
from bizfin.utils.dates import parse_iso_date

logger = get_logger(__name__)

T = TypeVar("T")

UNSCHEDULED_SENTINELS = frozenset({date(9999, 12, 31), date(1900, 1, 1)})


class BizfinError(Exception):
    """Base error for bizfin."""
    pass


class InvalidRecordError(BizfinError):
    """A raw row could not be turned into a model."""

    def __init__(self, message: str, issues: Optional[list[ValidationIssue]] = None):
        super().__init__(message)
        self.issues = issues or []


class RecordParser:
    """
    Converts raw backend rows into RecurringExpense / Transaction models.

    Stateless; one instance can be shared.
    """

    def _parse_date_field(
        self,
        raw: Mapping[str, Any],
        field: str,
        issues: list[ValidationIssue],
    ) -> Optional[date]:
        value = raw.get(field)
        try:
            return parse_iso_date(value)
        except (AttributeError, TypeError, ValueError):
            issues.append(ValidationIssue(
                record_id=_record_id(raw),
                field=field,
                issue_type="invalid_format",
                message=f"Expected a YYYY-MM-DD date, got {value!r}",
                severity="error",
            ))
            return None

    def _validate(self, model: type[T], data: dict[str, Any], raw: Mapping[str, Any]) -> T:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            issues = [
                issue_from_error(err, record_id=_record_id(raw))
                for err in e.errors()
            ]
            raise InvalidRecordError(
                f"Invalid {model.__name__} row: {len(issues)} problem(s)",
                issues,
            ) from e

    def parse_recurring(self, raw: Mapping[str, Any]) -> RecurringExpense:
        """
        Parse one recurring expense row.

        Raises:
            InvalidRecordError: If required fields are missing or malformed
        """
        issues: list[ValidationIssue] = []

        start = self._parse_date_field(raw, "start_date", issues)
        end = self._parse_date_field(raw, "end_date", issues)

        if start is None and not issues:
            issues.append(ValidationIssue(
                record_id=_record_id(raw),
                field="start_date",
                issue_type="missing",
                message="Recurring expense has no start date",
                severity="error",
            ))

        if issues:
            raise InvalidRecordError("Invalid RecurringExpense row: bad dates", issues)

        if start in UNSCHEDULED_SENTINELS:
            due_rule: Any = Unscheduled()
        else:
            due_rule = Scheduled(anchor=start)

        recurrence_type = raw.get("recurrence_type")
        if isinstance(recurrence_type, str):
            recurrence_type = recurrence_type.strip().lower()

        category = raw.get("category")
        if isinstance(category, str) and not category.strip():
            category = None

        data = {
            "id": _record_id(raw),
            "description": raw.get("description") or "",
            "category": category,
            "amount_cents": raw.get("amount_cents") or 0,
            "recurrence_type": recurrence_type,
            "interval_days": raw.get("interval_days"),
            "due_rule": due_rule,
            "end_date": end,
        }
        expense = self._validate(RecurringExpense, data, raw)

        for issue in self.data_quality_issues(expense):
            logger.warning(
                issue.issue_type,
                record_id=expense.id,
                message=issue.message,
            )
        return expense

    def parse_transaction(self, raw: Mapping[str, Any]) -> Transaction:
        """
        Parse one transaction row.

        Raises:
            InvalidRecordError: If required fields are missing or malformed
        """
        issues: list[ValidationIssue] = []
        tx_date = self._parse_date_field(raw, "date", issues)
        if tx_date is None and not issues:
            issues.append(ValidationIssue(
                record_id=_record_id(raw),
                field="date",
                issue_type="missing",
                message="Transaction has no date",
                severity="error",
            ))
        if issues:
            raise InvalidRecordError("Invalid Transaction row: bad date", issues)

        tx_type = raw.get("type")
        if isinstance(tx_type, str):
            tx_type = tx_type.strip().lower()

        data = {
            "type": tx_type,
            "amount_cents": raw.get("amount_cents") or 0,
            "description": raw.get("description") or "",
            "date": tx_date,
            "payment_tag": raw.get("payment_tag") or raw.get("source_device") or None,
        }
        return self._validate(Transaction, data, raw)

    def data_quality_issues(self, expense: RecurringExpense) -> list[ValidationIssue]:
        """
        Warnings for rows that parse but probably carry an upstream bug.

        A custom recurrence without a positive interval never advances past
        its start date.
        """
        issues = []
        if (
            expense.recurrence_type == RecurrenceType.CUSTOM
            and expense.is_scheduled
            and not expense.has_valid_interval
        ):
            issues.append(ValidationIssue(
                record_id=expense.id,
                field="interval_days",
                issue_type="custom_interval_missing",
                message=(
                    f"Custom recurrence without a positive interval "
                    f"(interval_days={expense.interval_days}); it will stay on its start date"
                ),
                severity="warning",
            ))
        return issues

    def _parse_many(
        self,
        rows: Iterable[Mapping[str, Any]],
        parse_one: Callable[[Mapping[str, Any]], T],
        kind: str,
    ) -> ParseReport[T]:
        records: list[T] = []
        issues: list[ValidationIssue] = []
        total = 0

        for index, raw in enumerate(rows):
            total += 1
            try:
                record = parse_one(raw)
            except InvalidRecordError as e:
                for issue in e.issues:
                    issues.append(issue.model_copy(update={"record_index": index}))
                logger.warning(
                    "record_skipped",
                    kind=kind,
                    record_index=index,
                    record_id=_record_id(raw),
                    problems=[i.message for i in e.issues],
                )
                continue

            if isinstance(record, RecurringExpense):
                for issue in self.data_quality_issues(record):
                    issues.append(issue.model_copy(update={"record_index": index}))
            records.append(record)

        if total != len(records):
            logger.info(
                "records_parsed",
                kind=kind,
                total_rows=total,
                kept=len(records),
                skipped=total - len(records),
            )

        return ParseReport(records=records, issues=issues, total_rows=total)

    def parse_many_recurring(
        self,
        rows: Iterable[Mapping[str, Any]],
    ) -> ParseReport[RecurringExpense]:
        return self._parse_many(rows, self.parse_recurring, "recurring_expense")

    def parse_many_transactions(
        self,
        rows: Iterable[Mapping[str, Any]],
    ) -> ParseReport[Transaction]:
        return self._parse_many(rows, self.parse_transaction, "transaction")


def _record_id(raw: Mapping[str, Any]) -> Optional[str]:
    value = raw.get("id")
    return None if value is None else str(value)
