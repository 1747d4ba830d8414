"""
Recurring Payables Summary

The recurring-expense share of the "to pay" card: what is still open this
month, what is late, what falls due this week, broken down by category and
by day.

An occurrence counts as already paid when the month's transactions contain:
1. An expense tagged recurring_expense:<id>:<key> by the app when it was paid
   (key is YYYY-MM for monthly expenses, the due date otherwise), or
2. An expense with the exact same description, an amount less than
   paid_amount_slack_cents away, in the month of the occurrence.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Sequence

from bizfin.logger import get_logger
from bizfin.models.recurring import RecurrenceType, RecurringExpense, Transaction
from bizfin.models.reports import CategoryTotal, DayTotal, PayablesSummary
from bizfin.recurrence.occurrence import next_occurrence
from bizfin.reports.policy import DEFAULT_REPORT_POLICY, ReportPolicy
from bizfin.utils.dates import (
    DateLike,
    as_calendar_day,
    end_of_month,
    format_iso_date,
    format_month,
    same_month,
)

logger = get_logger(__name__)

PAYMENT_TAG_PREFIX = "recurring_expense"


def payment_key(expense: RecurringExpense, occurrence: date) -> str:
    """Monthly expenses are paid once per month; the others once per due date."""
    if expense.recurrence_type == RecurrenceType.MONTHLY:
        return format_month(occurrence)
    return format_iso_date(occurrence)


def payment_tag(expense: RecurringExpense, occurrence: date) -> str:
    """Tag the app writes on the transaction created when paying an occurrence."""
    return f"{PAYMENT_TAG_PREFIX}:{expense.id}:{payment_key(expense, occurrence)}"


def is_already_paid(
    expense: RecurringExpense,
    occurrence: date,
    month_transactions: Iterable[Transaction],
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
) -> bool:
    tag = payment_tag(expense, occurrence)
    for tx in month_transactions:
        if not tx.is_expense:
            continue
        if tx.payment_tag == tag:
            return True
        if (
            tx.description == expense.description
            and abs(tx.amount_cents - expense.amount_cents) < policy.paid_amount_slack_cents
            and same_month(tx.date, occurrence)
        ):
            return True
    return False


def summarize_recurring_payables(
    recurring: Iterable[RecurringExpense],
    month_transactions: Sequence[Transaction],
    today: DateLike,
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
) -> PayablesSummary:
    """
    Aggregate open recurring expenses up to the end of today's month.

    Variable-amount expenses (amount_cents == 0) and expenses without a
    fixed due date are skipped: there is no amount or date to report.
    """
    today = as_calendar_day(today)
    month_end = end_of_month(today)
    week_end = today + timedelta(days=policy.due_soon_days)
    by_day_end = today + timedelta(days=policy.by_day_horizon_days)

    total = overdue = due_this_week = due_this_month = 0
    categories: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    days: dict[date, int] = defaultdict(int)

    for expense in recurring:
        if expense.amount_cents <= 0 or not expense.is_scheduled:
            continue

        occurrence = next_occurrence(expense, today)
        if occurrence is None or occurrence > month_end:
            continue

        if is_already_paid(expense, occurrence, month_transactions, policy):
            continue

        amount = expense.amount_cents
        is_overdue = occurrence < today
        total += amount

        if is_overdue:
            overdue += amount
        elif occurrence <= week_end:
            due_this_week += amount

        due_this_month += amount

        bucket = categories[expense.category or policy.default_category]
        bucket[0] += amount
        if is_overdue:
            bucket[1] += amount

        if today <= occurrence <= by_day_end:
            days[occurrence] += amount

    summary = PayablesSummary(
        total_cents=total,
        overdue_cents=overdue,
        due_this_week_cents=due_this_week,
        due_this_month_cents=due_this_month,
        from_recurring_cents=total,
        by_category=sorted(
            (
                CategoryTotal(category=name, total_cents=t, overdue_cents=o)
                for name, (t, o) in categories.items()
            ),
            key=lambda c: c.total_cents,
            reverse=True,
        ),
        by_day=[
            DayTotal(date=d, amount_cents=amount)
            for d, amount in sorted(days.items())
        ],
    )

    logger.debug(
        "recurring_payables_summarized",
        total_cents=summary.total_cents,
        overdue_cents=summary.overdue_cents,
        category_count=len(summary.by_category),
    )
    return summary
