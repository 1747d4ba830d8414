"""
Recurring Expense Alerts

Builds the rows of the recurring expenses list: when each expense is next
due, how many days are left, and whether a payment for it was already seen
among the month's transactions.
"""

from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from bizfin.classification.classifier import descriptions_match
from bizfin.logger import get_logger
from bizfin.models.recurring import RecurringExpense, Transaction
from bizfin.models.reports import AlertStatus, AlertStatusFilter, RecurringAlert
from bizfin.recurrence.occurrence import next_occurrence
from bizfin.reports.policy import DEFAULT_REPORT_POLICY, ReportPolicy
from bizfin.utils.dates import DateLike, as_calendar_day
from bizfin.utils.money import format_cents_brl

logger = get_logger(__name__)


def find_payment(
    expense: RecurringExpense,
    due_date: date,
    transactions: Iterable[Transaction],
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
) -> Optional[Transaction]:
    """
    First expense transaction that looks like the payment of this occurrence.

    It must fall within the paid window around due_date, share a description
    (containment either way) and be within the amount tolerance.
    """
    window_start = due_date - timedelta(days=policy.paid_window_before_days)
    window_end = due_date + timedelta(days=policy.paid_window_after_days)

    for tx in transactions:
        if not tx.is_expense:
            continue
        if tx.date < window_start or tx.date > window_end:
            continue
        if not descriptions_match(tx.description, expense.description):
            continue
        if policy.matching.amount_matches(tx.amount_cents, expense.amount_cents):
            return tx
    return None


def build_recurring_alerts(
    recurring: Iterable[RecurringExpense],
    transactions: Sequence[Transaction],
    today: DateLike,
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
) -> list[RecurringAlert]:
    """
    One alert per recurring expense that still has an occurrence.

    Expenses without a fixed due date and series that already ended are
    left out. Rows come back sorted by next_date.
    """
    today = as_calendar_day(today)
    alerts: list[RecurringAlert] = []

    for expense in recurring:
        next_date = next_occurrence(expense, today)
        if next_date is None:
            continue

        payment = find_payment(expense, next_date, transactions, policy)

        alerts.append(RecurringAlert(
            id=expense.id,
            description=expense.description,
            category=expense.category,
            amount_cents=expense.amount_cents,
            recurrence_type=expense.recurrence_type,
            next_date=next_date,
            days_until=(next_date - today).days,
            is_paid=payment is not None,
            paid_transaction_date=payment.date if payment else None,
        ))

    alerts.sort(key=lambda a: a.next_date)

    logger.debug(
        "recurring_alerts_built",
        alert_count=len(alerts),
        overdue_count=sum(1 for a in alerts if a.status == AlertStatus.OVERDUE),
    )
    return alerts


def filter_alerts(
    alerts: Iterable[RecurringAlert],
    status_filter: AlertStatusFilter = AlertStatusFilter.ALL,
) -> list[RecurringAlert]:
    """Apply one of the list filters (all / paid / unpaid / overdue)."""
    if status_filter == AlertStatusFilter.ALL:
        return list(alerts)
    wanted = AlertStatus(status_filter.value)
    return [a for a in alerts if a.status == wanted]


def get_user_friendly_summary(alerts: Sequence[RecurringAlert]) -> str:
    """
    Short text summary of the alert list.

    This is what we show in notifications and on the dashboard card.
    """
    if not alerts:
        return "Nenhuma despesa recorrente cadastrada."

    overdue = [a for a in alerts if a.status == AlertStatus.OVERDUE]
    unpaid = [a for a in alerts if a.status == AlertStatus.UNPAID]

    if not overdue and not unpaid:
        return "✅ Todas as despesas recorrentes deste período estão pagas."

    lines = []
    if overdue:
        total = sum(a.amount_cents for a in overdue)
        lines.append(f"⚠️ {len(overdue)} vencida(s), {format_cents_brl(total)}:")
        for a in overdue:
            lines.append(f"   • {a.description} ({a.next_date:%d/%m})")
    if unpaid:
        total = sum(a.amount_cents for a in unpaid)
        lines.append(f"📅 {len(unpaid)} a pagar, {format_cents_brl(total)}:")
        for a in unpaid:
            lines.append(f"   • {a.description} ({a.next_date:%d/%m})")
    return "\n".join(lines)
