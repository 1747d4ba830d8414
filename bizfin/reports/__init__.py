"""Recurring expense alerts and payables summary."""

from bizfin.reports.alerts import (
    build_recurring_alerts,
    filter_alerts,
    find_payment,
    get_user_friendly_summary,
)
from bizfin.reports.payables import (
    is_already_paid,
    payment_tag,
    summarize_recurring_payables,
)
from bizfin.reports.policy import DEFAULT_REPORT_POLICY, ReportPolicy

__all__ = [
    "DEFAULT_REPORT_POLICY",
    "ReportPolicy",
    "build_recurring_alerts",
    "filter_alerts",
    "find_payment",
    "get_user_friendly_summary",
    "is_already_paid",
    "payment_tag",
    "summarize_recurring_payables",
]
