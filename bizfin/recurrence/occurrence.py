"""
Occurrence Calculation

Works out when a recurring expense is next due.

IMPORTANT: monthly expenses resolve to THIS month's due date even when it
has already passed. Screens rely on that to show a monthly expense as
overdue within its month instead of silently rolling it to next month.
Callers that want the next future date must roll forward themselves.
"""

from datetime import date, timedelta
from typing import Optional

from bizfin.models.recurring import RecurrenceType, RecurringExpense
from bizfin.utils.dates import DateLike, add_years, as_calendar_day, clamp_day_to_month

FIXED_STEP_DAYS = {
    RecurrenceType.WEEKLY: 7,
    RecurrenceType.BIWEEKLY: 14,
}


def step_days_for(expense: RecurringExpense) -> Optional[int]:
    """Step size of a fixed-interval recurrence, or None if it does not step."""
    if expense.recurrence_type in FIXED_STEP_DAYS:
        return FIXED_STEP_DAYS[expense.recurrence_type]
    if expense.recurrence_type == RecurrenceType.CUSTOM and expense.has_valid_interval:
        return expense.interval_days
    return None


def _monthly_candidate(anchor: date, reference: date) -> date:
    if (reference.year, reference.month) <= (anchor.year, anchor.month):
        return anchor
    day = clamp_day_to_month(reference.year, reference.month, anchor.day)
    return date(reference.year, reference.month, day)


def _annual_candidate(anchor: date, reference: date) -> date:
    if reference <= anchor:
        return anchor
    # Each year is computed from the anchor so a Feb 29 anchor comes back
    # on Feb 29 in leap years instead of drifting.
    years = reference.year - anchor.year
    candidate = add_years(anchor, years)
    if candidate < reference:
        candidate = add_years(anchor, years + 1)
    return candidate


def _stepped_candidate(anchor: date, reference: date, step: Optional[int]) -> date:
    if step is None or reference <= anchor:
        return anchor
    steps = -(-(reference - anchor).days // step)
    return anchor + timedelta(days=steps * step)


def next_occurrence(
    expense: RecurringExpense,
    reference_date: DateLike,
) -> Optional[date]:
    """
    Next due date of a recurring expense relative to reference_date.

    Args:
        expense: The recurring expense definition
        reference_date: Usually today; datetimes are reduced to their date

    Returns:
        The due date, or None when the expense has no fixed due date or
        the series ended (the computed date falls after end_date).
    """
    anchor = expense.start_date
    if anchor is None:
        return None

    reference = as_calendar_day(reference_date)

    if expense.recurrence_type == RecurrenceType.MONTHLY:
        candidate = _monthly_candidate(anchor, reference)
    elif expense.recurrence_type == RecurrenceType.ANNUAL:
        candidate = _annual_candidate(anchor, reference)
    else:
        candidate = _stepped_candidate(anchor, reference, step_days_for(expense))

    if expense.end_date is not None and candidate > expense.end_date:
        return None
    return candidate
