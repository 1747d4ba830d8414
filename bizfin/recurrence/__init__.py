"""Recurring expense occurrence calculation."""

from bizfin.recurrence.occurrence import FIXED_STEP_DAYS, next_occurrence, step_days_for

__all__ = ["FIXED_STEP_DAYS", "next_occurrence", "step_days_for"]
