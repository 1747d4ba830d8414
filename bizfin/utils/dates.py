"""
Calendar-day helpers.

Everything in bizfin compares dates by calendar day. A datetime handed in
by a caller is reduced to its date, which keeps timezone offsets and DST
changes from moving a comparison across a day boundary.
"""

import calendar
from datetime import date, datetime
from typing import Optional, Union

ISO_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

DateLike = Union[date, datetime]


def as_calendar_day(value: DateLike) -> date:
    """Drop the time-of-day component, if any."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_iso_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string.

    Empty values give None; date/datetime objects pass through as calendar days.
    A full ISO timestamp is accepted and truncated to its date part.
    Raises ValueError on anything else.
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return as_calendar_day(value)
    text = value.strip()
    if not text:
        return None
    return datetime.strptime(text[:10], ISO_FORMAT).date()


def format_iso_date(d: date) -> str:
    return d.strftime(ISO_FORMAT)


def format_month(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    return min(day, days_in_month(year, month))


def add_years(d: date, n: int) -> date:
    """Add n calendar years, clamping Feb 29 to Feb 28 in common years."""
    year = d.year + n
    return d.replace(year=year, day=clamp_day_to_month(year, d.month, d.day))


def end_of_month(d: date) -> date:
    return d.replace(day=days_in_month(d.year, d.month))


def same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)
