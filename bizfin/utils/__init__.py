"""Date and money helpers."""

from bizfin.utils.dates import (
    add_years,
    as_calendar_day,
    clamp_day_to_month,
    end_of_month,
    parse_iso_date,
)
from bizfin.utils.money import format_cents_brl, parse_brl_to_cents

__all__ = [
    "add_years",
    "as_calendar_day",
    "clamp_day_to_month",
    "end_of_month",
    "format_cents_brl",
    "parse_brl_to_cents",
    "parse_iso_date",
]
