"""Money helpers. Amounts are integer cents everywhere in bizfin."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

_NON_NUMERIC = re.compile(r"[^0-9,.\-]")
_DECIMAL_COMMA = re.compile(r",(\d{2})$")


def cents_to_decimal(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def format_cents_brl(cents: Optional[int]) -> str:
    """Format cents as Brazilian reais, e.g. 123456 -> 'R$ 1.234,56'."""
    value = cents_to_decimal(cents or 0)
    sign = "-" if value < 0 else ""
    # 1,234.56 -> 1.234,56
    text = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def parse_brl_to_cents(text: Optional[str]) -> int:
    """
    Parse user input like '1.234,56' or 'R$ 89,90' into cents.

    Dots are thousands separators and a trailing ',dd' is the decimal part.
    Unparseable input gives 0.
    """
    if not text:
        return 0
    cleaned = _NON_NUMERIC.sub("", text).replace(".", "")
    cleaned = _DECIMAL_COMMA.sub(r".\1", cleaned)
    if not cleaned:
        return 0
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return 0
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
