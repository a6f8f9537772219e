"""Salary text parsing and dollar rounding helpers."""

import math
import re
from typing import Optional

_STRIP_CHARS = re.compile(r"[$,\s]")
_LEADING_INT = re.compile(r"^[+-]?\d+")


def round_to_dollar(amount: float) -> int:
    """Round to nearest dollar (0.50+ rounds away from zero)."""
    if amount >= 0:
        return int(math.floor(amount + 0.5))
    return -int(math.floor(-amount + 0.5))


def clamp_salary(amount) -> float:
    """Salary usable in calculations: None, NaN, infinite and negative amounts count as 0."""
    if amount is None or not math.isfinite(amount) or amount < 0:
        return 0
    return amount


def parse_salary(text) -> Optional[int]:
    """Sanitize raw salary input into a non-negative whole-dollar amount.

    Currency symbols, commas and whitespace are removed and the leading
    integer part is used, so "$108,000.50" parses as 108000.

    Returns:
        The salary, or None for empty, unparseable or negative input
    """
    if text is None:
        return None
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        if not math.isfinite(text) or text < 0:
            return None
        return int(text)

    cleaned = _STRIP_CHARS.sub("", str(text))
    match = _LEADING_INT.match(cleaned)
    if not match:
        return None
    value = int(match.group(0))
    return value if value >= 0 else None


def format_salary(amount: Optional[float]) -> str:
    """Format a dollar amount for display, e.g. $108,000."""
    if amount is None:
        return "-"
    return f"${round_to_dollar(amount):,}"
