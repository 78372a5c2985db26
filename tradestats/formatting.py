"""Display formatting for currency and R-multiple values.

Formatting is display-only. Nothing here rounds stored values; callers
keep computing with the raw floats and format at the edge.
"""

import math
from enum import Enum
from typing import Optional


class DisplayUnit(str, Enum):
    """Unit in which metrics are displayed."""

    CURRENCY = "currency"
    RISK_MULTIPLE = "r"


def _sign(value: float, decimals: int) -> str:
    # Sign of the value as displayed, so -0.001 shows as +0.00
    return "+" if round(value, decimals) >= 0 else "-"


def format_currency(value: Optional[float], symbol: str = "") -> str:
    """Format a currency amount with an explicit sign.

    Args:
        value: Amount to format. None is shown as zero.
        symbol: Optional currency symbol placed after the sign.

    Returns:
        String such as '+268.00' or '-$101.00'.
    """
    value = value or 0.0
    return f"{_sign(value, 2)}{symbol}{abs(value):,.2f}"


def format_rr(value: Optional[float]) -> str:
    """Format an R multiple, e.g. '+2.7R' or '-1.0R'."""
    value = value or 0.0
    return f"{_sign(value, 1)}{abs(value):.1f}R"


def format_value(
    value: Optional[float],
    unit: DisplayUnit = DisplayUnit.CURRENCY,
    currency_symbol: str = "",
) -> str:
    """Format a metric in the requested display unit."""
    if DisplayUnit(unit) is DisplayUnit.RISK_MULTIPLE:
        return format_rr(value)
    return format_currency(value, currency_symbol)


def format_percentage(value: float, decimals: int = 1, signed: bool = False) -> str:
    """Format a percentage such as a win rate."""
    if signed:
        return f"{_sign(value, decimals)}{abs(value):.{decimals}f}%"
    return f"{value:.{decimals}f}%"


def format_profit_factor(value: float) -> str:
    """Format a profit factor, showing infinity as '∞'."""
    if math.isinf(value):
        return "∞"
    return f"{value:.2f}"
