"""Trade filter criteria model."""

from datetime import date as date_type
from datetime import timedelta
from typing import Literal, Optional

from pydantic import BaseModel, Field

# Calendar periods, counted back from a reference day. Weeks start on Sunday.
PERIODS = (
    "all",
    "this-week",
    "last-week",
    "this-month",
    "last-month",
    "this-quarter",
    "last-quarter",
)


def _month_start(year: int, month: int) -> date_type:
    # month may run below 1 when stepping back from January
    while month < 1:
        month += 12
        year -= 1
    return date_type(year, month, 1)


def period_window(
    period: Optional[str], today: date_type
) -> tuple[Optional[date_type], Optional[date_type]]:
    """Inclusive (start, end) entry-date window for a period.

    Calendar periods end on ``today`` for the current week, month or
    quarter, and on the last day of the previous one otherwise. The
    ``<N>d`` form keeps everything from N days before ``today`` onward.
    ``all`` and None are unbounded.
    """
    if not period or period == "all":
        return None, None

    if period.endswith("d") and period[:-1].isdigit():
        return today - timedelta(days=int(period[:-1])), None

    if period in ("this-week", "last-week"):
        week_start = today - timedelta(days=(today.weekday() + 1) % 7)
        if period == "this-week":
            return week_start, today
        return week_start - timedelta(days=7), week_start - timedelta(days=1)

    if period in ("this-month", "last-month"):
        month_start = _month_start(today.year, today.month)
        if period == "this-month":
            return month_start, today
        return _month_start(today.year, today.month - 1), month_start - timedelta(days=1)

    if period in ("this-quarter", "last-quarter"):
        first_month = (today.month - 1) // 3 * 3 + 1
        quarter_start = _month_start(today.year, first_month)
        if period == "this-quarter":
            return quarter_start, today
        return _month_start(today.year, first_month - 3), quarter_start - timedelta(days=1)

    raise ValueError(f"Unknown period: {period}")


class TradeFilters(BaseModel):
    """Declarative trade filter criteria.

    Every field is optional. An unset field places no restriction on
    the result; all set fields must match.
    """

    # Basic filters
    period: Optional[str] = Field(
        default=None,
        pattern=r"^(all|(this|last)-(week|month|quarter)|\d+d)$",
        description="Calendar period such as 'this-week' or 'last-month', a '30d' lookback, or 'all'",
    )
    date_from: Optional[date_type] = Field(default=None, description="Earliest entry date (inclusive)")
    date_to: Optional[date_type] = Field(default=None, description="Latest entry date (inclusive)")
    symbol: Optional[str] = Field(default=None, description="Exact symbol")
    setup: Optional[str] = Field(default=None, description="Exact setup label")
    tag: Optional[str] = Field(default=None, description="Required tag")

    # Advanced filters
    search_query: Optional[str] = Field(default=None, description="Text search over symbol, setup, notes and tags")
    symbols: tuple[str, ...] = Field(default=(), description="Any of these symbols")
    setups: tuple[str, ...] = Field(default=(), description="Any of these setups")
    tags: tuple[str, ...] = Field(default=(), description="Any of these tags")
    outcome: Optional[Literal["wins", "losses", "breakeven"]] = Field(default=None, description="Trade outcome")
    status: Optional[Literal["all", "open", "closed"]] = Field(default=None, description="Open/closed status")
    direction: Optional[Literal["long", "short"]] = Field(default=None, description="Trade direction")
    pnl_min: Optional[float] = Field(default=None, description="Minimum P&L")
    pnl_max: Optional[float] = Field(default=None, description="Maximum P&L")
    rr_min: Optional[float] = Field(default=None, description="Minimum R multiple")
    rr_max: Optional[float] = Field(default=None, description="Maximum R multiple")
    rule_breaking: bool = Field(default=False, description="Only days the trading plan was not followed")
    has_notes: bool = Field(default=False, description="Only trades with notes")
    has_tags: bool = Field(default=False, description="Only trades with tags")
    has_screenshots: bool = Field(default=False, description="Only trades with screenshots")

    model_config = {"frozen": True}

    def period_window(self, today: date_type) -> tuple[Optional[date_type], Optional[date_type]]:
        """Entry-date window of the period filter relative to today."""
        return period_window(self.period, today)
