"""Cumulative and per-period series over closed trades.

Every function recomputes from its input; nothing is cached between
calls.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Sequence, TypeVar, Union

from tradestats.formatting import DisplayUnit
from tradestats.models import ClosedTrade, PeriodStats, SeriesPoint, Trade

T = TypeVar("T")

TradeLike = Union[Trade, ClosedTrade]


def closed_trades(trades: Iterable[TradeLike]) -> list[ClosedTrade]:
    """Normalize trades, dropping any that are still open."""
    result = []
    for trade in trades:
        if isinstance(trade, ClosedTrade):
            result.append(trade)
            continue
        closed = trade.to_closed()
        if closed is not None:
            result.append(closed)
    return result


def trade_value(trade: ClosedTrade, unit: DisplayUnit) -> float:
    """P&L or R of a closed trade, depending on the unit."""
    if DisplayUnit(unit) is DisplayUnit.RISK_MULTIPLE:
        return trade.rr
    return trade.pnl


def daily_totals(
    trades: Iterable[TradeLike],
    unit: DisplayUnit = DisplayUnit.CURRENCY,
) -> dict[date, float]:
    """Sum closed trades per effective date.

    Returns:
        Mapping of effective date to the day's total, in ascending date
        order.
    """
    totals: dict[date, float] = defaultdict(float)
    for trade in closed_trades(trades):
        totals[trade.effective_date] += trade_value(trade, unit)
    return dict(sorted(totals.items()))


def _prefix_sum(totals: dict[date, float]) -> list[SeriesPoint]:
    points = []
    running = 0.0
    for day, value in totals.items():
        running += value
        points.append(SeriesPoint(date=day, value=running))
    return points


def cumulative_series(
    trades: Iterable[TradeLike],
    unit: DisplayUnit = DisplayUnit.CURRENCY,
) -> list[SeriesPoint]:
    """Build the cumulative daily series by effective date.

    Args:
        trades: Trades to aggregate. Open trades are ignored.
        unit: Currency P&L or R multiple.

    Returns:
        One point per trading day, ascending, holding the running total
        through that day.
    """
    return _prefix_sum(daily_totals(trades, unit))


def monthly_series(
    trades: Iterable[TradeLike],
    unit: DisplayUnit = DisplayUnit.CURRENCY,
) -> list[SeriesPoint]:
    """Cumulative series grouped by calendar month.

    Each point is dated on the first day of its month.
    """
    totals: dict[date, float] = defaultdict(float)
    for day, value in daily_totals(trades, unit).items():
        totals[day.replace(day=1)] += value
    return _prefix_sum(dict(sorted(totals.items())))


def monthly_performance(trades: Iterable[TradeLike]) -> list[PeriodStats]:
    """Per-month trade count, P&L, R and win rate, oldest month first."""
    buckets: dict[str, dict] = defaultdict(lambda: {"trades": 0, "pnl": 0.0, "rr": 0.0, "wins": 0})
    for trade in closed_trades(trades):
        bucket = buckets[trade.effective_date.strftime("%Y-%m")]
        bucket["trades"] += 1
        bucket["pnl"] += trade.pnl
        bucket["rr"] += trade.rr
        if trade.pnl > 0:
            bucket["wins"] += 1

    return [
        PeriodStats(
            period=period,
            win_rate=data["wins"] / data["trades"] * 100,
            **data,
        )
        for period, data in sorted(buckets.items())
    ]


def recent_periods(items: Sequence[T], count: int) -> list[T]:
    """The last ``count`` items of an ascending series."""
    if count <= 0:
        return []
    return list(items[-count:])
