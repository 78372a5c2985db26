"""Trading performance statistics.

Computes the full :class:`Statistics` snapshot from a list of trades.
Open trades are dropped here even if the caller already filtered them,
so legacy records with a stale status are handled in one place.
"""

import logging
from collections import defaultdict
from typing import Iterable, Mapping

from tradestats.analytics.drawdown import max_drawdown
from tradestats.analytics.series import TradeLike, closed_trades, cumulative_series, daily_totals
from tradestats.analytics.streaks import average_recovery_days, trade_streaks
from tradestats.formatting import DisplayUnit
from tradestats.models import WEEKDAYS, BreakdownStats, ClosedTrade, Statistics

logger = logging.getLogger(__name__)


def _profit_factor(gross_profit: float, gross_loss: float) -> float:
    """Gross profit over gross loss.

    Infinite when there are profits but no losses, 0 when there are
    neither.
    """
    if gross_loss > 0:
        return gross_profit / gross_loss
    return float("inf") if gross_profit > 0 else 0.0


def _mean(total: float, count: int) -> float:
    return total / count if count else 0.0


def _breakdown(buckets: Mapping[str, dict]) -> dict[str, BreakdownStats]:
    return {
        key: BreakdownStats(
            win_rate=_mean(data["wins"], data["trades"]) * 100,
            **data,
        )
        for key, data in buckets.items()
    }


def _new_bucket() -> dict:
    return {"trades": 0, "pnl": 0.0, "rr": 0.0, "wins": 0}


def _add_to_bucket(bucket: dict, trade: ClosedTrade) -> None:
    bucket["trades"] += 1
    bucket["pnl"] += trade.pnl
    bucket["rr"] += trade.rr
    if trade.pnl > 0:
        bucket["wins"] += 1


def performance_by_day(trades: Iterable[ClosedTrade]) -> dict[str, BreakdownStats]:
    """Breakdown by weekday of the effective date, Monday to Friday.

    All five weekdays are always present. Weekend trades are not
    counted.
    """
    buckets = {day: _new_bucket() for day in WEEKDAYS}
    for trade in trades:
        weekday = trade.effective_date.weekday()
        if weekday < len(WEEKDAYS):
            _add_to_bucket(buckets[WEEKDAYS[weekday]], trade)
    return _breakdown(buckets)


def performance_by_setup(trades: Iterable[ClosedTrade]) -> dict[str, BreakdownStats]:
    """Breakdown by setup label. Trades without a setup are skipped."""
    buckets: dict[str, dict] = defaultdict(_new_bucket)
    for trade in trades:
        if trade.setup:
            _add_to_bucket(buckets[trade.setup], trade)
    return _breakdown(buckets)


def calculate_statistics(trades: Iterable[TradeLike]) -> Statistics:
    """Calculate performance statistics for a set of trades.

    Args:
        trades: Trades to analyze. Open trades are ignored.

    Returns:
        Statistics snapshot. An input without closed trades yields
        ``Statistics.empty()``.
    """
    trades = list(trades)
    closed = closed_trades(trades)
    logger.debug("Calculating statistics: %d closed of %d trades", len(closed), len(trades))

    if not closed:
        return Statistics.empty()

    winners = [t for t in closed if t.pnl > 0]
    losers = [t for t in closed if t.pnl < 0]
    total = len(closed)

    total_pnl = sum(t.pnl for t in closed)
    total_rr = sum(t.rr for t in closed)
    gross_profit = sum(t.pnl for t in winners)
    gross_loss = abs(sum(t.pnl for t in losers))
    gross_profit_rr = sum(t.rr for t in winners)
    gross_loss_rr = abs(sum(t.rr for t in losers))

    daily_pnl = daily_totals(closed, DisplayUnit.CURRENCY)
    daily_rr = daily_totals(closed, DisplayUnit.RISK_MULTIPLE)
    trading_days = len(daily_pnl)

    streaks = trade_streaks(closed)

    drawdown, drawdown_days = max_drawdown(cumulative_series(closed, DisplayUnit.CURRENCY))
    drawdown_rr, _ = max_drawdown(cumulative_series(closed, DisplayUnit.RISK_MULTIPLE))

    return Statistics(
        total_trades=total,
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_rate=len(winners) / total * 100,
        total_pnl=total_pnl,
        total_rr=total_rr,
        avg_win=_mean(gross_profit, len(winners)),
        avg_win_rr=_mean(gross_profit_rr, len(winners)),
        avg_loss=_mean(gross_loss, len(losers)),
        avg_loss_rr=_mean(gross_loss_rr, len(losers)),
        avg_rr=total_rr / total,
        best_rr=max(t.rr for t in closed),
        largest_win=max((t.pnl for t in winners), default=0.0),
        largest_win_rr=max((t.rr for t in winners), default=0.0),
        largest_loss=min((t.pnl for t in losers), default=0.0),
        largest_loss_rr=min((t.rr for t in losers), default=0.0),
        profit_factor=_profit_factor(gross_profit, gross_loss),
        profit_factor_rr=_profit_factor(gross_profit_rr, gross_loss_rr),
        expectancy=total_pnl / total,
        expectancy_rr=total_rr / total,
        avg_daily_pnl=total_pnl / trading_days,
        avg_daily_rr=total_rr / trading_days,
        best_day=max(daily_pnl.values()),
        best_day_rr=max(daily_rr.values()),
        worst_day=min(daily_pnl.values()),
        worst_day_rr=min(daily_rr.values()),
        current_streak=streaks.current,
        longest_win_streak=streaks.longest_win,
        longest_lose_streak=streaks.longest_loss,
        max_drawdown=drawdown,
        max_drawdown_rr=drawdown_rr,
        max_drawdown_duration=drawdown_days,
        recovery_time=average_recovery_days(closed),
        performance_by_day=performance_by_day(closed),
        performance_by_setup=performance_by_setup(closed),
    )
