"""Period-over-period growth comparisons.

Compares the current month and quarter with the previous ones, and the
last 30 days with everything before them. Trades are bucketed by
effective date, like the monthly series.
"""

import logging
import math
from datetime import date, timedelta
from typing import Iterable, Optional

from tradestats.analytics.series import TradeLike, closed_trades
from tradestats.analytics.statistics import calculate_statistics
from tradestats.formatting import DisplayUnit
from tradestats.models import GrowthComparison, PeriodComparison, Statistics

logger = logging.getLogger(__name__)

RECENT_DAYS = 30


def _month_key(day: date) -> tuple[int, int]:
    return day.year, day.month


def _quarter_key(day: date) -> tuple[int, int]:
    return day.year, (day.month - 1) // 3 + 1


def _previous(key: tuple[int, int], periods_per_year: int) -> tuple[int, int]:
    year, index = key
    if index == 1:
        return year - 1, periods_per_year
    return year, index - 1


def _month_label(key: tuple[int, int]) -> str:
    return date(key[0], key[1], 1).strftime("%B %Y")


def _quarter_label(key: tuple[int, int]) -> str:
    return f"{key[0]} Q{key[1]}"


def compare(
    metric: str,
    current: float,
    previous: float,
    current_label: str = "",
    previous_label: str = "",
    higher_is_better: bool = True,
) -> PeriodComparison:
    """Compare one metric between two periods.

    The percentage change is relative to the magnitude of the previous
    value and is 0 when there is no finite, non-zero previous value.
    """
    if current == previous:
        change = 0.0
    else:
        change = current - previous

    change_percent = 0.0
    if previous != 0 and math.isfinite(previous) and math.isfinite(change):
        change_percent = change / abs(previous) * 100

    trend = "up" if change > 0 else "down" if change < 0 else "neutral"
    is_positive = trend == ("up" if higher_is_better else "down")

    return PeriodComparison(
        metric=metric,
        current=current,
        previous=previous,
        change=change,
        change_percent=change_percent,
        trend=trend,
        is_positive=is_positive,
        current_label=current_label,
        previous_label=previous_label,
    )


def _period_metrics(
    current: Statistics,
    previous: Statistics,
    unit: DisplayUnit,
    current_label: str,
    previous_label: str,
) -> list[PeriodComparison]:
    if unit is DisplayUnit.RISK_MULTIPLE:
        rows = [
            ("Total R", current.total_rr, previous.total_rr),
            ("Win Rate", current.win_rate, previous.win_rate),
            ("Avg R", current.avg_rr, previous.avg_rr),
        ]
    else:
        rows = [
            ("Total P&L", current.total_pnl, previous.total_pnl),
            ("Win Rate", current.win_rate, previous.win_rate),
            ("Avg Trade", current.expectancy, previous.expectancy),
        ]
    rows.append(("Total Trades", current.total_trades, previous.total_trades))
    return [compare(metric, cur, prev, current_label, previous_label) for metric, cur, prev in rows]


def _recent_metrics(recent: Statistics, historical: Statistics, unit: DisplayUnit) -> list[PeriodComparison]:
    if unit is DisplayUnit.RISK_MULTIPLE:
        rows = [
            ("Avg R", recent.avg_rr, historical.avg_rr),
            ("Win Rate", recent.win_rate, historical.win_rate),
            ("Profit Factor", recent.profit_factor_rr, historical.profit_factor_rr),
            ("Avg Win (R)", recent.avg_win_rr, historical.avg_win_rr),
        ]
    else:
        rows = [
            ("Avg Trade", recent.expectancy, historical.expectancy),
            ("Win Rate", recent.win_rate, historical.win_rate),
            ("Profit Factor", recent.profit_factor, historical.profit_factor),
            ("Avg Win", recent.avg_win, historical.avg_win),
        ]
    label = f"Last {RECENT_DAYS} days"
    return [compare(metric, cur, prev, label, "Historical") for metric, cur, prev in rows]


def _non_empty(comparisons: Iterable[PeriodComparison]) -> tuple[PeriodComparison, ...]:
    # A metric that is zero in both periods carries no information
    return tuple(c for c in comparisons if c.current != 0 or c.previous != 0)


def growth_comparison(
    trades: Iterable[TradeLike],
    unit: DisplayUnit = DisplayUnit.CURRENCY,
    today: Optional[date] = None,
) -> GrowthComparison:
    """Compare recent performance with earlier periods.

    Args:
        trades: Trades to analyze. Open trades are ignored.
        unit: Currency P&L or R multiple for the value metrics.
        today: Reference date. Defaults to today.

    Returns:
        GrowthComparison whose sections omit metrics that are zero in
        both of the compared periods.
    """
    unit = DisplayUnit(unit)
    today = today or date.today()
    closed = closed_trades(trades)

    month = _month_key(today)
    last_month = _previous(month, 12)
    quarter = _quarter_key(today)
    last_quarter = _previous(quarter, 4)
    recent_start = today - timedelta(days=RECENT_DAYS)

    logger.debug("Growth comparison over %d closed trades as of %s", len(closed), today)

    month_over_month = _period_metrics(
        calculate_statistics(t for t in closed if _month_key(t.effective_date) == month),
        calculate_statistics(t for t in closed if _month_key(t.effective_date) == last_month),
        unit,
        _month_label(month),
        _month_label(last_month),
    )
    quarter_over_quarter = _period_metrics(
        calculate_statistics(t for t in closed if _quarter_key(t.effective_date) == quarter),
        calculate_statistics(t for t in closed if _quarter_key(t.effective_date) == last_quarter),
        unit,
        _quarter_label(quarter),
        _quarter_label(last_quarter),
    )
    recent_vs_historical = _recent_metrics(
        calculate_statistics(t for t in closed if t.effective_date >= recent_start),
        calculate_statistics(t for t in closed if t.effective_date < recent_start),
        unit,
    )

    return GrowthComparison(
        month_over_month=_non_empty(month_over_month),
        quarter_over_quarter=_non_empty(quarter_over_quarter),
        recent_vs_historical=_non_empty(recent_vs_historical),
        current_period=_month_label(month),
        previous_period=_month_label(last_month),
    )
