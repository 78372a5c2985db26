"""Performance analytics for TradeStats.

This package provides trade filtering, cumulative series, drawdown and
streak analysis, the aggregate statistics engine, growth comparisons
and personal records.
"""

from tradestats.analytics.filters import (
    available_setups,
    available_symbols,
    available_tags,
    filter_trades,
)
from tradestats.analytics.series import (
    closed_trades,
    cumulative_series,
    daily_totals,
    monthly_performance,
    monthly_series,
    recent_periods,
)
from tradestats.analytics.drawdown import deepest_episode, drawdown_episodes, max_drawdown
from tradestats.analytics.streaks import average_recovery_days, trade_streaks
from tradestats.analytics.statistics import (
    calculate_statistics,
    performance_by_day,
    performance_by_setup,
)
from tradestats.analytics.journal import daily_data, journal_streaks
from tradestats.analytics.growth import growth_comparison
from tradestats.analytics.bests import personal_bests

__all__ = [
    # Filtering
    "filter_trades",
    "available_symbols",
    "available_setups",
    "available_tags",
    # Series
    "closed_trades",
    "cumulative_series",
    "daily_totals",
    "monthly_series",
    "monthly_performance",
    "recent_periods",
    # Drawdown and streaks
    "drawdown_episodes",
    "deepest_episode",
    "max_drawdown",
    "trade_streaks",
    "average_recovery_days",
    # Statistics
    "calculate_statistics",
    "performance_by_day",
    "performance_by_setup",
    # Journal
    "daily_data",
    "journal_streaks",
    # Progress
    "growth_comparison",
    "personal_bests",
]
