"""Data models for TradeStats."""

from tradestats.models.trade import ClosedTrade, Trade
from tradestats.models.journal import JournalEntry, Mood, NewsEvent
from tradestats.models.filters import PERIODS, TradeFilters, period_window
from tradestats.models.statistics import (
    WEEKDAYS,
    BreakdownStats,
    DailyData,
    DrawdownEpisode,
    GrowthComparison,
    JournalStreaks,
    PeriodComparison,
    PeriodStats,
    PersonalBest,
    SeriesPoint,
    Statistics,
)

__all__ = [
    "Trade",
    "ClosedTrade",
    "JournalEntry",
    "Mood",
    "NewsEvent",
    "PERIODS",
    "TradeFilters",
    "period_window",
    "WEEKDAYS",
    "BreakdownStats",
    "DailyData",
    "DrawdownEpisode",
    "GrowthComparison",
    "JournalStreaks",
    "PeriodComparison",
    "PeriodStats",
    "PersonalBest",
    "SeriesPoint",
    "Statistics",
]
