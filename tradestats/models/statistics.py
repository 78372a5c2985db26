"""Statistics output models."""

from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field

from tradestats.models.journal import JournalEntry
from tradestats.models.trade import Trade


WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


class BreakdownStats(BaseModel):
    """Aggregate performance for one bucket of trades."""

    trades: int = Field(default=0, ge=0, description="Number of trades")
    pnl: float = Field(default=0.0, description="Total P&L")
    rr: float = Field(default=0.0, description="Total R")
    wins: int = Field(default=0, ge=0, description="Winning trades")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")

    model_config = {"frozen": True}


class PeriodStats(BreakdownStats):
    """Aggregate performance for one calendar period (YYYY-MM)."""

    period: str = Field(..., description="Period key, e.g. '2025-10'")


class SeriesPoint(BaseModel):
    """One point of a cumulative series."""

    date: date_type = Field(..., description="Point date")
    value: float = Field(..., description="Cumulative value")

    model_config = {"frozen": True}


class DrawdownEpisode(BaseModel):
    """A single decline from a cumulative peak."""

    peak_date: date_type = Field(..., description="Date the peak was set")
    trough_date: date_type = Field(..., description="Date of the lowest point")
    recovery_date: Optional[date_type] = Field(default=None, description="Date the peak was regained")
    peak: float = Field(..., description="Cumulative value at the peak")
    trough: float = Field(..., description="Cumulative value at the trough")

    model_config = {"frozen": True}

    @property
    def depth(self) -> float:
        return self.peak - self.trough

    @property
    def duration_days(self) -> int:
        """Calendar days from peak to trough."""
        return (self.trough_date - self.peak_date).days


class DailyData(BaseModel):
    """Trades and journal entry for one calendar day."""

    date: date_type = Field(..., description="Calendar day")
    trades: tuple[Trade, ...] = Field(default=(), description="Trades entered that day")
    journal_entry: Optional[JournalEntry] = Field(default=None, description="Journal entry for the day")
    total_pnl: float = Field(default=0.0, description="Sum of trade P&L")

    model_config = {"frozen": True}


class JournalStreaks(BaseModel):
    """Consecutive-day journaling and plan adherence streaks."""

    journal_streak: int = Field(default=0, ge=0)
    best_journal_streak: int = Field(default=0, ge=0)
    system_adherence_streak: int = Field(default=0, ge=0)
    best_system_adherence_streak: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class Statistics(BaseModel):
    """Aggregate performance snapshot for a set of closed trades.

    Valid only for the trades it was computed from; recompute on any
    change.
    """

    total_trades: int = Field(default=0, ge=0)
    winning_trades: int = Field(default=0, ge=0)
    losing_trades: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0, ge=0, le=100)

    total_pnl: float = 0.0
    total_rr: float = 0.0
    avg_win: float = 0.0
    avg_win_rr: float = 0.0
    avg_loss: float = 0.0
    avg_loss_rr: float = 0.0
    avg_rr: float = 0.0
    best_rr: float = 0.0
    largest_win: float = 0.0
    largest_win_rr: float = 0.0
    largest_loss: float = 0.0
    largest_loss_rr: float = 0.0

    profit_factor: float = 0.0
    profit_factor_rr: float = 0.0
    expectancy: float = 0.0
    expectancy_rr: float = 0.0

    avg_daily_pnl: float = 0.0
    avg_daily_rr: float = 0.0
    best_day: float = 0.0
    best_day_rr: float = 0.0
    worst_day: float = 0.0
    worst_day_rr: float = 0.0

    current_streak: int = 0
    longest_win_streak: int = Field(default=0, ge=0)
    longest_lose_streak: int = Field(default=0, ge=0)

    max_drawdown: float = Field(default=0.0, ge=0)
    max_drawdown_rr: float = Field(default=0.0, ge=0)
    max_drawdown_duration: int = Field(default=0, ge=0, description="Days from peak to deepest trough")
    recovery_time: float = Field(default=0.0, ge=0, description="Average days to recover a loss")

    performance_by_day: dict[str, BreakdownStats] = Field(default_factory=dict)
    performance_by_setup: dict[str, BreakdownStats] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @classmethod
    def empty(cls) -> "Statistics":
        """The canonical all-zero snapshot for an empty trade set."""
        return cls()


class PeriodComparison(BaseModel):
    """One metric compared between a current and a previous period."""

    metric: str = Field(..., description="Metric label, e.g. 'Win Rate'")
    current: float = Field(..., description="Value in the current period")
    previous: float = Field(..., description="Value in the previous period")
    change: float = Field(default=0.0, description="current - previous")
    change_percent: float = Field(default=0.0, description="Change relative to |previous|, 0 when previous is 0")
    trend: Literal["up", "down", "neutral"] = Field(default="neutral")
    is_positive: bool = Field(default=False, description="Whether the trend is an improvement")
    current_label: str = Field(default="", description="e.g. 'October 2025'")
    previous_label: str = Field(default="", description="e.g. 'September 2025'")

    model_config = {"frozen": True}


class GrowthComparison(BaseModel):
    """Month-over-month, quarter-over-quarter and recent-vs-historical comparisons."""

    month_over_month: tuple[PeriodComparison, ...] = ()
    quarter_over_quarter: tuple[PeriodComparison, ...] = ()
    recent_vs_historical: tuple[PeriodComparison, ...] = ()
    current_period: str = Field(default="", description="Current month label")
    previous_period: str = Field(default="", description="Previous month label")

    model_config = {"frozen": True}


class PersonalBest(BaseModel):
    """A record achievement such as the best day or the longest win streak."""

    key: str = Field(..., description="Stable identifier, e.g. 'best-day'")
    title: str = Field(..., description="Display title")
    description: str = Field(default="", description="Short context line")
    value: float = Field(..., description="Record value")
    date: Optional[date_type] = Field(default=None, description="Date the record was set")
    is_recent: bool = Field(default=False, description="Set within the last 30 days")
    category: Literal["performance", "consistency", "volume", "streak"] = Field(...)
    trade_ids: tuple[str, ...] = Field(default=(), description="Trades behind the record")

    model_config = {"frozen": True}
