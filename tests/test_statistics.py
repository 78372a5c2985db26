"""Property-based tests for the statistics engine.

**Feature: trading-statistics**
"""

import math
from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradestats.analytics import average_recovery_days, calculate_statistics
from tradestats.models import WEEKDAYS, Statistics, Trade


def trade_strategy():
    """Generate trades, mixing open, closed and legacy-shaped records."""
    return st.builds(
        Trade,
        id=st.uuids().map(str),
        date=st.dates(min_value=date(2024, 1, 1), max_value=date(2025, 12, 31)),
        symbol=st.sampled_from(["AAPL", "MSFT", "ES", "NQ"]),
        direction=st.sampled_from(["long", "short"]),
        entry_price=st.floats(min_value=1.0, max_value=500.0),
        exit_price=st.one_of(st.none(), st.just(0.0), st.floats(min_value=1.0, max_value=500.0)),
        pnl=st.one_of(
            st.just(0.0),
            st.integers(min_value=-1000, max_value=1000).map(float),
            st.floats(min_value=-1000.0, max_value=1000.0, allow_nan=False, allow_infinity=False).map(lambda x: round(x, 2)),
        ),
        rr=st.one_of(st.none(), st.floats(min_value=-5.0, max_value=5.0, allow_nan=False).map(lambda x: round(x, 2))),
        status=st.sampled_from([None, "open", "closed"]),
        exit_date=st.one_of(
            st.none(),
            st.dates(min_value=date(2024, 1, 1), max_value=date(2025, 12, 31)),
        ),
        setup=st.sampled_from(["", "Breakout", "Pullback", "Reversal"]),
        tags=st.lists(st.sampled_from(["A+", "mistake", "news"]), max_size=2, unique=True).map(tuple),
    )


def closed_trade(trade_date: str, pnl: float, rr=None, **kwargs) -> Trade:
    """Build a closed trade for example-based tests."""
    return Trade(
        id=kwargs.pop("id", f"{trade_date}-{pnl}"),
        date=date.fromisoformat(trade_date),
        symbol=kwargs.pop("symbol", "AAPL"),
        entry_price=100.0,
        exit_price=101.0,
        pnl=pnl,
        rr=rr,
        status="closed",
        **kwargs,
    )


def _all_numbers(stats: Statistics) -> list[float]:
    values = []
    for value in stats.model_dump().values():
        if isinstance(value, dict):
            for bucket in value.values():
                values.extend(v for v in bucket.values() if isinstance(v, (int, float)))
        elif isinstance(value, (int, float)):
            values.append(value)
    return values


class TestTradeCountPartition:
    """
    *For any* trade list, total trades equal winners plus losers plus
    breakeven trades.
    """

    @given(trades=st.lists(trade_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_total_is_partitioned(self, trades: list[Trade]):
        stats = calculate_statistics(trades)
        closed = [t for t in trades if t.is_closed]
        breakeven = sum(1 for t in closed if t.pnl == 0)

        assert stats.total_trades == len(closed)
        assert stats.total_trades == stats.winning_trades + stats.losing_trades + breakeven

    @given(trades=st.lists(trade_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_no_nan_anywhere(self, trades: list[Trade]):
        stats = calculate_statistics(trades)
        assert not any(math.isnan(v) for v in _all_numbers(stats))

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=40))
    @settings(max_examples=100)
    def test_win_rate_bounds(self, trades: list[Trade]):
        stats = calculate_statistics(trades)
        assert 0 <= stats.win_rate <= 100


class TestEmptyInput:
    """Empty or all-open input yields the canonical empty snapshot."""

    def test_empty_list(self):
        stats = calculate_statistics([])
        assert stats == Statistics.empty()
        assert stats.total_trades == 0
        assert stats.profit_factor == 0
        assert stats.performance_by_day == {}
        assert stats.performance_by_setup == {}
        assert not any(math.isnan(v) for v in _all_numbers(stats))

    def test_only_open_trades(self):
        trades = [
            Trade(id="1", date=date(2025, 10, 1), symbol="AAPL", pnl=50.0, status="open"),
            Trade(id="2", date=date(2025, 10, 2), symbol="AAPL", pnl=-20.0, exit_price=0.0),
        ]
        assert calculate_statistics(trades) == Statistics.empty()


class TestClosedPredicate:
    """The engine re-applies the closed-trade rule itself."""

    def test_status_closed_without_exit_price(self):
        trade = Trade(id="1", date=date(2025, 10, 1), symbol="ES", pnl=10.0, status="closed")
        assert calculate_statistics([trade]).total_trades == 1

    def test_legacy_exit_price_without_status(self):
        trade = Trade(id="1", date=date(2025, 10, 1), symbol="ES", pnl=10.0, exit_price=4500.0)
        assert calculate_statistics([trade]).total_trades == 1

    def test_exit_price_overrides_stale_open_status(self):
        trade = Trade(
            id="1", date=date(2025, 10, 1), symbol="ES", pnl=10.0,
            exit_price=4500.0, status="open",
        )
        assert calculate_statistics([trade]).total_trades == 1

    def test_zero_exit_price_is_open(self):
        trade = Trade(id="1", date=date(2025, 10, 1), symbol="ES", pnl=10.0, exit_price=0.0)
        assert calculate_statistics([trade]).total_trades == 0


class TestProfitFactor:
    """
    *For any* trade list, profit factor is infinite exactly when there
    are wins and no losses, and zero exactly when there are neither.
    """

    @given(trades=st.lists(trade_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_profit_factor_literals(self, trades: list[Trade]):
        stats = calculate_statistics(trades)
        closed = [t for t in trades if t.is_closed]
        gross_profit = sum(t.pnl for t in closed if t.pnl > 0)
        gross_loss = abs(sum(t.pnl for t in closed if t.pnl < 0))

        assert (stats.profit_factor == math.inf) == (gross_profit > 0 and gross_loss == 0)
        if gross_profit == 0 and gross_loss == 0:
            assert stats.profit_factor == 0

    def test_wins_only(self):
        stats = calculate_statistics([closed_trade("2025-10-01", 100.0, rr=2.0)])
        assert stats.profit_factor == math.inf
        assert stats.profit_factor_rr == math.inf

    def test_breakeven_only(self):
        stats = calculate_statistics([closed_trade("2025-10-01", 0.0)])
        assert stats.profit_factor == 0
        assert stats.profit_factor_rr == 0

    def test_ratio(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", 300.0, rr=3.0),
            closed_trade("2025-10-02", -100.0, rr=-1.0),
            closed_trade("2025-10-03", -50.0, rr=-1.0),
        ])
        assert stats.profit_factor == pytest.approx(2.0)
        assert stats.profit_factor_rr == pytest.approx(1.5)

    def test_rr_factor_independent_of_pnl(self):
        # Winning trade with no R recorded leaves the R gross profit at zero
        stats = calculate_statistics([
            closed_trade("2025-10-01", 300.0),
            closed_trade("2025-10-02", -100.0, rr=-1.0),
        ])
        assert stats.profit_factor == pytest.approx(3.0)
        assert stats.profit_factor_rr == 0


class TestWeekdayBreakdown:
    """
    *For any* trade list, weekday bucket counts add up to the closed
    trades whose effective date falls Monday to Friday.
    """

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=40))
    @settings(max_examples=100)
    def test_weekday_counts(self, trades: list[Trade]):
        stats = calculate_statistics(trades)
        closed = [t for t in trades if t.is_closed]
        weekday_trades = sum(1 for t in closed if t.effective_date.weekday() < 5)

        if closed:
            assert list(stats.performance_by_day) == list(WEEKDAYS)
        assert sum(b.trades for b in stats.performance_by_day.values()) == weekday_trades

    def test_weekend_trade_counted_in_total_only(self):
        # 2025-10-04 is a Saturday
        stats = calculate_statistics([
            closed_trade("2025-10-03", 50.0),
            closed_trade("2025-10-04", 75.0),
        ])
        assert stats.total_trades == 2
        assert stats.performance_by_day["Friday"].trades == 1
        assert sum(b.trades for b in stats.performance_by_day.values()) == 1
        assert "Saturday" not in stats.performance_by_day

    def test_weekday_uses_exit_date(self):
        # Entered Monday 2025-10-06, closed Wednesday 2025-10-08
        stats = calculate_statistics([
            closed_trade("2025-10-06", 40.0, rr=1.0, exit_date=date(2025, 10, 8)),
        ])
        assert stats.performance_by_day["Wednesday"].trades == 1
        assert stats.performance_by_day["Wednesday"].wins == 1
        assert stats.performance_by_day["Wednesday"].win_rate == 100
        assert stats.performance_by_day["Monday"].trades == 0


class TestSetupBreakdown:
    """Setups appear only when at least one trade used them."""

    def test_setup_buckets(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", 100.0, rr=2.0, setup="Breakout"),
            closed_trade("2025-10-02", -50.0, rr=-1.0, setup="Breakout"),
            closed_trade("2025-10-03", 20.0, setup=""),
        ])
        assert list(stats.performance_by_setup) == ["Breakout"]
        breakout = stats.performance_by_setup["Breakout"]
        assert breakout.trades == 2
        assert breakout.pnl == pytest.approx(50.0)
        assert breakout.rr == pytest.approx(1.0)
        assert breakout.wins == 1
        assert breakout.win_rate == pytest.approx(50.0)


class TestIdempotence:
    """
    *For any* trade list, computing statistics twice yields identical
    output.
    """

    @given(trades=st.lists(trade_strategy(), max_size=40))
    @settings(max_examples=50)
    def test_repeatable(self, trades: list[Trade]):
        first = calculate_statistics(trades)
        second = calculate_statistics(trades)
        assert first.model_dump() == second.model_dump()


class TestWorkedExamples:
    """Hand-checked scenarios."""

    def test_daily_grouping(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", 268.0, id="a"),
            closed_trade("2025-10-01", 273.5, id="b"),
            closed_trade("2025-10-02", -101.0, id="c"),
        ])
        assert stats.total_pnl == pytest.approx(440.5)
        assert stats.total_trades == 3
        assert stats.winning_trades == 2
        assert stats.losing_trades == 1
        assert stats.win_rate == pytest.approx(66.7, abs=0.05)
        assert stats.best_day == pytest.approx(541.5)
        assert stats.worst_day == pytest.approx(-101.0)
        assert stats.avg_daily_pnl == pytest.approx(220.25)
        assert stats.avg_win == pytest.approx(270.75)
        assert stats.avg_loss == pytest.approx(101.0)
        assert stats.largest_win == pytest.approx(273.5)
        assert stats.largest_loss == pytest.approx(-101.0)
        assert stats.expectancy == pytest.approx(440.5 / 3)

    def test_loss_then_recovery(self):
        day = date(2025, 10, 6)
        stats = calculate_statistics([
            closed_trade(day.isoformat(), -100.0, id="loss"),
            closed_trade((day + timedelta(days=3)).isoformat(), 150.0, id="win"),
        ])
        assert stats.recovery_time == 3
        assert stats.max_drawdown == pytest.approx(100.0)

    def test_missing_rr_counts_as_zero(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", 100.0, rr=2.5),
            closed_trade("2025-10-02", 50.0),
        ])
        assert stats.total_rr == pytest.approx(2.5)
        assert stats.avg_rr == pytest.approx(1.25)
        assert stats.expectancy_rr == pytest.approx(1.25)
        assert stats.best_rr == pytest.approx(2.5)
        assert stats.avg_win_rr == pytest.approx(1.25)

    def test_rr_drawdown_tracked_separately(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", 500.0, rr=1.0),
            closed_trade("2025-10-02", -100.0, rr=-2.0),
        ])
        assert stats.max_drawdown == pytest.approx(100.0)
        assert stats.max_drawdown_rr == pytest.approx(2.0)
        assert stats.max_drawdown_duration == 1


class TestRecoveryTime:
    """Days for a single later trade to win back a loss."""

    def test_unrecovered_loss_left_out_of_average(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", -100.0, id="small-loss"),
            closed_trade("2025-10-02", -300.0, id="large-loss"),
            closed_trade("2025-10-05", 150.0, id="win"),
        ])
        assert stats.recovery_time == pytest.approx(4.0)

    def test_later_loss_is_not_a_recovery(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", -100.0, id="loss"),
            closed_trade("2025-10-02", -200.0, id="bigger-loss"),
            closed_trade("2025-10-04", 150.0, id="win"),
        ])
        # Only the first loss is won back, by the win three days later
        assert stats.recovery_time == pytest.approx(3.0)

    def test_first_sufficient_win_counts(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", -100.0, id="loss"),
            closed_trade("2025-10-02", 60.0, id="partial"),
            closed_trade("2025-10-03", 100.0, id="exact"),
            closed_trade("2025-10-08", 500.0, id="large"),
        ])
        assert stats.recovery_time == pytest.approx(2.0)

    def test_ordered_by_entry_date(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", -100.0, id="loss", exit_date=date(2025, 10, 10)),
            closed_trade("2025-10-03", 200.0, id="win", exit_date=date(2025, 10, 4)),
        ])
        assert stats.recovery_time == pytest.approx(2.0)

    def test_averages_over_recovered_losses(self):
        trades = [
            closed_trade("2025-10-01", -50.0, id="a"),
            closed_trade("2025-10-02", 60.0, id="b"),
            closed_trade("2025-10-06", -80.0, id="c"),
            closed_trade("2025-10-10", 90.0, id="d"),
        ]
        assert average_recovery_days([t.to_closed() for t in trades]) == pytest.approx(2.5)

    def test_no_recovery(self):
        assert average_recovery_days([]) == 0.0
        stats = calculate_statistics([
            closed_trade("2025-10-01", 100.0, id="win"),
            closed_trade("2025-10-02", -100.0, id="loss"),
        ])
        assert stats.recovery_time == 0.0


class TestStreaks:
    """Win/loss runs in effective-date order."""

    def test_breakeven_resets_both_runs(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", 10.0, id="1"),
            closed_trade("2025-10-02", 10.0, id="2"),
            closed_trade("2025-10-03", 0.0, id="3"),
            closed_trade("2025-10-06", 10.0, id="4"),
        ])
        assert stats.longest_win_streak == 2
        assert stats.current_streak == 1

    def test_current_losing_streak_is_negative(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", 10.0, id="1"),
            closed_trade("2025-10-02", -10.0, id="2"),
            closed_trade("2025-10-03", -5.0, id="3"),
        ])
        assert stats.current_streak == -2
        assert stats.longest_lose_streak == 2
        assert stats.longest_win_streak == 1

    def test_ending_on_breakeven(self):
        stats = calculate_statistics([
            closed_trade("2025-10-01", -10.0, id="1"),
            closed_trade("2025-10-02", 0.0, id="2"),
        ])
        assert stats.current_streak == 0
        assert stats.longest_lose_streak == 1
