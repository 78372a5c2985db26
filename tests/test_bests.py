"""Property-based tests for personal records.

**Feature: trading-statistics**
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradestats.analytics import daily_totals, personal_bests, trade_streaks
from tradestats.analytics.series import closed_trades
from tradestats.models import Trade


def closed_trade(trade_id: str, trade_date: str, pnl: float, rr: float = 0.0, **kwargs) -> Trade:
    return Trade(
        id=trade_id,
        date=date.fromisoformat(trade_date),
        symbol=kwargs.pop("symbol", "AAPL"),
        pnl=pnl,
        rr=rr,
        status=kwargs.pop("status", "closed"),
        **kwargs,
    )


@pytest.fixture
def history() -> list[Trade]:
    # 2025-09-01 is a Monday
    return [
        closed_trade("a", "2025-09-01", -80.0, -1.0),
        closed_trade("b", "2025-09-02", 300.0, 3.0, symbol="NVDA"),
        closed_trade("c", "2025-09-02", 100.0, 1.0),
        closed_trade("d", "2025-09-03", 50.0, 0.5),
        closed_trade("e", "2025-10-06", 120.0, 4.0, direction="short"),
        closed_trade("f", "2025-10-07", -30.0, -0.5),
        closed_trade("g", "2025-10-08", 900.0, status="open"),
    ]


def by_key(bests) -> dict:
    return {b.key: b for b in bests}


class TestRecordValues:
    """
    *For any* closed trades, the best trade is the largest P&L, the best
    day is the largest positive daily total, and the win streak record
    matches the longest winning run.
    """

    @given(
        trades=st.lists(
            st.builds(
                closed_trade,
                trade_id=st.uuids().map(str),
                trade_date=st.dates(min_value=date(2025, 1, 1), max_value=date(2025, 12, 31)).map(str),
                pnl=st.integers(min_value=-500, max_value=500).map(float),
            ),
            min_size=1,
            max_size=40,
        )
    )
    @settings(max_examples=100)
    def test_records_match_aggregates(self, trades):
        bests = by_key(personal_bests(trades, today=date(2026, 1, 1)))

        assert bests["best-trade"].value == max(t.pnl for t in trades)

        best_day = max(daily_totals(trades).values())
        if best_day > 0:
            assert bests["best-day"].value == best_day
        else:
            assert "best-day" not in bests

        longest = trade_streaks(closed_trades(trades)).longest_win
        if longest >= 3:
            assert bests["longest-win-streak"].value == longest
            assert len(bests["longest-win-streak"].trade_ids) == longest
        else:
            assert "longest-win-streak" not in bests


class TestPersonalBests:
    """Concrete records for a small history."""

    def test_record_order(self, history):
        bests = personal_bests(history, today=date(2025, 10, 20))

        assert [b.key for b in bests] == [
            "best-trade",
            "best-day",
            "best-rr-trade",
            "longest-win-streak",
            "best-avg-trade",
            "best-comeback",
            "best-week",
            "best-month",
        ]

    def test_best_trade_and_day(self, history):
        bests = by_key(personal_bests(history, today=date(2025, 10, 20)))

        assert bests["best-trade"].value == 300.0
        assert bests["best-trade"].description == "NVDA long"
        assert bests["best-trade"].trade_ids == ("b",)
        assert not bests["best-trade"].is_recent

        assert bests["best-day"].value == 400.0
        assert bests["best-day"].date == date(2025, 9, 2)
        assert bests["best-day"].description == "2 trades"

    def test_best_r_is_recent(self, history):
        best = by_key(personal_bests(history, today=date(2025, 10, 20)))["best-rr-trade"]

        assert best.value == 4.0
        assert best.description == "AAPL short"
        assert best.is_recent

    def test_streak_average_and_comeback(self, history):
        bests = by_key(personal_bests(history, today=date(2025, 10, 20)))

        streak = bests["longest-win-streak"]
        assert streak.value == 4
        assert streak.trade_ids == ("b", "c", "d", "e")
        assert streak.date == date(2025, 10, 6)
        assert streak.category == "streak"

        assert bests["best-avg-trade"].value == 200.0
        assert bests["best-comeback"].value == 400.0
        assert bests["best-comeback"].description == "After a 80.00 loss"

    def test_week_and_month(self, history):
        bests = by_key(personal_bests(history, today=date(2025, 10, 20)))

        assert bests["best-week"].value == 370.0
        assert bests["best-week"].date == date(2025, 9, 3)
        assert bests["best-week"].trade_ids == ("a", "b", "c", "d")
        assert bests["best-month"].value == 370.0
        assert bests["best-month"].date == date(2025, 9, 1)
        assert bests["best-month"].description == "September 2025"

    def test_rolling_win_rate(self):
        start = date(2025, 9, 1)
        pnls = [-10.0] + [20.0] * 10 + [-10.0]
        trades = [
            closed_trade(str(i), (start + timedelta(days=i)).isoformat(), pnl)
            for i, pnl in enumerate(pnls)
        ]

        best = by_key(personal_bests(trades, today=date(2025, 9, 12)))["best-win-rate"]

        assert best.value == 100.0
        assert best.date == date(2025, 9, 11)
        assert best.trade_ids == tuple(str(i) for i in range(1, 11))
        assert best.is_recent

    def test_losing_history_keeps_trade_records_only(self):
        trades = [
            closed_trade("x", "2025-09-01", -50.0, -1.0),
            closed_trade("y", "2025-09-02", -20.0, -0.5),
        ]

        bests = personal_bests(trades, today=date(2025, 10, 1))

        assert [b.key for b in bests] == ["best-trade", "best-rr-trade"]
        assert bests[0].value == -20.0

    def test_no_closed_trades(self):
        assert personal_bests([]) == []
        assert personal_bests([closed_trade("o", "2025-09-01", 0.0, status="open")]) == []
