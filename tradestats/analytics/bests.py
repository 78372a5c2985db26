"""Personal records: best trade, day, week and month, streaks and comebacks.

Day, week and month buckets use the effective date. Weeks start on
Monday. Records are returned in a fixed display order and a record that
was never set is omitted.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from tradestats.analytics.series import TradeLike, closed_trades
from tradestats.models import ClosedTrade, PersonalBest

RECENT_DAYS = 30
WIN_RATE_WINDOW = 10
MIN_STREAK = 3


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _group(trades: Iterable[ClosedTrade], key) -> dict:
    groups: dict = defaultdict(list)
    for trade in trades:
        groups[key(trade.effective_date)].append(trade)
    return dict(sorted(groups.items()))


def _best_group(groups: dict) -> Optional[tuple]:
    """Key and trades of the group with the highest positive P&L total.

    The earliest group wins a tie.
    """
    best = None
    best_pnl = 0.0
    for key, trades in groups.items():
        pnl = sum(t.pnl for t in trades)
        if pnl > best_pnl:
            best, best_pnl = (key, trades), pnl
    return best


def _ids(trades: Sequence[ClosedTrade]) -> tuple[str, ...]:
    return tuple(t.id for t in trades)


def personal_bests(trades: Iterable[TradeLike], today: Optional[date] = None) -> list[PersonalBest]:
    """Compute the personal records of a trade history.

    Args:
        trades: Trades to analyze. Open trades are ignored.
        today: Reference date for the ``is_recent`` flag. Defaults to
            today.

    Returns:
        Records in display order: best trade, best day, best R trade,
        best win rate, longest win streak, best average day, best
        comeback, best week, best month. Empty for no closed trades.
    """
    closed = closed_trades(trades)
    if not closed:
        return []

    recent_start = (today or date.today()) - timedelta(days=RECENT_DAYS)
    ordered = sorted(closed, key=lambda t: t.effective_date)
    days = _group(closed, lambda d: d)
    bests: list[PersonalBest] = []

    def record(key: str, title: str, value: float, day: Optional[date], category: str,
               members: Sequence[ClosedTrade], description: str = "") -> None:
        bests.append(PersonalBest(
            key=key,
            title=title,
            description=description,
            value=value,
            date=day,
            is_recent=day is not None and day >= recent_start,
            category=category,
            trade_ids=_ids(members),
        ))

    best_trade = max(closed, key=lambda t: t.pnl)
    record("best-trade", "Best Trade", best_trade.pnl, best_trade.effective_date, "performance",
           [best_trade], f"{best_trade.symbol} {best_trade.direction}")

    best_day = _best_group(days)
    if best_day:
        day, day_trades = best_day
        record("best-day", "Best Day", sum(t.pnl for t in day_trades), day, "performance",
               day_trades, _plural(len(day_trades), "trade"))

    best_rr = max(closed, key=lambda t: t.rr)
    record("best-rr-trade", "Best R", best_rr.rr, best_rr.effective_date, "performance",
           [best_rr], f"{best_rr.symbol} {best_rr.direction}")

    # Rolling win rate needs at least one full window
    best_rate = 0.0
    best_window: Sequence[ClosedTrade] = ()
    for i in range(len(ordered) - WIN_RATE_WINDOW + 1):
        window = ordered[i:i + WIN_RATE_WINDOW]
        rate = sum(1 for t in window if t.pnl > 0) / WIN_RATE_WINDOW * 100
        if rate > best_rate:
            best_rate, best_window = rate, window
    if best_window:
        record("best-win-rate", "Best Win Rate", best_rate, best_window[-1].effective_date, "consistency",
               best_window, f"{WIN_RATE_WINDOW}-trade period")

    longest: list[ClosedTrade] = []
    run: list[ClosedTrade] = []
    for trade in ordered:
        run = run + [trade] if trade.pnl > 0 else []
        if len(run) > len(longest):
            longest = run
    if len(longest) >= MIN_STREAK:
        record("longest-win-streak", "Longest Win Streak", len(longest), longest[-1].effective_date, "streak",
               longest, f"{len(longest)} consecutive wins")

    best_avg = 0.0
    best_avg_day = None
    for day, day_trades in days.items():
        if len(day_trades) < 2:
            continue
        average = sum(t.pnl for t in day_trades) / len(day_trades)
        if average > best_avg:
            best_avg, best_avg_day = average, day
    if best_avg_day is not None:
        record("best-avg-trade", "Best Avg/Trade", best_avg, best_avg_day, "consistency",
               days[best_avg_day], _plural(len(days[best_avg_day]), "trade"))

    # Best winning day that directly follows a losing trading day
    best_comeback = 0.0
    comeback_day = None
    prior_loss = 0.0
    day_list = list(days.items())
    for (_, prev_trades), (day, day_trades) in zip(day_list, day_list[1:]):
        prev_pnl = sum(t.pnl for t in prev_trades)
        pnl = sum(t.pnl for t in day_trades)
        if prev_pnl < 0 and pnl > best_comeback:
            best_comeback, comeback_day, prior_loss = pnl, day, abs(prev_pnl)
    if comeback_day is not None:
        record("best-comeback", "Best Comeback", best_comeback, comeback_day, "performance",
               days[comeback_day], f"After a {prior_loss:,.2f} loss")

    best_week = _best_group(_group(closed, lambda d: d - timedelta(days=d.weekday())))
    if best_week:
        _, week_trades = best_week
        record("best-week", "Best Week", sum(t.pnl for t in week_trades),
               max(t.effective_date for t in week_trades), "volume",
               week_trades, _plural(len(week_trades), "trade"))

    best_month = _best_group(_group(closed, lambda d: d.replace(day=1)))
    if best_month:
        month, month_trades = best_month
        record("best-month", "Best Month", sum(t.pnl for t in month_trades), month, "volume",
               month_trades, month.strftime("%B %Y"))

    return bests
