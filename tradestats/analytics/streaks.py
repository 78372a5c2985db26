"""Win/loss streaks and loss recovery time."""

from typing import NamedTuple, Sequence

from tradestats.models import ClosedTrade


class StreakSummary(NamedTuple):
    current: int
    longest_win: int
    longest_loss: int


def trade_streaks(trades: Sequence[ClosedTrade]) -> StreakSummary:
    """Walk trades in effective-date order and measure win/loss runs.

    A breakeven trade ends both runs without extending either.

    Returns:
        StreakSummary whose ``current`` is positive for a running win
        streak, negative for a running loss streak and 0 otherwise.
    """
    ordered = sorted(trades, key=lambda t: t.effective_date)

    current = 0
    longest_win = 0
    longest_loss = 0
    win_run = 0
    loss_run = 0

    for trade in ordered:
        if trade.pnl > 0:
            win_run += 1
            loss_run = 0
            current = win_run
            longest_win = max(longest_win, win_run)
        elif trade.pnl < 0:
            loss_run += 1
            win_run = 0
            current = -loss_run
            longest_loss = max(longest_loss, loss_run)
        else:
            win_run = 0
            loss_run = 0
            current = 0

    return StreakSummary(current, longest_win, longest_loss)


def average_recovery_days(trades: Sequence[ClosedTrade]) -> float:
    """Average calendar days for a single later trade to win back a loss.

    Trades are ordered by entry date. For each losing trade the first
    later trade whose P&L is at least the size of the loss counts as the
    recovery. Losses that are never recovered are left out.

    Returns:
        Mean recovery days, or 0.0 when no loss was recovered.
    """
    ordered = sorted(trades, key=lambda t: t.date)

    total_days = 0
    recovered = 0
    for i, loss in enumerate(ordered):
        if loss.pnl >= 0:
            continue
        for later in ordered[i + 1:]:
            if later.pnl >= abs(loss.pnl):
                total_days += (later.date - loss.date).days
                recovered += 1
                break

    return total_days / recovered if recovered else 0.0
