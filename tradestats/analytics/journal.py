"""Joining trades with daily journal entries.

Trades and journal entries share no identifier; they are matched only
by calendar date.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable

from tradestats.models import DailyData, JournalEntry, JournalStreaks, Trade


def daily_data(
    trades: Iterable[Trade],
    journal_entries: Iterable[JournalEntry],
) -> dict[date, DailyData]:
    """Group trades and journal entries by day.

    Trades are keyed by entry date. Days with only a journal entry are
    included with no trades.

    Returns:
        Mapping of date to DailyData in ascending date order.
    """
    by_day: dict[date, list[Trade]] = defaultdict(list)
    for trade in trades:
        by_day[trade.date].append(trade)

    entries = {entry.date: entry for entry in journal_entries}

    return {
        day: DailyData(
            date=day,
            trades=tuple(by_day.get(day, ())),
            journal_entry=entries.get(day),
            total_pnl=sum(t.pnl for t in by_day.get(day, ())),
        )
        for day in sorted(set(by_day) | set(entries))
    }


def _consecutive_runs(days: Iterable[date]) -> tuple[int, int]:
    """Current and best run of consecutive calendar days.

    The current run is counted back from the most recent day.
    """
    ordered = sorted(set(days))
    if not ordered:
        return 0, 0

    best = 1
    run = 1
    for previous, day in zip(ordered, ordered[1:]):
        run = run + 1 if day - previous == timedelta(days=1) else 1
        best = max(best, run)

    # run now holds the streak ending at the latest day
    return run, best


def journal_streaks(journal_entries: Iterable[JournalEntry]) -> JournalStreaks:
    """Journaling and plan adherence streaks from journal entries."""
    entries = list(journal_entries)
    journal_current, journal_best = _consecutive_runs(e.date for e in entries)
    system_current, system_best = _consecutive_runs(e.date for e in entries if e.followed_system)
    return JournalStreaks(
        journal_streak=journal_current,
        best_journal_streak=journal_best,
        system_adherence_streak=system_current,
        best_system_adherence_streak=system_best,
    )
