"""Trade filtering.

Applies a :class:`TradeFilters` value to a list of trades. Filtering is
pure and keeps the relative order of the input.
"""

from datetime import date
from typing import Iterable, Optional, Sequence

from tradestats.models import JournalEntry, Trade, TradeFilters


def _matches_search(trade: Trade, query: str) -> bool:
    return (
        query in trade.symbol.lower()
        or query in trade.setup.lower()
        or query in trade.notes.lower()
        or any(query in tag.lower() for tag in trade.tags)
    )


def _matches(
    trade: Trade,
    filters: TradeFilters,
    window: tuple[Optional[date], Optional[date]],
    query: Optional[str],
    rule_breaking_dates: Optional[set[date]],
) -> bool:
    """Check a single trade against every set criterion."""
    start, end = window
    if start is not None and trade.date < start:
        return False
    if end is not None and trade.date > end:
        return False
    if filters.date_from is not None and trade.date < filters.date_from:
        return False
    if filters.date_to is not None and trade.date > filters.date_to:
        return False

    if filters.symbol and trade.symbol != filters.symbol:
        return False
    if filters.setup and trade.setup != filters.setup:
        return False
    if filters.tag and filters.tag not in trade.tags:
        return False

    if query and not _matches_search(trade, query):
        return False
    if filters.symbols and trade.symbol not in filters.symbols:
        return False
    if filters.setups and (not trade.setup or trade.setup not in filters.setups):
        return False
    if filters.tags and not any(tag in filters.tags for tag in trade.tags):
        return False

    if filters.outcome == "wins" and trade.pnl <= 0:
        return False
    if filters.outcome == "losses" and trade.pnl >= 0:
        return False
    if filters.outcome == "breakeven" and trade.pnl != 0:
        return False

    if filters.status == "open" and trade.is_closed:
        return False
    if filters.status == "closed" and not trade.is_closed:
        return False
    if filters.direction and trade.direction != filters.direction:
        return False

    if filters.pnl_min is not None and trade.pnl < filters.pnl_min:
        return False
    if filters.pnl_max is not None and trade.pnl > filters.pnl_max:
        return False

    # Trades without an R value never satisfy an R bound
    if filters.rr_min is not None and (trade.rr is None or trade.rr < filters.rr_min):
        return False
    if filters.rr_max is not None and (trade.rr is None or trade.rr > filters.rr_max):
        return False

    if rule_breaking_dates is not None and trade.date not in rule_breaking_dates:
        return False

    if filters.has_notes and not trade.notes.strip():
        return False
    if filters.has_tags and not trade.tags:
        return False
    if filters.has_screenshots and not (trade.screenshot_before or trade.screenshot_after):
        return False

    return True


def filter_trades(
    trades: Sequence[Trade],
    filters: Optional[TradeFilters] = None,
    journal_entries: Iterable[JournalEntry] = (),
    today: Optional[date] = None,
) -> list[Trade]:
    """Return the trades matching all set filter criteria.

    Args:
        trades: Trades to filter.
        filters: Criteria to apply. None or an empty TradeFilters
            returns every trade.
        journal_entries: Journal entries, consulted only by the
            rule-breaking filter.
        today: Reference date for period filters. Defaults to today.

    Returns:
        New list of matching trades in input order.
    """
    if filters is None or filters == TradeFilters():
        return list(trades)

    window = filters.period_window(today or date.today())

    query = filters.search_query.lower() if filters.search_query else None

    rule_breaking_dates = None
    if filters.rule_breaking:
        rule_breaking_dates = {e.date for e in journal_entries if not e.followed_system}

    return [
        trade
        for trade in trades
        if _matches(trade, filters, window, query, rule_breaking_dates)
    ]


def available_symbols(trades: Iterable[Trade]) -> list[str]:
    """Sorted distinct symbols."""
    return sorted({t.symbol for t in trades if t.symbol})


def available_setups(trades: Iterable[Trade]) -> list[str]:
    """Sorted distinct non-empty setups."""
    return sorted({t.setup for t in trades if t.setup})


def available_tags(trades: Iterable[Trade]) -> list[str]:
    """Sorted distinct tags."""
    return sorted({tag for t in trades for tag in t.tags if tag})
