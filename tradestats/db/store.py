"""SQLite data store for TradeStats."""

import json
import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tradestats.models import JournalEntry, NewsEvent, Trade

logger = logging.getLogger(__name__)


class DataStore:
    """SQLite-based store for trades and journal entries."""

    REQUIRED_TABLES = [
        "trades",
        "journal",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Trades table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL,
                    name TEXT,
                    entry_time TEXT,
                    exit_time TEXT,
                    symbol TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    entry_price REAL NOT NULL,
                    exit_price REAL,
                    pnl REAL NOT NULL,
                    rr REAL,
                    status TEXT,
                    exit_date TEXT,
                    setup TEXT NOT NULL DEFAULT '',
                    tags TEXT NOT NULL DEFAULT '[]',
                    notes TEXT NOT NULL DEFAULT '',
                    stop_loss REAL,
                    target REAL,
                    screenshot_before TEXT,
                    screenshot_after TEXT
                )
            """)

            # Journal table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS journal (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date TEXT NOT NULL UNIQUE,
                    name TEXT,
                    mood TEXT NOT NULL,
                    followed_system INTEGER NOT NULL DEFAULT 1,
                    is_news_day INTEGER NOT NULL DEFAULT 0,
                    did_trade INTEGER NOT NULL DEFAULT 1,
                    notes TEXT NOT NULL DEFAULT '',
                    lessons_learned TEXT NOT NULL DEFAULT '',
                    market_conditions TEXT NOT NULL DEFAULT '',
                    news_events TEXT NOT NULL DEFAULT '[]'
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    def save_trade(self, trade: Trade) -> None:
        """Insert a trade, replacing any stored trade with the same ID.

        Args:
            trade: Trade to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO trades
                (id, date, name, entry_time, exit_time, symbol, direction,
                 entry_price, exit_price, pnl, rr, status, exit_date, setup,
                 tags, notes, stop_loss, target, screenshot_before, screenshot_after)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    trade.id,
                    trade.date.isoformat(),
                    trade.name,
                    trade.entry_time,
                    trade.exit_time,
                    trade.symbol,
                    trade.direction,
                    trade.entry_price,
                    trade.exit_price,
                    trade.pnl,
                    trade.rr,
                    trade.status,
                    trade.exit_date.isoformat() if trade.exit_date else None,
                    trade.setup,
                    json.dumps(list(trade.tags)),
                    trade.notes,
                    trade.stop_loss,
                    trade.target,
                    trade.screenshot_before,
                    trade.screenshot_after,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_trades(self, from_date: Optional[date] = None) -> list[Trade]:
        """Get trades from the database.

        Rows that no longer validate are skipped with a warning.

        Args:
            from_date: Optional earliest entry date. If None, returns
                all trades.

        Returns:
            List of trades ordered by entry date.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if from_date:
                cursor.execute(
                    "SELECT * FROM trades WHERE date >= ? ORDER BY date, rowid",
                    (from_date.isoformat(),),
                )
            else:
                cursor.execute("SELECT * FROM trades ORDER BY date, rowid")

            trades = []
            for row in cursor.fetchall():
                try:
                    trades.append(self._row_to_trade(row))
                except (ValidationError, ValueError) as e:
                    logger.warning("Skipping malformed trade %s: %s", row["id"], e)
            return trades
        finally:
            conn.close()

    def get_trade(self, trade_id: str) -> Optional[Trade]:
        """Get a trade by ID.

        Args:
            trade_id: Trade ID.

        Returns:
            Trade if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM trades WHERE id = ?", (trade_id,))
            row = cursor.fetchone()
            if row:
                return self._row_to_trade(row)
            return None
        finally:
            conn.close()

    def delete_trade(self, trade_id: str) -> None:
        """Delete a trade.

        Args:
            trade_id: ID of the trade to delete.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            name=row["name"],
            entry_time=row["entry_time"],
            exit_time=row["exit_time"],
            symbol=row["symbol"],
            direction=row["direction"],
            entry_price=row["entry_price"],
            exit_price=row["exit_price"],
            pnl=row["pnl"],
            rr=row["rr"],
            status=row["status"],
            exit_date=date.fromisoformat(row["exit_date"]) if row["exit_date"] else None,
            setup=row["setup"],
            tags=tuple(json.loads(row["tags"])),
            notes=row["notes"],
            stop_loss=row["stop_loss"],
            target=row["target"],
            screenshot_before=row["screenshot_before"],
            screenshot_after=row["screenshot_after"],
        )

    # ==================== Journal ====================

    def save_journal_entry(self, entry: JournalEntry) -> None:
        """Save a journal entry, replacing any entry for the same date.

        Args:
            entry: Journal entry to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO journal
                (date, name, mood, followed_system, is_news_day, did_trade,
                 notes, lessons_learned, market_conditions, news_events)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.date.isoformat(),
                    entry.name,
                    entry.mood.value,
                    1 if entry.followed_system else 0,
                    1 if entry.is_news_day else 0,
                    1 if entry.did_trade else 0,
                    entry.notes,
                    entry.lessons_learned,
                    entry.market_conditions,
                    json.dumps([event.model_dump() for event in entry.news_events]),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_journal(self, from_date: Optional[date] = None) -> list[JournalEntry]:
        """Get journal entries.

        Rows that no longer validate are skipped with a warning.

        Args:
            from_date: Optional start date filter.

        Returns:
            List of journal entries, most recent first.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if from_date:
                cursor.execute(
                    "SELECT * FROM journal WHERE date >= ? ORDER BY date DESC",
                    (from_date.isoformat(),),
                )
            else:
                cursor.execute("SELECT * FROM journal ORDER BY date DESC")

            entries = []
            for row in cursor.fetchall():
                try:
                    entries.append(self._row_to_entry(row))
                except (ValidationError, ValueError) as e:
                    logger.warning("Skipping malformed journal entry %s: %s", row["date"], e)
            return entries
        finally:
            conn.close()

    def get_journal_entry(self, entry_date: date) -> Optional[JournalEntry]:
        """Get the journal entry for a date.

        Args:
            entry_date: Journal date.

        Returns:
            JournalEntry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM journal WHERE date = ?", (entry_date.isoformat(),))
            row = cursor.fetchone()
            if row:
                return self._row_to_entry(row)
            return None
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
        return JournalEntry(
            date=date.fromisoformat(row["date"]),
            name=row["name"],
            mood=row["mood"],
            followed_system=bool(row["followed_system"]),
            is_news_day=bool(row["is_news_day"]),
            did_trade=bool(row["did_trade"]),
            notes=row["notes"],
            lessons_learned=row["lessons_learned"],
            market_conditions=row["market_conditions"],
            news_events=tuple(NewsEvent(**event) for event in json.loads(row["news_events"])),
        )

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
