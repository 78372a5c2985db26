"""JSON backup and CSV export of the trade journal."""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from tradestats.models import JournalEntry, Trade

logger = logging.getLogger(__name__)

BACKUP_VERSION = "1.0"

CSV_HEADERS = [
    "Date",
    "Exit Date",
    "Symbol",
    "Direction",
    "Entry Price",
    "Exit Price",
    "P&L",
    "R",
    "Status",
    "Setup",
    "Tags",
    "Notes",
]


class JournalDataError(ValueError):
    """Raised when a backup file cannot be read."""


class JournalBackup(BaseModel):
    """Full journal backup as written to disk.

    Keys are camelCase on disk so backups move freely between TradeStats
    and the journal app; snake_case keys are accepted on import.
    """

    version: str = Field(default=BACKUP_VERSION, description="Backup format version")
    export_date: datetime = Field(default_factory=datetime.now, description="When the backup was written")
    trades: list[Trade] = Field(default_factory=list)
    journal_entries: list[JournalEntry] = Field(default_factory=list)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


def export_json(
    trades: Iterable[Trade],
    journal_entries: Iterable[JournalEntry],
    path: Path,
) -> JournalBackup:
    """Write a JSON backup of trades and journal entries.

    Args:
        trades: Trades to back up.
        journal_entries: Journal entries to back up.
        path: Destination file.

    Returns:
        The backup that was written.
    """
    backup = JournalBackup(trades=list(trades), journal_entries=list(journal_entries))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(backup.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
    logger.info(
        "Exported %d trades and %d journal entries to %s",
        len(backup.trades), len(backup.journal_entries), path,
    )
    return backup


def import_json(path: Path) -> JournalBackup:
    """Read a JSON backup.

    Args:
        path: Backup file written by :func:`export_json`.

    Returns:
        The parsed backup.

    Raises:
        JournalDataError: If the file is missing, not JSON, or does not
            match the backup format.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise JournalDataError(f"Could not read backup {path}: {e}") from e

    if not isinstance(raw, dict) or "trades" not in raw:
        raise JournalDataError(f"{path} is not a journal backup")

    try:
        backup = JournalBackup.model_validate(raw)
    except ValidationError as e:
        raise JournalDataError(f"Invalid backup {path}: {e}") from e

    logger.info(
        "Read %d trades and %d journal entries from %s",
        len(backup.trades), len(backup.journal_entries), path,
    )
    return backup


def export_csv(trades: Iterable[Trade], path: Path) -> int:
    """Write trades to a CSV file.

    Args:
        trades: Trades to export.
        path: Destination file.

    Returns:
        Number of trades written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL)
        writer.writerow(CSV_HEADERS)
        for trade in trades:
            writer.writerow([
                trade.date.isoformat(),
                trade.exit_date.isoformat() if trade.exit_date else "",
                trade.symbol,
                trade.direction,
                trade.entry_price,
                "" if trade.exit_price is None else trade.exit_price,
                trade.pnl,
                "" if trade.rr is None else trade.rr,
                "closed" if trade.is_closed else "open",
                trade.setup,
                "; ".join(trade.tags),
                trade.notes,
            ])
            count += 1
    logger.info("Exported %d trades to %s", count, path)
    return count
