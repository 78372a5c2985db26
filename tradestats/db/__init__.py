"""Local persistence for TradeStats."""

from tradestats.db.store import DataStore
from tradestats.db.transfer import (
    JournalBackup,
    JournalDataError,
    export_csv,
    export_json,
    import_json,
)

__all__ = [
    "DataStore",
    "JournalBackup",
    "JournalDataError",
    "export_csv",
    "export_json",
    "import_json",
]
