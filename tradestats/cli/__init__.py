"""CLI commands for TradeStats.

This package provides the command-line interface for TradeStats,
including statistics reports, series and breakdown tables, and journal
import/export.
"""

from tradestats.cli.main import cli, main

__all__ = ["cli", "main"]
