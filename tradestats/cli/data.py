"""Journal data commands for TradeStats CLI.

Handles trade listing and journal backup import/export.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradestats.analytics import filter_trades
from tradestats.cli.common import (
    build_filters,
    colored,
    error_panel,
    filter_options,
    get_data_store,
    get_settings,
    resolve_unit,
    unit_option,
)
from tradestats.db.transfer import JournalDataError, export_csv, export_json, import_json
from tradestats.formatting import DisplayUnit, format_value

console = Console()


@click.command()
@filter_options
@unit_option
@click.option(
    "--status",
    type=click.Choice(["all", "open", "closed"]),
    default="all",
    help="Only open or closed trades.",
)
@click.pass_context
def trades(ctx: click.Context, unit: Optional[str], status: str, **filter_kwargs) -> None:
    """Display journaled trades.

    \b
    Examples:
      tradestats trades                  # All trades
      tradestats trades --period 7d      # Last 7 days
      tradestats trades --status open    # Open trades only
    """
    settings = get_settings(ctx)
    display = resolve_unit(unit, settings)
    store = get_data_store(settings)

    filters = build_filters(**filter_kwargs).model_copy(update={"status": status})
    rows = filter_trades(store.get_trades(), filters, store.get_journal())

    if not rows:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trades[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trades",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Setup")
    table.add_column("Result", justify="right")
    table.add_column("Status", justify="center", style="dim")

    for trade in rows:
        side_color = "green" if trade.direction == "long" else "red"

        if not trade.is_closed:
            result = "-"
        elif display is DisplayUnit.RISK_MULTIPLE:
            result = colored(format_value(trade.rr, display), trade.rr or 0.0)
        else:
            result = colored(format_value(trade.pnl, display, settings.currency_symbol), trade.pnl)

        table.add_row(
            trade.effective_date.isoformat(),
            trade.symbol,
            f"[{side_color}]{trade.direction.upper()}[/{side_color}]",
            trade.setup or "-",
            result,
            "Closed" if trade.is_closed else "[yellow]Open[/yellow]",
        )

    console.print(table)
    console.print(f"\n[bold]Total Trades:[/bold] {len(rows)}")


@click.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_(ctx: click.Context, path: Path) -> None:
    """Import trades and journal entries from a JSON backup.

    Trades with an existing ID and journal entries for an existing
    date are replaced.

    \b
    Examples:
      tradestats import trading-journal-backup.json
    """
    settings = get_settings(ctx)

    try:
        backup = import_json(path)
    except JournalDataError as e:
        error_panel(f"[red]Failed to import backup:[/red]\n\n{e}")

    store = get_data_store(settings)
    for trade in backup.trades:
        store.save_trade(trade)
    for entry in backup.journal_entries:
        store.save_journal_entry(entry)

    console.print(Panel(
        f"[bold]Import Complete[/bold]\n\n"
        f"File:            {path}\n"
        f"Trades:          {len(backup.trades)}\n"
        f"Journal entries: {len(backup.journal_entries)}",
        title="[bold cyan]Import[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--csv", "as_csv", is_flag=True, default=False, help="Export trades as CSV instead of a JSON backup.")
@click.pass_context
def export(ctx: click.Context, path: Path, as_csv: bool) -> None:
    """Export the journal to a JSON backup or a CSV file.

    \b
    Examples:
      tradestats export backup.json
      tradestats export trades.csv --csv
    """
    settings = get_settings(ctx)
    store = get_data_store(settings)
    all_trades = store.get_trades()

    if as_csv:
        count = export_csv(all_trades, path)
        summary = f"Trades: {count}"
    else:
        entries = store.get_journal()
        export_json(all_trades, entries, path)
        summary = f"Trades:          {len(all_trades)}\nJournal entries: {len(entries)}"

    console.print(Panel(
        f"[bold]Export Complete[/bold]\n\nFile: {path}\n{summary}",
        title="[bold cyan]Export[/bold cyan]",
        border_style="cyan",
    ))
