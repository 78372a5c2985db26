"""Helpers shared by the TradeStats CLI commands."""

from datetime import date
from typing import Callable, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from tradestats.config import Settings, load_settings
from tradestats.db.store import DataStore
from tradestats.formatting import DisplayUnit
from tradestats.models import PERIODS, TradeFilters

console = Console()


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def get_settings(ctx: click.Context) -> Settings:
    """Load settings using the --config path given to the group."""
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return load_settings(config_path)
    except ValidationError as e:
        error_panel(f"[red]Invalid configuration:[/red]\n\n{e}", title="Configuration Error")


def get_data_store(settings: Settings) -> DataStore:
    """Get the data store instance."""
    return DataStore(settings.db_path)


def resolve_unit(unit: Optional[str], settings: Settings) -> DisplayUnit:
    """Display unit from the --unit option, falling back to settings."""
    return DisplayUnit(unit) if unit else settings.display_unit


def _parse_date(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Use YYYY-MM-DD.")


def _parse_period(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.lower()
    if value not in PERIODS and not (value.endswith("d") and value[:-1].isdigit()):
        raise click.BadParameter(
            f"Invalid period '{value}'. Use one of {', '.join(PERIODS)}, or a lookback like 30d."
        )
    return value


unit_option = click.option(
    "--unit",
    type=click.Choice([u.value for u in DisplayUnit]),
    default=None,
    help="Display unit: currency or r (default from config).",
)


def filter_options(func: Callable) -> Callable:
    """Add the trade filter options to a command."""
    options = [
        click.option("--period", callback=_parse_period, default=None, help=f"Calendar period ({', '.join(PERIODS)}) or a lookback like 30d."),
        click.option("--from", "date_from", callback=_parse_date, default=None, help="Earliest entry date (YYYY-MM-DD)."),
        click.option("--to", "date_to", callback=_parse_date, default=None, help="Latest entry date (YYYY-MM-DD)."),
        click.option("--symbol", default=None, help="Only this symbol."),
        click.option("--setup", default=None, help="Only this setup."),
        click.option("--tag", default=None, help="Only trades with this tag."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_filters(
    period: Optional[str],
    date_from: Optional[date],
    date_to: Optional[date],
    symbol: Optional[str],
    setup: Optional[str],
    tag: Optional[str],
) -> TradeFilters:
    """Build TradeFilters from the filter options."""
    return TradeFilters(
        period=period,
        date_from=date_from,
        date_to=date_to,
        symbol=symbol,
        setup=setup,
        tag=tag,
    )


def colored(text: str, value: float) -> str:
    """Wrap text in green or red markup depending on the sign of value."""
    color = "green" if value >= 0 else "red"
    return f"[{color}]{text}[/{color}]"
