"""Statistics commands for TradeStats CLI.

Handles the statistics summary, equity curve, monthly performance,
weekday/setup breakdowns, growth comparisons and personal records.
"""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradestats.analytics import (
    calculate_statistics,
    cumulative_series,
    filter_trades,
    growth_comparison,
    monthly_performance,
    monthly_series,
    personal_bests,
    recent_periods,
)
from tradestats.cli.common import (
    build_filters,
    colored,
    filter_options,
    get_data_store,
    get_settings,
    resolve_unit,
    unit_option,
)
from tradestats.formatting import (
    DisplayUnit,
    format_percentage,
    format_profit_factor,
    format_value,
)
from tradestats.models import BreakdownStats, PeriodComparison

console = Console()


def _load_filtered(ctx: click.Context, **filter_kwargs):
    settings = get_settings(ctx)
    store = get_data_store(settings)
    filters = build_filters(**filter_kwargs)
    trades = filter_trades(store.get_trades(), filters, store.get_journal())
    return settings, trades


def _no_trades(title: str) -> None:
    console.print(Panel(
        "[dim]No closed trades found[/dim]\n\n"
        "[dim]Run 'tradestats import <backup.json>' to load your journal[/dim]",
        title=f"[bold]{title}[/bold]",
        border_style="dim",
    ))


@click.command()
@filter_options
@unit_option
@click.pass_context
def stats(ctx: click.Context, unit: Optional[str], **filter_kwargs) -> None:
    """Display overall trading statistics.

    Shows win rate, profit factor, expectancy, best/worst days,
    drawdown, streaks and recovery time for closed trades.

    \b
    Examples:
      tradestats stats                    # All closed trades
      tradestats stats --period 30d       # Last 30 days
      tradestats stats --setup Breakout --unit r
    """
    settings, trades = _load_filtered(ctx, **filter_kwargs)
    display = resolve_unit(unit, settings)
    result = calculate_statistics(trades)

    if result.total_trades == 0:
        _no_trades("Statistics")
        return

    def fmt(pnl_value: float, rr_value: float) -> str:
        value = rr_value if display is DisplayUnit.RISK_MULTIPLE else pnl_value
        return colored(format_value(value, display, settings.currency_symbol), value)

    use_rr = display is DisplayUnit.RISK_MULTIPLE
    profit_factor = result.profit_factor_rr if use_rr else result.profit_factor

    if result.current_streak > 0:
        streak = f"[green]{result.current_streak}W[/green]"
    elif result.current_streak < 0:
        streak = f"[red]{abs(result.current_streak)}L[/red]"
    else:
        streak = "-"

    output_lines = [
        "[bold]Overview:[/bold]",
        f"  Total Trades:    {result.total_trades}",
        f"  Wins / Losses:   {result.winning_trades}W / {result.losing_trades}L",
        f"  Win Rate:        {format_percentage(result.win_rate)}",
        f"  Total:           {fmt(result.total_pnl, result.total_rr)}",
        "",
        "[bold]Edge:[/bold]",
        f"  Profit Factor:   {format_profit_factor(profit_factor)}",
        f"  Expectancy:      {fmt(result.expectancy, result.expectancy_rr)}",
        f"  Avg Win:         {fmt(result.avg_win, result.avg_win_rr)}",
        f"  Avg Loss:        {fmt(-result.avg_loss, -result.avg_loss_rr)}",
        f"  Largest Win:     {fmt(result.largest_win, result.largest_win_rr)}",
        f"  Largest Loss:    {fmt(result.largest_loss, result.largest_loss_rr)}",
        "",
        "[bold]Daily:[/bold]",
        f"  Avg Day:         {fmt(result.avg_daily_pnl, result.avg_daily_rr)}",
        f"  Best Day:        {fmt(result.best_day, result.best_day_rr)}",
        f"  Worst Day:       {fmt(result.worst_day, result.worst_day_rr)}",
        "",
        "[bold]Risk:[/bold]",
        f"  Max Drawdown:    {fmt(-result.max_drawdown, -result.max_drawdown_rr)}",
        f"  DD Duration:     {result.max_drawdown_duration} days",
        f"  Recovery Time:   {result.recovery_time:.1f} days",
        "",
        "[bold]Streaks:[/bold]",
        f"  Current:         {streak}",
        f"  Longest Win:     {result.longest_win_streak}",
        f"  Longest Loss:    {result.longest_lose_streak}",
    ]

    console.print(Panel(
        "\n".join(output_lines),
        title="[bold cyan]Trading Statistics[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@filter_options
@unit_option
@click.option("--monthly", is_flag=True, default=False, help="Group the curve by month.")
@click.pass_context
def equity(ctx: click.Context, unit: Optional[str], monthly: bool, **filter_kwargs) -> None:
    """Display the cumulative equity curve.

    \b
    Examples:
      tradestats equity             # Daily cumulative P&L
      tradestats equity --monthly   # Monthly cumulative P&L
    """
    settings, trades = _load_filtered(ctx, **filter_kwargs)
    display = resolve_unit(unit, settings)

    if monthly:
        series = monthly_series(trades, display)
    else:
        series = cumulative_series(trades, display)

    if not series:
        _no_trades("Equity Curve")
        return

    table = Table(
        title="Equity Curve (monthly)" if monthly else "Equity Curve",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Month" if monthly else "Date", style="bold")
    table.add_column("Change", justify="right")
    table.add_column("Cumulative", justify="right")

    previous = 0.0
    for point in series:
        change = point.value - previous
        previous = point.value
        table.add_row(
            point.date.strftime("%Y-%m") if monthly else point.date.isoformat(),
            colored(format_value(change, display, settings.currency_symbol), change),
            colored(format_value(point.value, display, settings.currency_symbol), point.value),
        )

    console.print(table)


@click.command()
@filter_options
@unit_option
@click.option("--months", type=int, default=None, help="Number of recent months (default from config).")
@click.pass_context
def monthly(ctx: click.Context, unit: Optional[str], months: Optional[int], **filter_kwargs) -> None:
    """Display performance for the most recent months.

    \b
    Examples:
      tradestats monthly             # Last 6 months
      tradestats monthly --months 12
    """
    settings, trades = _load_filtered(ctx, **filter_kwargs)
    display = resolve_unit(unit, settings)
    count = months if months is not None else settings.recent_months

    periods = recent_periods(monthly_performance(trades), count)
    if not periods:
        _no_trades("Monthly Performance")
        return

    table = Table(
        title=f"Monthly Performance (last {len(periods)})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Month", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Result", justify="right")
    table.add_column("Win Rate", justify="right")

    for period in periods:
        value = period.rr if display is DisplayUnit.RISK_MULTIPLE else period.pnl
        table.add_row(
            period.period,
            str(period.trades),
            colored(format_value(value, display, settings.currency_symbol), value),
            format_percentage(period.win_rate),
        )

    console.print(table)


def _breakdown_table(
    title: str,
    label: str,
    rows: dict[str, BreakdownStats],
    display: DisplayUnit,
    currency_symbol: str,
) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column(label, style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Result", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Win Rate", justify="right")

    for key, data in rows.items():
        value = data.rr if display is DisplayUnit.RISK_MULTIPLE else data.pnl
        table.add_row(
            key,
            str(data.trades),
            colored(format_value(value, display, currency_symbol), value),
            str(data.wins),
            format_percentage(data.win_rate),
        )
    return table


@click.command()
@filter_options
@unit_option
@click.pass_context
def breakdown(ctx: click.Context, unit: Optional[str], **filter_kwargs) -> None:
    """Display performance by weekday and by setup.

    \b
    Examples:
      tradestats breakdown
      tradestats breakdown --symbol AAPL --unit r
    """
    settings, trades = _load_filtered(ctx, **filter_kwargs)
    display = resolve_unit(unit, settings)
    result = calculate_statistics(trades)

    if result.total_trades == 0:
        _no_trades("Breakdown")
        return

    console.print(_breakdown_table(
        "Performance by Weekday", "Day", result.performance_by_day, display, settings.currency_symbol,
    ))

    if result.performance_by_setup:
        by_setup = dict(sorted(result.performance_by_setup.items(), key=lambda item: item[1].pnl, reverse=True))
        console.print(_breakdown_table(
            "Performance by Setup", "Setup", by_setup, display, settings.currency_symbol,
        ))
    else:
        console.print("\n[dim]No setups recorded[/dim]")


def _comparison_value(comparison: PeriodComparison, value: float, display: DisplayUnit, currency_symbol: str) -> str:
    if comparison.metric == "Win Rate":
        return format_percentage(value)
    if comparison.metric == "Total Trades":
        return str(int(value))
    if comparison.metric == "Profit Factor":
        return format_profit_factor(value)
    return format_value(value, display, currency_symbol)


def _comparison_table(
    title: str,
    comparisons: tuple[PeriodComparison, ...],
    display: DisplayUnit,
    currency_symbol: str,
) -> Table:
    first = comparisons[0]
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column(first.current_label, justify="right")
    table.add_column(first.previous_label, justify="right")
    table.add_column("Change", justify="right")

    for comparison in comparisons:
        color = "green" if comparison.is_positive else "red" if comparison.trend != "neutral" else "dim"
        table.add_row(
            comparison.metric,
            _comparison_value(comparison, comparison.current, display, currency_symbol),
            _comparison_value(comparison, comparison.previous, display, currency_symbol),
            f"[{color}]{format_percentage(comparison.change_percent, signed=True)}[/{color}]",
        )
    return table


@click.command()
@filter_options
@unit_option
@click.pass_context
def growth(ctx: click.Context, unit: Optional[str], **filter_kwargs) -> None:
    """Compare this month, this quarter and the last 30 days with earlier periods.

    \b
    Examples:
      tradestats growth
      tradestats growth --unit r
    """
    settings, trades = _load_filtered(ctx, **filter_kwargs)
    display = resolve_unit(unit, settings)
    result = growth_comparison(trades, display)

    sections = [
        ("Month over Month", result.month_over_month),
        ("Quarter over Quarter", result.quarter_over_quarter),
        ("Recent vs Historical", result.recent_vs_historical),
    ]
    if not any(comparisons for _, comparisons in sections):
        _no_trades("Growth")
        return

    for title, comparisons in sections:
        if comparisons:
            console.print(_comparison_table(title, comparisons, display, settings.currency_symbol))


@click.command()
@filter_options
@click.pass_context
def bests(ctx: click.Context, **filter_kwargs) -> None:
    """Display personal records.

    \b
    Examples:
      tradestats bests
      tradestats bests --period this-quarter
    """
    settings, trades = _load_filtered(ctx, **filter_kwargs)
    records = personal_bests(trades)

    if not records:
        _no_trades("Personal Bests")
        return

    table = Table(title="Personal Bests", show_header=True, header_style="bold cyan")
    table.add_column("Record", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Date")
    table.add_column("Details", style="dim")

    for best in records:
        if best.key == "best-rr-trade":
            value = format_value(best.value, DisplayUnit.RISK_MULTIPLE)
        elif best.key == "best-win-rate":
            value = format_percentage(best.value, decimals=0)
        elif best.key == "longest-win-streak":
            value = f"{int(best.value)} wins"
        else:
            value = format_value(best.value, DisplayUnit.CURRENCY, settings.currency_symbol)
        day = best.date.isoformat() if best.date else "-"
        if best.is_recent:
            day += " [yellow]new[/yellow]"
        table.add_row(best.title, value, day, best.description)

    console.print(table)
