from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from retail_analytics.domain.models import TransactionRecord
from retail_analytics.domain.validator import RejectedRow
from retail_analytics.report import Report

_NOT_AVAILABLE = "[dim]n/a[/dim]"


def _money(value) -> str:
    return f"{value:,.2f}"


def _metrics_table(report: Report) -> Table:
    table = Table(title="Basic Metrics", box=box.ROUNDED)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="bold green")

    sale_range = report.min_max_sale
    categories = report.distinct_categories

    rows = [
        ("Transactions", f"{report.transaction_count:,}"),
        ("Unique customers", f"{report.unique_customer_count:,}"),
        ("Total revenue", _money(report.total_revenue)),
        (
            "Average transaction value",
            _money(report.average_transaction_value)
            if report.average_transaction_value is not None
            else _NOT_AVAILABLE,
        ),
        ("Minimum sale", _money(sale_range.minimum) if sale_range else _NOT_AVAILABLE),
        ("Maximum sale", _money(sale_range.maximum) if sale_range else _NOT_AVAILABLE),
        (
            "Categories",
            f"{categories.count} ({escape(', '.join(categories.categories))})"
            if categories.count
            else "0",
        ),
        (
            "Average price per unit",
            _money(report.average_price_per_unit)
            if report.average_price_per_unit is not None
            else _NOT_AVAILABLE,
        ),
        ("Total quantity", f"{report.total_quantity:,}"),
    ]
    for label, value in rows:
        table.add_row(label, value)
    return table


def _breakdown_table(title: str, header: str, rows: Sequence[tuple]) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column(header, style="cyan", no_wrap=True)
    table.add_column("Sales", justify="right", style="green")
    for key, total in rows:
        table.add_row(escape(str(key)), _money(total))
    return table


def _peaks_table(report: Report) -> Table:
    table = Table(title="Peaks", box=box.ROUNDED, caption="All ties are listed")
    table.add_column("Peak", style="cyan", no_wrap=True)
    table.add_column("Keys", style="magenta")
    table.add_column("Sales", justify="right", style="bold green")

    if report.peak_sales_day:
        days = ", ".join(day.isoformat() for day in report.peak_sales_day.dates)
        table.add_row("Day", days, _money(report.peak_sales_day.total))
    else:
        table.add_row("Day", _NOT_AVAILABLE, _NOT_AVAILABLE)

    if report.peak_sales_month:
        months = ", ".join(report.peak_sales_month.months)
        table.add_row("Month", months, _money(report.peak_sales_month.total))
    else:
        table.add_row("Month", _NOT_AVAILABLE, _NOT_AVAILABLE)
    return table


def print_report(
    report: Report,
    console: Optional[Console] = None,
    daily_rows: int = 10,
) -> None:
    """
    Render a report as rich tables.

    Daily sales are truncated to the `daily_rows` most recent dates.
    """
    console = console or Console()

    console.print(_metrics_table(report))

    daily = report.sales_by_date
    title = "Sales by Date (most recent first)"
    if len(daily) > daily_rows:
        title = f"{title}\n[dim]showing {daily_rows} of {len(daily)} dates[/dim]"
    console.print(_breakdown_table(title, "Date", daily[:daily_rows]))
    console.print(_breakdown_table("Sales by Weekday", "Weekday", report.sales_by_weekday))
    console.print(_breakdown_table("Sales by Month", "Month", report.sales_by_month))
    console.print(_peaks_table(report))

    for name, reason in report.unavailable.items():
        console.print(f"[yellow]{name} unavailable:[/yellow] {escape(reason)}")


def print_records(records: Sequence[TransactionRecord], console: Optional[Console] = None) -> None:
    """
    Render leading store records, one row per transaction.
    """
    console = console or Console()

    table = Table(title=f"First {len(records)} Records", box=box.ROUNDED)
    for name, justify in (
        ("ID", "right"),
        ("Date", "left"),
        ("Time", "left"),
        ("Customer", "right"),
        ("Gender", "left"),
        ("Age", "right"),
        ("Category", "left"),
        ("Qty", "right"),
        ("Unit price", "right"),
        ("Total", "right"),
    ):
        table.add_column(name, justify=justify)
    for record in records:
        table.add_row(
            str(record.transaction_id),
            record.sale_date.isoformat(),
            record.sale_time.isoformat(),
            str(record.customer_id),
            record.gender.value,
            str(record.age),
            escape(record.category),
            str(record.quantity),
            _money(record.price_per_unit),
            _money(record.total_sale),
        )
    console.print(table)


def print_rejected(rejected: Sequence[RejectedRow], console: Optional[Console] = None) -> None:
    """
    Render rows rejected by lenient validation.
    """
    console = console or Console()

    if not rejected:
        console.print("[green]No invalid rows found.[/green]")
        return

    table = Table(
        title=f"Rejected Rows ({len(rejected)})",
        box=box.ROUNDED,
        caption="Row numbers are zero-based data rows",
    )
    table.add_column("Row", justify="right", style="magenta")
    table.add_column("Fields", style="cyan")
    table.add_column("Error", style="red")
    for row in rejected:
        table.add_row(str(row.index), ", ".join(row.fields), escape(row.error.message))
    console.print(table)


__all__ = ["print_records", "print_rejected", "print_report"]
