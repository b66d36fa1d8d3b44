from __future__ import annotations

from io import StringIO

from rich.console import Console

from retail_analytics.domain.store import RecordStore
from retail_analytics.domain.validator import validate_all
from retail_analytics.report import build_report
from retail_analytics.reporter import print_records, print_rejected, print_report


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, width=120, color_system=None), buffer


def test_print_report_renders_every_section(small_store):
    console, buffer = _console()

    print_report(build_report(small_store), console=console)

    output = buffer.getvalue()
    for title in ("Basic Metrics", "Sales by Date", "Sales by Weekday", "Sales by Month", "Peaks"):
        assert title in output
    assert "1,090.00" in output
    assert "Beauty, Clothing, Electronics" in output


def test_print_report_truncates_daily_rows(small_store):
    console, buffer = _console()

    print_report(build_report(small_store), console=console, daily_rows=2)

    output = buffer.getvalue()
    assert "showing 2 of 4 dates" in output
    assert "2022-12-24" in output
    assert "2022-10-11" not in output


def test_print_report_marks_unavailable_aggregates():
    console, buffer = _console()

    print_report(build_report(RecordStore.build([])), console=console)

    output = buffer.getvalue()
    assert "n/a" in output
    assert "min_max_sale unavailable" in output


def test_print_rejected(raw_row):
    outcome = validate_all([raw_row(age=None), raw_row(gender="[bold]x")], strict=False)
    console, buffer = _console()

    print_rejected(outcome.rejected, console=console)

    output = buffer.getvalue()
    assert "Rejected Rows (2)" in output
    assert "age" in output
    assert "[bold]x" in output


def test_print_rejected_without_rows():
    console, buffer = _console()

    print_rejected((), console=console)

    assert "No invalid rows found." in buffer.getvalue()


def test_print_records_lists_one_row_per_record(small_store):
    console, buffer = _console()

    print_records(small_store.head(2), console=console)

    output = buffer.getvalue()
    assert "First 2 Records" in output
    assert "2022-10-10" in output
    assert "Clothing" in output
    assert "Electronics" not in output
