from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer

from retail_analytics.analysis import build_payload, run_analysis
from retail_analytics.config import get_settings
from retail_analytics.domain.store import find_duplicate_ids
from retail_analytics.domain.validator import validate_all
from retail_analytics.errors import RetailAnalyticsError
from retail_analytics.loader import read_rows
from retail_analytics.reporter import print_records, print_rejected, print_report
from retail_analytics.utils.logging import configure_logging

app = typer.Typer(help="Retail sales analytics CLI.")


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"data={settings.data_path} | validation={settings.validation_mode} | "
        f"results={settings.results_dir} persist={settings.persist_results} | "
        f"log_level={settings.log_level} json_logs={settings.json_logs}"
    )


@app.command()
def report(
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        help="CSV file to analyse (default from settings).",
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Fail on the first invalid row, or skip invalid rows (default from settings).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of tables.",
    ),
    persist: Optional[bool] = typer.Option(
        None,
        "--persist/--no-persist",
        help="Write latest.json and a timestamped archive to the results directory.",
    ),
    preview: int = typer.Option(
        0,
        "--preview",
        min=0,
        help="Also show the first N stored records.",
    ),
) -> None:
    """
    Load a CSV, validate it and print the aggregate report.
    """
    _setup_logging()
    try:
        result = run_analysis(source=source, strict=strict, persist=persist)
    except (RetailAnalyticsError, OSError) as exc:
        typer.echo(f"Analysis failed: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(build_payload(result), indent=2))
        return

    if preview:
        print_records(result.store.head(preview))
    print_report(result.report)
    if result.rejected:
        print_rejected(result.rejected)
    if result.persisted_to:
        typer.echo(f"Report written to {result.persisted_to}")


@app.command()
def check(
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        help="CSV file to check (default from settings).",
    ),
) -> None:
    """
    List rows that would be rejected by validation or by a repeated
    transaction_id, without building a report.
    """
    _setup_logging()
    path = source or Path(get_settings().data_path)
    try:
        outcome = validate_all(read_rows(path), strict=False)
    except (RetailAnalyticsError, OSError) as exc:
        typer.echo(f"Check failed: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Valid rows: {outcome.admitted_count}, invalid rows: {outcome.rejected_count}")
    print_rejected(outcome.rejected)
    duplicates = find_duplicate_ids(outcome.records)
    if duplicates:
        typer.echo(f"Duplicate transaction_id(s): {', '.join(map(str, duplicates))}")
    if outcome.rejected or duplicates:
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
