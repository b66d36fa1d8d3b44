"""
Synthetic retail sales generator for Retail Analytics.

Writes a deterministic pseudo-random CSV in the column layout of the public
retail sales dataset (including its `transactions_id` and `quantiy` headers),
optionally blanking a fraction of cells to exercise the data-cleaning path.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from datetime import date, timedelta
from pathlib import Path

import typer

app = typer.Typer(help="Generate a synthetic retail sales CSV.")

HEADER = [
    "transactions_id",
    "sale_date",
    "sale_time",
    "customer_id",
    "gender",
    "age",
    "category",
    "quantiy",
    "price_per_unit",
    "cogs",
    "total_sale",
]
CATEGORIES = ["Beauty", "Clothing", "Electronics"]
UNIT_PRICES = [25, 30, 50, 300, 500]
START_DATE = date(2022, 1, 1)
DAYS = 730


def _generate_rows_csv(
    csv_path: Path,
    rows: int,
    seed: int,
    customers: int = 155,
    null_rate: float = 0.0,
) -> None:
    rng = random.Random(seed)

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)

        for transaction_id in range(1, rows + 1):
            quantity = rng.randint(1, 4)
            price = rng.choice(UNIT_PRICES)
            sale_date = START_DATE + timedelta(days=rng.randrange(DAYS))
            row = [
                str(transaction_id),
                sale_date.isoformat(),
                f"{rng.randrange(24):02d}:{rng.randrange(60):02d}:{rng.randrange(60):02d}",
                str(rng.randint(1, customers)),
                rng.choice(["Male", "Female"]),
                str(rng.randint(18, 64)),
                rng.choice(CATEGORIES),
                str(quantity),
                str(price),
                f"{price * rng.uniform(0.1, 1.0):.2f}",
                str(quantity * price),
            ]
            # The key column is never blanked.
            if null_rate and rng.random() < null_rate:
                row[rng.randrange(1, len(row))] = ""
            writer.writerow(row)


@app.command()
def main(
    rows: int = typer.Option(
        2_000,
        "--rows",
        "-r",
        help="Number of transactions to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    customers: int = typer.Option(
        155,
        "--customers",
        help="Size of the customer pool.",
    ),
    null_rate: float = typer.Option(
        0.0,
        "--null-rate",
        min=0.0,
        max=1.0,
        help="Fraction of rows that get one blank cell.",
    ),
    output: Path = typer.Option(
        Path("data/retail_sales.csv"),
        "--output",
        "-o",
        help="CSV output path.",
    ),
) -> None:
    """
    Generate a synthetic retail sales CSV.
    """
    start = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)

    typer.echo(f"Generating {rows:,} rows -> {output} (seed={seed}, null_rate={null_rate})")
    _generate_rows_csv(output, rows=rows, seed=seed, customers=customers, null_rate=null_rate)
    duration = time.perf_counter() - start
    typer.echo(f"CSV generation completed in {duration:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
