"""
End-to-end tests for the analysis pipeline.

The synthetic tests generate a CSV with the data script and run the full
pipeline. The dataset scenario runs against the published retail sales CSV
and needs RETAIL_SALES_CSV to point at it.

Run with: RETAIL_SALES_CSV=/path/to/retail_sales.csv pytest tests/integration/
"""

from __future__ import annotations

import os
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from retail_analytics.analysis import run_analysis
from scripts.generate_data import _generate_rows_csv

# Synthetic dataset constants
SYNTHETIC_ROWS = 500
SYNTHETIC_CUSTOMERS = 155
SYNTHETIC_SEED = 42

# Published dataset expectations (2000 rows, 13 with null columns)
EXPECTED_TRANSACTIONS = 1987
EXPECTED_CUSTOMERS = 155
EXPECTED_REVENUE = Decimal("908230")
EXPECTED_AVERAGE = Decimal("457.09")
EXPECTED_MIN_SALE = Decimal("25")
EXPECTED_MAX_SALE = Decimal("2000")
EXPECTED_QUANTITY = 4995
EXPECTED_PEAK_DAY = date(2022, 10, 10)
EXPECTED_PEAK_MONTH_TOTAL = Decimal("141025")

DATASET = os.getenv("RETAIL_SALES_CSV")

pytestmark = pytest.mark.usefixtures("fresh_settings")


class TestSyntheticPipeline:
    @pytest.fixture
    def synthetic_csv(self, tmp_path: Path) -> Path:
        path = tmp_path / "retail_sales.csv"
        _generate_rows_csv(
            path, rows=SYNTHETIC_ROWS, seed=SYNTHETIC_SEED, customers=SYNTHETIC_CUSTOMERS
        )
        return path

    def test_partition_laws_hold(self, synthetic_csv: Path):
        report = run_analysis(source=synthetic_csv, strict=True, persist=False).report

        assert report.transaction_count == SYNTHETIC_ROWS
        assert report.unique_customer_count <= SYNTHETIC_CUSTOMERS
        for breakdown in (report.sales_by_date, report.sales_by_weekday, report.sales_by_month):
            assert sum((entry.total for entry in breakdown), Decimal("0")) == report.total_revenue

    def test_report_is_complete_and_repeatable(self, synthetic_csv: Path):
        first = run_analysis(source=synthetic_csv, strict=True, persist=False).report
        second = run_analysis(source=synthetic_csv, strict=True, persist=False).report

        assert first.is_complete
        assert first == second
        assert set(first.distinct_categories.categories) == {"Beauty", "Clothing", "Electronics"}


@pytest.mark.skipif(
    not DATASET,
    reason="Dataset scenario requires RETAIL_SALES_CSV pointing at the published CSV",
)
class TestPublishedDataset:
    @pytest.fixture(scope="class")
    def result(self):
        return run_analysis(source=DATASET, strict=False, persist=False)

    def test_null_rows_are_rejected(self, result):
        assert result.report.transaction_count == EXPECTED_TRANSACTIONS
        assert result.rejected

    def test_basic_metrics(self, result):
        report = result.report

        assert report.unique_customer_count == EXPECTED_CUSTOMERS
        assert report.total_revenue == EXPECTED_REVENUE
        assert report.average_transaction_value == EXPECTED_AVERAGE
        assert report.min_max_sale == (EXPECTED_MIN_SALE, EXPECTED_MAX_SALE)
        assert set(report.distinct_categories.categories) == {"Beauty", "Clothing", "Electronics"}
        assert report.distinct_categories.count == 3
        assert report.total_quantity == EXPECTED_QUANTITY

    def test_peaks(self, result):
        report = result.report

        assert EXPECTED_PEAK_DAY in report.peak_sales_day.dates
        assert "December" in report.peak_sales_month.months
        assert report.peak_sales_month.total == EXPECTED_PEAK_MONTH_TOTAL
