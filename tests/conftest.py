"""
Pytest configuration for Retail Analytics.

Provides fixtures for:
- Raw row and record factories
- A small hand-checked store with known aggregate answers
- CSV files on disk for loader and pipeline tests
- Settings cache isolation
"""

from __future__ import annotations

import csv
from datetime import date, time
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List

import pytest

from retail_analytics.config import get_settings
from retail_analytics.domain.models import Gender, TransactionRecord
from retail_analytics.domain.store import RecordStore

CSV_HEADER = [
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

# (id, date, customer, category, quantity, unit price, total)
SMALL_DATASET = [
    (1, date(2022, 10, 10), 1, "Beauty", 2, "50", "100"),
    (2, date(2022, 10, 10), 2, "Clothing", 1, "500", "500"),
    (3, date(2022, 10, 11), 1, "Electronics", 3, "30", "90"),
    (4, date(2022, 12, 24), 3, "Clothing", 4, "25", "100"),
    (5, date(2023, 1, 2), 2, "Beauty", 1, "300", "300"),
]


@pytest.fixture(scope="session")
def raw_row() -> Callable[..., Dict[str, Any]]:
    """
    Factory for a valid raw record (string values, as a CSV loader yields).

    Keyword overrides replace fields; pass `drop=[...]` to remove keys.
    """

    def _factory(drop: Iterable[str] = (), **overrides: Any) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "transaction_id": "180",
            "sale_date": "2022-11-05",
            "sale_time": "10:47:00",
            "customer_id": "117",
            "gender": "Male",
            "age": "41",
            "category": "Clothing",
            "quantity": "3",
            "price_per_unit": "300",
            "cogs": "129",
            "total_sale": "900",
        }
        row.update(overrides)
        for name in drop:
            row.pop(name, None)
        return row

    return _factory


@pytest.fixture(scope="session")
def make_record() -> Callable[..., TransactionRecord]:
    """
    Factory for TransactionRecord with sensible defaults for unneeded fields.
    """

    def _factory(
        transaction_id: int,
        sale_date: date = date(2022, 1, 3),
        total_sale: Decimal | str | int = "100",
        customer_id: int = 1,
        category: str = "Beauty",
        quantity: int = 1,
        price_per_unit: Decimal | str | int | None = None,
    ) -> TransactionRecord:
        total = Decimal(str(total_sale))
        return TransactionRecord(
            transaction_id=transaction_id,
            sale_date=sale_date,
            sale_time=time(12, 0),
            customer_id=customer_id,
            gender=Gender.FEMALE,
            age=30,
            category=category,
            quantity=quantity,
            price_per_unit=Decimal(str(price_per_unit)) if price_per_unit is not None else total,
            cogs=Decimal("10"),
            total_sale=total,
        )

    return _factory


@pytest.fixture(scope="session")
def small_store(make_record) -> RecordStore:
    """
    Five records whose aggregates are easy to check by hand.

    Revenue 1090, quantity 11, customers {1, 2, 3}; 2022-10-10 is the peak day
    (600) and October the peak month (690). January 2023 is the only record
    of its month.
    """
    return RecordStore.build(
        make_record(
            transaction_id=tid,
            sale_date=day,
            customer_id=customer,
            category=category,
            quantity=quantity,
            price_per_unit=price,
            total_sale=total,
        )
        for tid, day, customer, category, quantity, price, total in SMALL_DATASET
    )


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[List[List[str]]], Path]:
    """
    Write rows (without header) to a CSV in the public dataset's layout.
    """

    def _write(rows: List[List[str]], name: str = "retail_sales.csv") -> Path:
        path = tmp_path / name
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            writer.writerows(rows)
        return path

    return _write


@pytest.fixture
def small_csv(write_csv) -> Path:
    """SMALL_DATASET as a CSV file."""
    rows = [
        [
            str(tid),
            day.isoformat(),
            "09:30:00",
            str(customer),
            "Female",
            "30",
            category,
            str(quantity),
            price,
            "10",
            total,
        ]
        for tid, day, customer, category, quantity, price, total in SMALL_DATASET
    ]
    return write_csv(rows)


@pytest.fixture
def fresh_settings():
    """Settings are cached per process; isolate env overrides per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
