from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from retail_analytics.domain.store import RecordStore
from retail_analytics.report import Report, build_report

UNDEFINED_ON_EMPTY = {
    "average_transaction_value",
    "min_max_sale",
    "average_price_per_unit",
    "peak_sales_day",
    "peak_sales_month",
}


def test_report_holds_every_aggregate(small_store):
    report = build_report(small_store)

    assert report.is_complete
    assert report.transaction_count == 5
    assert report.unique_customer_count == 3
    assert report.total_revenue == Decimal("1090")
    assert report.average_transaction_value == Decimal("218.00")
    assert report.min_max_sale == (Decimal("90"), Decimal("500"))
    assert report.distinct_categories.count == 3
    assert report.average_price_per_unit == Decimal("181.00")
    assert report.total_quantity == 11
    assert report.sales_by_date[0].sale_date == date(2023, 1, 2)
    assert [entry.label for entry in report.sales_by_month] == ["January", "October", "December"]
    assert report.peak_sales_day.dates == (date(2022, 10, 10),)
    assert report.peak_sales_month.months == ("October",)


def test_report_is_deterministic(small_store):
    assert build_report(small_store) == build_report(small_store)


def test_empty_store_marks_undefined_aggregates_unavailable():
    report = build_report(RecordStore.build([]))

    assert not report.is_complete
    assert set(report.unavailable) == UNDEFINED_ON_EMPTY
    for name in UNDEFINED_ON_EMPTY:
        assert getattr(report, name) is None
    assert "empty store" in report.unavailable["min_max_sale"]
    assert "zero record count" in report.unavailable["average_transaction_value"]

    assert report.transaction_count == 0
    assert report.total_revenue == Decimal("0")
    assert report.sales_by_date == ()


def test_report_serializes_to_json(small_store):
    payload = json.loads(json.dumps(build_report(small_store).model_dump(mode="json")))

    assert payload["transaction_count"] == 5
    assert payload["sales_by_weekday"][0][0] == "Monday"
    assert payload["peak_sales_day"][0] == ["2022-10-10"]
    assert payload["unavailable"] == {}


def test_report_is_frozen(small_store):
    report = build_report(small_store)

    with pytest.raises(PydanticValidationError):
        report.transaction_count = 0
    assert isinstance(report, Report)
