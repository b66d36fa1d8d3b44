"""
Report builder: every aggregate of the catalog under a stable field name.

Aggregates run eagerly in catalog order. An aggregate that is undefined for
the store (AggregationError, e.g. min_max_sale on an empty store) is reported
as None and its field name is recorded in `Report.unavailable` together with
the reason. Any other exception propagates to the caller.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field

from retail_analytics.aggregator import (
    AGGREGATES,
    CategorySummary,
    DailySales,
    LabelledSales,
    PeakDays,
    PeakMonths,
    SaleRange,
)
from retail_analytics.domain.store import RecordStore
from retail_analytics.errors import AggregationError
from retail_analytics.utils.logging import get_logger

log = get_logger(__name__)


class Report(BaseModel):
    """
    Snapshot of the aggregate catalog for one store.

    Optional fields are None only when the aggregate is undefined for the
    store; `unavailable` then explains why.
    """

    transaction_count: int
    unique_customer_count: int
    total_revenue: Decimal
    average_transaction_value: Optional[Decimal] = None
    min_max_sale: Optional[SaleRange] = None
    distinct_categories: CategorySummary
    average_price_per_unit: Optional[Decimal] = None
    total_quantity: int
    sales_by_date: Tuple[DailySales, ...] = ()
    sales_by_weekday: Tuple[LabelledSales, ...] = ()
    sales_by_month: Tuple[LabelledSales, ...] = ()
    peak_sales_day: Optional[PeakDays] = None
    peak_sales_month: Optional[PeakMonths] = None
    unavailable: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def is_complete(self) -> bool:
        return not self.unavailable


def build_report(store: RecordStore) -> Report:
    """
    Compute every aggregate for `store` and assemble the Report.
    """
    values: Dict[str, Any] = {}
    unavailable: Dict[str, str] = {}

    for name, aggregate in AGGREGATES.items():
        try:
            values[name] = aggregate(store)
        except AggregationError as exc:
            log.warning(f"Aggregate unavailable: {name}", extra={"aggregate": name, "reason": str(exc)})
            values[name] = None
            unavailable[name] = str(exc)

    log.info(
        "Report built",
        extra={"records": store.count(), "unavailable": sorted(unavailable)},
    )
    return Report(**values, unavailable=unavailable)


__all__ = ["Report", "build_report"]
