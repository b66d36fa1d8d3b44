"""
Aggregate catalog over a RecordStore.

Every aggregate is a pure, deterministic read of the store: no hidden state,
no shared accumulator, identical output on repeated calls. Grouping aggregates
are single reduce-by-key passes over the store's records.

Money is summed as Decimal, so totals are exact. Averages are rounded to two
decimal places with ROUND_HALF_UP. Aggregates that are undefined on an empty
store raise instead of returning a misleading zero.

Usage:
    from retail_analytics.aggregator import AGGREGATES, total_revenue

    revenue = total_revenue(store)
    results = {name: fn(store) for name, fn in AGGREGATES.items()}
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Hashable, NamedTuple, Tuple, TypeVar

from retail_analytics.domain.models import TransactionRecord
from retail_analytics.domain.store import RecordStore
from retail_analytics.errors import DivisionByZeroError, EmptyStoreError

K = TypeVar("K", bound=Hashable)

# Fixed English names; calendar.day_name/month_name follow the process locale.
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MONTH_NAMES: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_ZERO = Decimal("0")
_CENT = Decimal("0.01")


class SaleRange(NamedTuple):
    minimum: Decimal
    maximum: Decimal


class CategorySummary(NamedTuple):
    categories: Tuple[str, ...]
    count: int


class DailySales(NamedTuple):
    sale_date: date
    total: Decimal


class LabelledSales(NamedTuple):
    label: str
    total: Decimal


class PeakDays(NamedTuple):
    dates: Tuple[date, ...]
    total: Decimal


class PeakMonths(NamedTuple):
    months: Tuple[str, ...]
    total: Decimal


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def _month_name(record: TransactionRecord) -> str:
    return MONTH_NAMES[record.sale_date.month - 1]


def _weekday_name(record: TransactionRecord) -> str:
    return WEEKDAY_NAMES[record.sale_date.weekday()]


def _sum_sales_by(
    store: RecordStore, key: Callable[[TransactionRecord], K]
) -> Dict[K, Decimal]:
    """Sum total_sale per key; keys keep first-seen order."""
    totals: Dict[K, Decimal] = {}
    for record in store:
        group = key(record)
        totals[group] = totals.get(group, _ZERO) + record.total_sale
    return totals


def _ties_for_max(totals: Dict[K, Decimal]) -> Tuple[list[K], Decimal]:
    best = max(totals.values())
    return [group for group, total in totals.items() if total == best], best


# --------------------------------------------------------------------------- #
# Basic metrics
# --------------------------------------------------------------------------- #


def transaction_count(store: RecordStore) -> int:
    return store.count()


def unique_customer_count(store: RecordStore) -> int:
    return len({record.customer_id for record in store})


def total_revenue(store: RecordStore) -> Decimal:
    return sum((record.total_sale for record in store), _ZERO)


def average_transaction_value(store: RecordStore) -> Decimal:
    """
    Mean total_sale per transaction, rounded to cents (ROUND_HALF_UP).

    Raises
    ------
    DivisionByZeroError
        If the store is empty.
    """
    count = store.count()
    if count == 0:
        raise DivisionByZeroError("average_transaction_value")
    return round_money(total_revenue(store) / Decimal(count))


def min_max_sale(store: RecordStore) -> SaleRange:
    """
    Smallest and largest total_sale.

    Raises
    ------
    EmptyStoreError
        If the store is empty; zero is not a valid stand-in for a sale.
    """
    if store.count() == 0:
        raise EmptyStoreError("min_max_sale")
    sales = [record.total_sale for record in store]
    return SaleRange(minimum=min(sales), maximum=max(sales))


def distinct_categories(store: RecordStore) -> CategorySummary:
    categories = tuple(sorted({record.category for record in store}))
    return CategorySummary(categories=categories, count=len(categories))


def average_price_per_unit(store: RecordStore) -> Decimal:
    """
    Mean price_per_unit, rounded to cents (ROUND_HALF_UP).

    Raises
    ------
    DivisionByZeroError
        If the store is empty.
    """
    count = store.count()
    if count == 0:
        raise DivisionByZeroError("average_price_per_unit")
    unit_prices = sum((record.price_per_unit for record in store), _ZERO)
    return round_money(unit_prices / Decimal(count))


def total_quantity(store: RecordStore) -> int:
    return sum(record.quantity for record in store)


# --------------------------------------------------------------------------- #
# Time-based breakdowns
# --------------------------------------------------------------------------- #


def sales_by_date(store: RecordStore) -> Tuple[DailySales, ...]:
    """Daily sales totals, most recent date first."""
    totals = _sum_sales_by(store, lambda record: record.sale_date)
    return tuple(
        DailySales(sale_date=day, total=totals[day]) for day in sorted(totals, reverse=True)
    )


def sales_by_weekday(store: RecordStore) -> Tuple[LabelledSales, ...]:
    """
    Sales totals per weekday name in Monday..Sunday order.

    Weekdays without any sale are omitted, not zero-filled.
    """
    totals = _sum_sales_by(store, _weekday_name)
    return tuple(
        LabelledSales(label=name, total=totals[name]) for name in WEEKDAY_NAMES if name in totals
    )


def sales_by_month(store: RecordStore) -> Tuple[LabelledSales, ...]:
    """
    Sales totals per month name.

    Months are grouped by name across years and ordered by the month number
    of each group's earliest sale date.
    """
    totals = _sum_sales_by(store, _month_name)
    earliest: Dict[str, date] = {}
    for record in store:
        name = _month_name(record)
        if name not in earliest or record.sale_date < earliest[name]:
            earliest[name] = record.sale_date

    ordered = sorted(totals, key=lambda name: earliest[name].month)
    return tuple(LabelledSales(label=name, total=totals[name]) for name in ordered)


def peak_sales_day(store: RecordStore) -> PeakDays:
    """
    Every date whose daily total equals the highest daily total.

    Ties are all returned, in ascending date order.

    Raises
    ------
    EmptyStoreError
        If the store is empty.
    """
    if store.count() == 0:
        raise EmptyStoreError("peak_sales_day")
    days, best = _ties_for_max(_sum_sales_by(store, lambda record: record.sale_date))
    return PeakDays(dates=tuple(sorted(days)), total=best)


def peak_sales_month(store: RecordStore) -> PeakMonths:
    """
    Every month name whose total equals the highest monthly total.

    Ties are all returned, in calendar order.

    Raises
    ------
    EmptyStoreError
        If the store is empty.
    """
    if store.count() == 0:
        raise EmptyStoreError("peak_sales_month")
    months, best = _ties_for_max(_sum_sales_by(store, _month_name))
    return PeakMonths(months=tuple(sorted(months, key=MONTH_NAMES.index)), total=best)


# Report field name -> aggregate, in report order.
AGGREGATES: Dict[str, Callable[[RecordStore], Any]] = {
    "transaction_count": transaction_count,
    "unique_customer_count": unique_customer_count,
    "total_revenue": total_revenue,
    "average_transaction_value": average_transaction_value,
    "min_max_sale": min_max_sale,
    "distinct_categories": distinct_categories,
    "average_price_per_unit": average_price_per_unit,
    "total_quantity": total_quantity,
    "sales_by_date": sales_by_date,
    "sales_by_weekday": sales_by_weekday,
    "sales_by_month": sales_by_month,
    "peak_sales_day": peak_sales_day,
    "peak_sales_month": peak_sales_month,
}


__all__ = [
    "AGGREGATES",
    "MONTH_NAMES",
    "WEEKDAY_NAMES",
    "CategorySummary",
    "DailySales",
    "LabelledSales",
    "PeakDays",
    "PeakMonths",
    "SaleRange",
    "average_price_per_unit",
    "average_transaction_value",
    "distinct_categories",
    "min_max_sale",
    "peak_sales_day",
    "peak_sales_month",
    "round_money",
    "sales_by_date",
    "sales_by_month",
    "sales_by_weekday",
    "total_quantity",
    "total_revenue",
    "transaction_count",
    "unique_customer_count",
]
