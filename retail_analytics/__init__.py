"""
Retail Analytics - aggregation core for retail transaction datasets.

This package answers a fixed catalog of business questions over an in-memory,
validated table of retail sales:

- Basic metrics (counts, revenue, averages, sale range, categories, quantity)
- Time-based breakdowns (per date, per weekday, per month)
- Tie-inclusive peak day and peak month lookups

Records are validated into frozen models, collected in an immutable store, and
reduced by pure aggregate functions assembled into a single report.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from retail_analytics.aggregator import AGGREGATES
from retail_analytics.analysis import AnalysisResult, run_analysis
from retail_analytics.config import Settings, get_settings
from retail_analytics.domain import (
    Gender,
    RecordStore,
    RejectedRow,
    TransactionRecord,
    ValidationOutcome,
    validate,
    validate_all,
)
from retail_analytics.errors import (
    AggregationError,
    DivisionByZeroError,
    DomainError,
    DuplicateKeyError,
    EmptyStoreError,
    FieldTypeError,
    MissingFieldError,
    RetailAnalyticsError,
    SourceFormatError,
    ValidationError,
)
from retail_analytics.report import Report, build_report
from retail_analytics.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Gender",
    "TransactionRecord",
    "RecordStore",
    "RejectedRow",
    "ValidationOutcome",
    "validate",
    "validate_all",
    # Aggregation and reporting
    "AGGREGATES",
    "Report",
    "build_report",
    "AnalysisResult",
    "run_analysis",
    # Errors
    "RetailAnalyticsError",
    "ValidationError",
    "MissingFieldError",
    "FieldTypeError",
    "DomainError",
    "DuplicateKeyError",
    "SourceFormatError",
    "AggregationError",
    "EmptyStoreError",
    "DivisionByZeroError",
    # Logging
    "configure_logging",
    "get_logger",
]
