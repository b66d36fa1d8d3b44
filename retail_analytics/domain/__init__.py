"""
Domain package for Retail Analytics.

Exports the record model, its validator and the immutable record store.
Keep this package focused on data definitions and validation concerns.
"""

from retail_analytics.domain.models import FIELD_NAMES, Gender, TransactionRecord
from retail_analytics.domain.store import RecordStore, find_duplicate_ids
from retail_analytics.domain.validator import (
    RejectedRow,
    ValidationOutcome,
    validate,
    validate_all,
)

__all__ = [
    "FIELD_NAMES",
    "Gender",
    "RecordStore",
    "RejectedRow",
    "TransactionRecord",
    "ValidationOutcome",
    "find_duplicate_ids",
    "validate",
    "validate_all",
]
