"""
Exception taxonomy for the retail analytics core.

Validation errors are raised per candidate row, store errors at build time and
aggregation errors only by aggregates that are undefined on an empty store.
Callers decide whether an error aborts a run; nothing here exits the process.
"""

from __future__ import annotations

from typing import Any, Iterable, Tuple


class RetailAnalyticsError(Exception):
    """Base class for every error raised by the package."""


class ValidationError(RetailAnalyticsError):
    """A raw record could not be admitted as a TransactionRecord."""

    def __init__(self, fields: Iterable[str], message: str) -> None:
        self.fields: Tuple[str, ...] = tuple(fields)
        self.message = message
        self.row_index: int | None = None
        super().__init__(message)

    def at_row(self, index: int) -> "ValidationError":
        """Tag the error with the zero-based position of the offending row."""
        self.row_index = index
        return self

    def __str__(self) -> str:
        if self.row_index is None:
            return self.message
        return f"row {self.row_index}: {self.message}"


class MissingFieldError(ValidationError):
    """One or more required fields are absent, null or blank."""

    def __init__(self, fields: Iterable[str]) -> None:
        names = tuple(fields)
        super().__init__(names, f"missing required field(s): {', '.join(names)}")


class FieldTypeError(ValidationError, TypeError):
    """A field value cannot be coerced to its semantic type."""

    def __init__(self, field: str, value: Any, detail: str = "") -> None:
        self.value = value
        message = f"{field}: cannot interpret {value!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__((field,), message)


class DomainError(ValidationError):
    """A field value is well-typed but outside its allowed domain."""

    def __init__(self, field: str, value: Any, detail: str = "") -> None:
        self.value = value
        message = f"{field}: {value!r} is out of range"
        if detail:
            message = f"{field}: {value!r} is out of range ({detail})"
        super().__init__((field,), message)


class DuplicateKeyError(RetailAnalyticsError):
    """Two records in one store share a transaction_id."""

    def __init__(self, transaction_id: int) -> None:
        self.transaction_id = transaction_id
        super().__init__(f"duplicate transaction_id: {transaction_id}")


class SourceFormatError(RetailAnalyticsError):
    """A source file cannot be decoded or parsed as a CSV table."""

    def __init__(self, source: str, detail: str, line: int | None = None) -> None:
        self.source = source
        self.line = line
        location = source if line is None else f"{source}, line {line}"
        super().__init__(f"{location}: {detail}")


class AggregationError(RetailAnalyticsError):
    """An aggregate is undefined for the given store."""


class EmptyStoreError(AggregationError):
    """The aggregate needs at least one record."""

    def __init__(self, aggregate: str) -> None:
        self.aggregate = aggregate
        super().__init__(f"{aggregate} is undefined for an empty store")


class DivisionByZeroError(AggregationError, ZeroDivisionError):
    """An average was requested over zero records."""

    def __init__(self, aggregate: str) -> None:
        self.aggregate = aggregate
        super().__init__(f"{aggregate} divides by a zero record count")


__all__ = [
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
]
