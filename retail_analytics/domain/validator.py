"""
Record validation: raw field mappings in, TransactionRecord out.

Completeness is checked first so that every absent field is reported in one
MissingFieldError. Type coercion and bounds are delegated to the pydantic
model and its failures are translated into FieldTypeError or DomainError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Tuple

from pydantic import ValidationError as PydanticValidationError

from retail_analytics.domain.models import FIELD_NAMES, TransactionRecord
from retail_analytics.errors import (
    DomainError,
    FieldTypeError,
    MissingFieldError,
    ValidationError,
)
from retail_analytics.utils.logging import get_logger

log = get_logger(__name__)

# pydantic error types that mean "well-typed but out of bounds"
_DOMAIN_ERROR_TYPES = frozenset(
    {
        "enum",
        "greater_than",
        "greater_than_equal",
        "less_than",
        "less_than_equal",
        "string_too_short",
    }
)


@dataclass(frozen=True)
class RejectedRow:
    """A candidate row that failed validation in lenient mode."""

    index: int
    error: ValidationError

    @property
    def fields(self) -> Tuple[str, ...]:
        return self.error.fields


@dataclass(frozen=True)
class ValidationOutcome:
    """Admitted records (input order) and the rows rejected along the way."""

    records: Tuple[TransactionRecord, ...]
    rejected: Tuple[RejectedRow, ...] = ()

    @property
    def admitted_count(self) -> int:
        return len(self.records)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _translate(exc: PydanticValidationError, values: Mapping[str, Any]) -> ValidationError:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else "record"
    value = values.get(field)
    if error["type"] in _DOMAIN_ERROR_TYPES:
        return DomainError(field, value, error["msg"])
    return FieldTypeError(field, value, error["msg"])


def validate(candidate: Mapping[str, Any]) -> TransactionRecord:
    """
    Validate one raw record.

    Parameters
    ----------
    candidate : Mapping[str, Any]
        Field name to raw value. Strings are stripped; blank strings count as
        absent. Keys outside the eleven record fields are ignored.

    Returns
    -------
    TransactionRecord
        The fully-typed, frozen record.

    Raises
    ------
    MissingFieldError
        If any field is absent, None or blank. Names every such field.
    FieldTypeError
        If a value cannot be coerced to its field type.
    DomainError
        If a value is outside its allowed domain (gender, numeric bounds).
    """
    values = {name: _clean(candidate.get(name)) for name in FIELD_NAMES}
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise MissingFieldError(missing)

    try:
        return TransactionRecord.model_validate(values)
    except PydanticValidationError as exc:
        raise _translate(exc, values) from exc


def validate_all(
    candidates: Iterable[Mapping[str, Any]], strict: bool = True
) -> ValidationOutcome:
    """
    Validate a batch of raw records.

    In strict mode the first invalid row raises its error, tagged with the
    row's zero-based index. In lenient mode invalid rows are skipped and
    returned as RejectedRow entries alongside the admitted records.
    """
    records: list[TransactionRecord] = []
    rejected: list[RejectedRow] = []

    for index, candidate in enumerate(candidates):
        try:
            records.append(validate(candidate))
        except ValidationError as exc:
            exc.at_row(index)
            if strict:
                log.error("Rejected row aborts load", extra={"row": index, "fields": exc.fields})
                raise
            log.warning(f"Skipping invalid row: {exc}", extra={"row": index, "fields": exc.fields})
            rejected.append(RejectedRow(index=index, error=exc))

    log.info(
        "Validation complete",
        extra={"admitted": len(records), "rejected": len(rejected), "strict": strict},
    )
    return ValidationOutcome(records=tuple(records), rejected=tuple(rejected))


__all__ = ["RejectedRow", "ValidationOutcome", "validate", "validate_all"]
