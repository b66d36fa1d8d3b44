"""
Immutable, insertion-ordered collection of validated transaction records.

A store is built once per analysis run and never mutated. If the source data
changes, build a new store.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Iterator, Tuple

from retail_analytics.domain.models import TransactionRecord
from retail_analytics.errors import DuplicateKeyError
from retail_analytics.utils.logging import get_logger

log = get_logger(__name__)


def find_duplicate_ids(records: Iterable[TransactionRecord]) -> Tuple[int, ...]:
    """transaction_ids that occur more than once, in order of first appearance."""
    counts = Counter(record.transaction_id for record in records)
    return tuple(tid for tid, seen in counts.items() if seen > 1)


class RecordStore:
    """
    Read-only snapshot of TransactionRecords keyed by transaction_id.

    Use `RecordStore.build` to construct one; it rejects duplicate keys before
    any store object exists, so a failed build leaves nothing half-populated.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Tuple[TransactionRecord, ...] = ()) -> None:
        self._records = records

    @classmethod
    def build(cls, records: Iterable[TransactionRecord]) -> "RecordStore":
        """
        Build a store from records, preserving their order.

        Raises
        ------
        DuplicateKeyError
            If two records share a transaction_id.
        """
        snapshot = tuple(records)
        seen: set[int] = set()
        for record in snapshot:
            if record.transaction_id in seen:
                raise DuplicateKeyError(record.transaction_id)
            seen.add(record.transaction_id)

        log.info("Record store built", extra={"records": len(snapshot)})
        return cls(snapshot)

    def all(self) -> Tuple[TransactionRecord, ...]:
        return self._records

    def count(self) -> int:
        return len(self._records)

    def head(self, n: int = 10) -> Tuple[TransactionRecord, ...]:
        """First `n` records in insertion order."""
        return self._records[: max(n, 0)]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TransactionRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(count={len(self._records)})"


__all__ = ["RecordStore", "find_duplicate_ids"]
