"""
CSV loading for retail sales exports.

Turns a CSV file with a header row into raw field mappings for the validator.
Headers are stripped and lowercased, the public dataset's legacy column names
are mapped onto record fields, and blank cells become None so they are
reported as missing rather than mistyped.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from retail_analytics.domain.store import RecordStore
from retail_analytics.domain.validator import RejectedRow, validate_all
from retail_analytics.errors import SourceFormatError
from retail_analytics.utils.logging import get_logger

log = get_logger(__name__)

# Column names found in published copies of the dataset.
HEADER_ALIASES: Dict[str, str] = {
    "transactions_id": "transaction_id",
    "quantiy": "quantity",
}


def normalize_header(name: str) -> str:
    key = name.strip().lower().replace(" ", "_")
    return HEADER_ALIASES.get(key, key)


def read_rows(path: Path | str) -> Iterator[Dict[str, Optional[str]]]:
    """
    Yield one raw mapping per data row of the CSV at `path`.

    Short rows yield None for their trailing fields. Raises SourceFormatError
    if the file is not UTF-8, is not parseable as CSV, or has a row with more
    cells than the header.
    """
    csv_path = Path(path)
    with csv_path.open("r", newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        try:
            header = next(reader, None)
            if header is None:
                return
            fields = [normalize_header(name) for name in header]
            for row in reader:
                if not any(cell.strip() for cell in row):
                    continue
                if len(row) > len(fields):
                    raise SourceFormatError(
                        str(csv_path),
                        f"expected {len(fields)} cells, found {len(row)}",
                        line=reader.line_num,
                    )
                cells = row + [""] * (len(fields) - len(row))
                yield {field: (cell if cell.strip() else None) for field, cell in zip(fields, cells)}
        except UnicodeDecodeError as exc:
            raise SourceFormatError(str(csv_path), f"not valid UTF-8 ({exc.reason})") from exc
        except csv.Error as exc:
            raise SourceFormatError(str(csv_path), str(exc), line=reader.line_num) from exc


def load_store(
    path: Path | str, strict: bool = True
) -> Tuple[RecordStore, Tuple[RejectedRow, ...]]:
    """
    Read, validate and store the CSV at `path`.

    Parameters
    ----------
    path : Path | str
        CSV file with a header row.
    strict : bool
        Fail on the first invalid row (True) or skip and collect invalid rows.

    Returns
    -------
    tuple[RecordStore, tuple[RejectedRow, ...]]
        The built store and the rows rejected in lenient mode.
    """
    log.info("Loading records", extra={"source": str(path), "strict": strict})
    outcome = validate_all(read_rows(path), strict=strict)
    store = RecordStore.build(outcome.records)
    return store, outcome.rejected


__all__ = ["HEADER_ALIASES", "load_store", "normalize_header", "read_rows"]
