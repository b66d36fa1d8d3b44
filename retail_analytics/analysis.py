"""
Run pipeline: load a CSV, validate, build the store, report and persist.

Usage (example from CLI):
    from retail_analytics.analysis import run_analysis

    result = run_analysis(source="data/retail_sales.csv", strict=False)
    print(result.report.total_revenue)

Outputs are saved to `results/` when persistence is enabled:
- `results/latest.json` (last run)
- `results/report-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from retail_analytics.config import get_settings
from retail_analytics.domain.store import RecordStore
from retail_analytics.domain.validator import RejectedRow
from retail_analytics.loader import load_store
from retail_analytics.report import Report, build_report
from retail_analytics.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis run."""

    source: str
    store: RecordStore
    report: Report
    rejected: Tuple[RejectedRow, ...]
    duration_seconds: float
    persisted_to: Optional[Path] = None


def _rejected_payload(rejected: Tuple[RejectedRow, ...]) -> list[Dict[str, Any]]:
    return [
        {"row": row.index, "fields": list(row.fields), "error": row.error.message}
        for row in rejected
    ]


def build_payload(result: AnalysisResult) -> Dict[str, Any]:
    """JSON-ready document for a run."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "source": result.source,
        "duration_seconds": round(result.duration_seconds, 3),
        "rejected": _rejected_payload(result.rejected),
        "report": result.report.model_dump(mode="json"),
    }


def _persist_results(payload: Dict[str, Any], results_dir: Path) -> Path:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    archive_path = results_dir / f"report-{timestamp}.json"
    suffix = 1
    while archive_path.exists():
        archive_path = results_dir / f"report-{timestamp}-{suffix}.json"
        suffix += 1

    with latest_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    with archive_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Report persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})
    return latest_path


def run_analysis(
    source: Path | str | None = None,
    strict: Optional[bool] = None,
    results_dir: Path | str | None = None,
    persist: Optional[bool] = None,
) -> AnalysisResult:
    """
    Run the full load-validate-report pipeline for one CSV source.

    Parameters
    ----------
    source : Path | str | None
        CSV file to analyse. Defaults to settings.data_path.
    strict : bool | None
        Fail-fast validation. Defaults to settings.validation_mode == "strict".
    results_dir : Path | str | None
        Directory for JSON artifacts. Defaults to settings.results_dir.
    persist : bool | None
        Whether to write the report to disk. Defaults to settings.persist_results.

    Returns
    -------
    AnalysisResult
        The store, its report, rejected rows (lenient mode) and run timing.
    """
    settings = get_settings()
    effective_source = str(source or settings.data_path)
    effective_strict = settings.strict_validation if strict is None else strict
    effective_persist = settings.persist_results if persist is None else persist

    log.info(
        "[ANALYSIS START]",
        extra={"source": effective_source, "strict": effective_strict},
    )
    start = time.perf_counter()
    store, rejected = load_store(effective_source, strict=effective_strict)
    report = build_report(store)
    duration = time.perf_counter() - start

    result = AnalysisResult(
        source=effective_source,
        store=store,
        report=report,
        rejected=rejected,
        duration_seconds=duration,
    )

    if effective_persist:
        target = Path(results_dir or settings.results_dir)
        latest = _persist_results(build_payload(result), target)
        result = replace(result, persisted_to=latest)

    log.info(
        "[ANALYSIS COMPLETE]",
        extra={
            "source": effective_source,
            "records": report.transaction_count,
            "rejected": len(rejected),
            "duration": round(duration, 3),
        },
    )
    return result


__all__ = ["AnalysisResult", "build_payload", "run_analysis"]
