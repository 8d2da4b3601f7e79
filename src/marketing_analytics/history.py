"""JSON-file history of completed analyses."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from marketing_analytics.exceptions import HistoryFileError
from marketing_analytics.models import AnalysisResult, Dataset, HistoryEntry


def build_history_entry(
    dataset: Dataset,
    analysis: AnalysisResult,
    timestamp: datetime | None = None,
) -> HistoryEntry:
    """Snapshot one dataset and its analysis."""
    stamp = timestamp or datetime.now(UTC)
    return HistoryEntry(
        timestamp=stamp.isoformat(),
        data_point_count=len(dataset),
        total_revenue=analysis.total_revenue,
        total_spend=analysis.total_spend,
        roi=analysis.roi,
        raw_data=[dict(row) for row in dataset.rows],
        analysis_result=analysis,
    )


def load_history(history_path: Path) -> list[HistoryEntry]:
    """Load stored entries, newest first."""
    if not history_path.exists():
        return []
    try:
        raw = json.loads(history_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise HistoryFileError(f"History file is not valid JSON: {history_path}") from exc
    if not isinstance(raw, list):
        raise HistoryFileError("History file must contain a top-level list.")
    try:
        return [HistoryEntry.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise HistoryFileError(f"Invalid history entry in {history_path}: {exc}") from exc


def append_history(history_path: Path, entry: HistoryEntry, limit: int) -> list[HistoryEntry]:
    """Prepend an entry and drop the oldest beyond ``limit``."""
    entries = [entry, *load_history(history_path)][:limit]
    write_history(entries, history_path)
    return entries


def write_history(entries: list[HistoryEntry], history_path: Path) -> None:
    """Write entries using the camelCase snapshot keys."""
    history_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [entry.model_dump(mode="json", by_alias=True) for entry in entries]
    history_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


def clear_history(history_path: Path) -> None:
    """Remove every stored entry."""
    if history_path.exists():
        history_path.unlink()
