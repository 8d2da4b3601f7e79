"""Run trace collection and persistence helpers."""

from __future__ import annotations

import csv
import json
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


class RunTraceCollector:
    """Collector for structured events emitted during one analysis run."""

    _CSV_COLUMNS = [
        "seq",
        "timestamp",
        "event_type",
        "component",
        "action",
        "status",
        "row_count",
        "duration_ms",
        "details",
    ]

    def __init__(self) -> None:
        self._events: list[dict[str, Any]] = []
        self._live_sink: Callable[[dict[str, Any]], None] | None = None

    def set_live_sink(self, sink: Callable[[dict[str, Any]], None] | None) -> None:
        """Set optional callback to stream trace events as they are recorded."""
        self._live_sink = sink

    def log(
        self,
        *,
        event_type: str,
        component: str,
        action: str,
        status: str = "ok",
        row_count: int | None = None,
        duration_ms: int | None = None,
        details: dict[str, Any] | str | None = None,
    ) -> None:
        """Record a structured trace event."""
        event = {
            "seq": len(self._events) + 1,
            "timestamp": datetime.now(UTC).isoformat(),
            "event_type": event_type,
            "component": component,
            "action": action,
            "status": status,
            "row_count": "" if row_count is None else row_count,
            "duration_ms": "" if duration_ms is None else duration_ms,
            "details": _serialize_details(details),
        }
        self._events.append(event)
        if self._live_sink is None:
            return
        try:
            self._live_sink(dict(event))
        except Exception:
            # A broken live sink must not abort the analysis.
            pass

    def events(self) -> list[dict[str, Any]]:
        """Return a shallow copy of collected events."""
        return list(self._events)

    def write_json(self, path: Path) -> None:
        """Write trace events as JSON array."""
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(self.events(), indent=2, sort_keys=False)
        path.write_text(payload + "\n", encoding="utf-8")

    def write_csv(self, path: Path) -> None:
        """Write trace events as CSV rows."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as file_obj:
            writer = csv.DictWriter(file_obj, fieldnames=self._CSV_COLUMNS)
            writer.writeheader()
            for event in self.events():
                writer.writerow({key: event.get(key, "") for key in self._CSV_COLUMNS})


def _serialize_details(details: dict[str, Any] | str | None) -> str:
    if details is None:
        return ""
    if isinstance(details, str):
        return details
    return json.dumps(details, sort_keys=True, default=str)
