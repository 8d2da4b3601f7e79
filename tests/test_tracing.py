from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from marketing_analytics.tracing import RunTraceCollector


def test_run_trace_collector_writes_json_and_csv(tmp_path: Path) -> None:
    trace = RunTraceCollector()
    trace.log(
        event_type="analysis",
        component="session",
        action="csv_parsed",
        row_count=5,
        details={"headers": ["Month", "TV_Spend"]},
    )
    trace.log(
        event_type="run",
        component="cli",
        action="analyze_finished",
        duration_ms=12,
        details="report written",
    )

    json_path = tmp_path / "trace.json"
    csv_path = tmp_path / "trace.csv"
    trace.write_json(json_path)
    trace.write_csv(csv_path)

    json_events = json.loads(json_path.read_text(encoding="utf-8"))
    assert [event["seq"] for event in json_events] == [1, 2]
    assert json_events[0]["row_count"] == 5
    assert "TV_Spend" in json_events[0]["details"]
    assert json_events[1]["row_count"] == ""

    with csv_path.open("r", encoding="utf-8", newline="") as file_obj:
        rows = list(csv.DictReader(file_obj))
    assert len(rows) == 2
    assert rows[0]["component"] == "session"
    assert rows[1]["duration_ms"] == "12"


def test_run_trace_collector_streams_live_events() -> None:
    seen: list[dict[str, Any]] = []
    trace = RunTraceCollector()
    trace.set_live_sink(lambda event: seen.append(event))
    trace.log(event_type="run", component="cli", action="config_loaded")

    assert len(seen) == 1
    assert seen[0]["action"] == "config_loaded"


def test_failing_live_sink_does_not_interrupt_logging() -> None:
    def _broken(_event: dict[str, Any]) -> None:
        raise RuntimeError("sink down")

    trace = RunTraceCollector()
    trace.set_live_sink(_broken)
    trace.log(event_type="run", component="cli", action="start")

    assert len(trace.events()) == 1
