from __future__ import annotations

from pathlib import Path

import pytest

from marketing_analytics.exceptions import (
    InsufficientRowsError,
    NoActiveAnalysisError,
    UnsupportedFileError,
)
from marketing_analytics.session import AnalysisSession
from marketing_analytics.tracing import RunTraceCollector

OTHER_CSV = (
    "Month,TV_Spend,Radio_Spend,SocialMedia_Spend,Sales_Revenue\n"
    "Q1,100,50,25,400\n"
    "Q2,200,60,30,500\n"
    "Q3,300,70,35,650\n"
)


def test_session_starts_empty() -> None:
    session = AnalysisSession()

    assert not session.is_loaded
    assert session.dataset is None
    with pytest.raises(NoActiveAnalysisError):
        session.predict(tv=100)
    with pytest.raises(NoActiveAnalysisError):
        session.render_report()


def test_load_replaces_current_pair(readme_csv: str) -> None:
    session = AnalysisSession()
    first = session.load_text(readme_csv)
    second = session.load_text(OTHER_CSV)

    assert first.row_count == 5
    assert session.analysis is second
    assert session.dataset is not None
    assert session.dataset.column("Month") == ["Q1", "Q2", "Q3"]


def test_failed_load_keeps_previous_pair(readme_csv: str) -> None:
    session = AnalysisSession()
    analysis = session.load_text(readme_csv)

    with pytest.raises(InsufficientRowsError):
        session.load_text(OTHER_CSV.rsplit("Q3", 1)[0])

    assert session.analysis is analysis
    assert len(session.current()[0]) == 5


def test_clear_discards_current_pair(readme_csv: str) -> None:
    session = AnalysisSession()
    session.load_text(readme_csv)

    session.clear()

    assert not session.is_loaded
    with pytest.raises(NoActiveAnalysisError):
        session.snapshot()


def test_load_file_checks_extension(tmp_path: Path) -> None:
    path = tmp_path / "data.xlsx"
    path.write_text("x", encoding="utf-8")

    with pytest.raises(UnsupportedFileError):
        AnalysisSession().load_file(path)


def test_session_report_predict_and_snapshot(csv_path: Path) -> None:
    session = AnalysisSession()
    session.load_file(csv_path)

    assert session.render_report().startswith("MARKETING ANALYTICS REPORT\n")
    assert session.predict(tv=1000).predicted_revenue > 0
    assert session.snapshot().data_point_count == 5


def test_session_records_trace_events(readme_csv: str) -> None:
    trace = RunTraceCollector()
    session = AnalysisSession(trace=trace)

    session.load_text(readme_csv)
    with pytest.raises(InsufficientRowsError):
        session.load_text("Month,TV_Spend,Radio_Spend,SocialMedia_Spend,Sales_Revenue\n")
    session.predict(radio=500)
    session.clear()

    actions = [event["action"] for event in trace.events()]
    assert actions == [
        "csv_parsed",
        "dataset_validated",
        "analysis_completed",
        "csv_parsed",
        "validation_failed",
        "prediction_made",
        "session_cleared",
    ]
    failed = trace.events()[4]
    assert failed["status"] == "error"
    assert "Minimum 3 rows" in failed["details"]
