"""Current dataset/analysis slot owned by the caller."""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Any

from marketing_analytics.aggregator import analyze
from marketing_analytics.csv_parser import parse_csv, read_csv_file
from marketing_analytics.exceptions import DatasetValidationError, NoActiveAnalysisError
from marketing_analytics.history import build_history_entry
from marketing_analytics.models import AnalysisResult, Dataset, HistoryEntry, Prediction
from marketing_analytics.predictor import predict_revenue
from marketing_analytics.report import render_text_report
from marketing_analytics.tracing import RunTraceCollector
from marketing_analytics.validator import validate_rows


class AnalysisSession:
    """Holds at most one live dataset and its analysis.

    A successful load replaces both values together; a failed load leaves the
    previous pair in place.
    """

    def __init__(self, trace: RunTraceCollector | None = None) -> None:
        self._trace = trace
        self._dataset: Dataset | None = None
        self._analysis: AnalysisResult | None = None

    @property
    def dataset(self) -> Dataset | None:
        return self._dataset

    @property
    def analysis(self) -> AnalysisResult | None:
        return self._analysis

    @property
    def is_loaded(self) -> bool:
        return self._analysis is not None

    def load_file(self, path: Path) -> AnalysisResult:
        """Read, validate and analyze a CSV file."""
        return self.load_text(read_csv_file(path))

    def load_text(self, text: str) -> AnalysisResult:
        """Validate and analyze CSV text, replacing the current pair."""
        started = time.perf_counter()
        parsed = parse_csv(text)
        self._log("csv_parsed", row_count=len(parsed.rows), details={"headers": parsed.headers})
        try:
            validate_rows(parsed.headers, parsed.rows)
        except DatasetValidationError as exc:
            self._log("validation_failed", status="error", details=str(exc))
            raise
        dataset = Dataset(headers=tuple(parsed.headers), rows=tuple(parsed.rows))
        self._log("dataset_validated", row_count=len(dataset))

        analysis = analyze(dataset)
        self._dataset, self._analysis = dataset, analysis
        self._log(
            "analysis_completed",
            row_count=analysis.row_count,
            duration_ms=int((time.perf_counter() - started) * 1000),
            details={"total_spend": analysis.total_spend, "roi": round(analysis.roi, 4)},
        )
        return analysis

    def clear(self) -> None:
        """Discard the current pair."""
        self._dataset = None
        self._analysis = None
        self._log("session_cleared")

    def current(self) -> tuple[Dataset, AnalysisResult]:
        """Return the live pair or fail when nothing is loaded."""
        if self._dataset is None or self._analysis is None:
            raise NoActiveAnalysisError("No dataset loaded. Load a CSV file first.")
        return self._dataset, self._analysis

    def predict(self, tv: float = 0.0, radio: float = 0.0, social: float = 0.0) -> Prediction:
        """Predict revenue from the current analysis."""
        _, analysis = self.current()
        prediction = predict_revenue(analysis, tv=tv, radio=radio, social=social)
        self._log(
            "prediction_made",
            details={"predicted_revenue": round(prediction.predicted_revenue, 2)},
        )
        return prediction

    def render_report(self, currency_symbol: str = "$") -> str:
        """Render the text report for the current analysis."""
        dataset, analysis = self.current()
        return render_text_report(dataset, analysis, currency_symbol)

    def snapshot(self, timestamp: datetime | None = None) -> HistoryEntry:
        """Build a history entry for the current analysis."""
        dataset, analysis = self.current()
        return build_history_entry(dataset, analysis, timestamp=timestamp)

    def _log(
        self,
        action: str,
        *,
        status: str = "ok",
        row_count: int | None = None,
        duration_ms: int | None = None,
        details: dict[str, Any] | str | None = None,
    ) -> None:
        if self._trace is None:
            return
        self._trace.log(
            event_type="analysis",
            component="session",
            action=action,
            status=status,
            row_count=row_count,
            duration_ms=duration_ms,
            details=details,
        )
