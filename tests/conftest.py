from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from marketing_analytics.aggregator import analyze
from marketing_analytics.models import AnalysisResult, Dataset
from marketing_analytics.validator import build_dataset

README_CSV = (
    "Month,TV_Spend,Radio_Spend,SocialMedia_Spend,Sales_Revenue\n"
    "Jan-2023,5000,3000,2500,15000\n"
    "Feb-2023,5500,3200,2600,16000\n"
    "Mar-2023,6000,3300,2700,17000\n"
    "Apr-2023,5800,3200,2800,17500\n"
    "May-2023,6200,3500,3000,18500\n"
)


def build_csv(rows: list[tuple[str, float, float, float, float]]) -> str:
    lines = ["Month,TV_Spend,Radio_Spend,SocialMedia_Spend,Sales_Revenue"]
    lines.extend(",".join(str(value) for value in row) for row in rows)
    return "\n".join(lines) + "\n"


@pytest.fixture
def readme_csv() -> str:
    return README_CSV


@pytest.fixture
def csv_path(tmp_path: Path) -> Path:
    path = tmp_path / "marketing_data.csv"
    path.write_text(README_CSV, encoding="utf-8")
    return path


@pytest.fixture
def dataset() -> Dataset:
    return build_dataset(README_CSV)


@pytest.fixture
def analysis(dataset: Dataset) -> AnalysisResult:
    return analyze(dataset)


@pytest.fixture
def make_dataset() -> Callable[[list[tuple[str, float, float, float, float]]], Dataset]:
    def _make(rows: list[tuple[str, float, float, float, float]]) -> Dataset:
        return build_dataset(build_csv(rows))

    return _make
