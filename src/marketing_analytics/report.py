"""Plain-text and DOCX rendering of an analysis."""

from __future__ import annotations

from pathlib import Path

from docx import Document

from marketing_analytics.models import (
    MONTH_COLUMN,
    NUMERIC_COLUMNS,
    AnalysisResult,
    CellValue,
    Channel,
    Dataset,
)
from marketing_analytics.predictor import format_currency, format_fixed

REPORT_TITLE = "MARKETING ANALYTICS REPORT"
DATA_HEADER = ",".join([MONTH_COLUMN, *NUMERIC_COLUMNS])


def render_text_report(
    dataset: Dataset, analysis: AnalysisResult, currency_symbol: str = "$"
) -> str:
    """Render the downloadable text report."""
    lines = [
        REPORT_TITLE,
        "=" * 28,
        "",
        "SUMMARY STATISTICS",
        "-" * 18,
    ]
    lines.extend(
        f"{label}: {value}" for label, value in summary_items(dataset, analysis, currency_symbol)
    )
    lines.extend(["", "CORRELATION ANALYSIS", "-" * 20])
    lines.extend(
        f"{channel.label} Spend vs Sales: {value} ({strength})"
        for channel, value, strength in correlation_items(analysis)
    )
    lines.extend(["", "DETAILED DATA", "-" * 13, DATA_HEADER])
    lines.extend(",".join(cells) for cells in data_rows(dataset))
    return "\n".join(lines) + "\n"


def write_text_report(
    dataset: Dataset,
    analysis: AnalysisResult,
    output_path: Path,
    currency_symbol: str = "$",
) -> Path:
    """Write the text report to disk."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        render_text_report(dataset, analysis, currency_symbol), encoding="utf-8"
    )
    return output_path


def write_docx_report(
    dataset: Dataset,
    analysis: AnalysisResult,
    output_path: Path,
    currency_symbol: str = "$",
) -> Path:
    """Write the report sections as a Word document."""
    document = Document()
    document.add_heading("Marketing Analytics Report", level=0)

    document.add_heading("Summary Statistics", level=1)
    summary = summary_items(dataset, analysis, currency_symbol)
    table = document.add_table(rows=len(summary), cols=2)
    for idx, (label, value) in enumerate(summary):
        table.cell(idx, 0).text = label
        table.cell(idx, 1).text = value

    document.add_heading("Correlation Analysis", level=1)
    correlations = correlation_items(analysis)
    table = document.add_table(rows=len(correlations) + 1, cols=3)
    for col, header in enumerate(["Channel", "Correlation", "Strength"]):
        table.cell(0, col).text = header
    for idx, (channel, value, strength) in enumerate(correlations, start=1):
        table.cell(idx, 0).text = f"{channel.label} Spend vs Sales"
        table.cell(idx, 1).text = value
        table.cell(idx, 2).text = strength

    document.add_heading("Detailed Data", level=1)
    rows = data_rows(dataset)
    header = DATA_HEADER.split(",")
    table = document.add_table(rows=len(rows) + 1, cols=len(header))
    for col, name in enumerate(header):
        table.cell(0, col).text = name
    for idx, cells in enumerate(rows, start=1):
        for col, text in enumerate(cells):
            table.cell(idx, col).text = text

    output_path.parent.mkdir(parents=True, exist_ok=True)
    document.save(str(output_path))
    return output_path


def summary_items(
    dataset: Dataset, analysis: AnalysisResult, currency_symbol: str = "$"
) -> list[tuple[str, str]]:
    """Labelled summary figures in report order."""
    return [
        ("Total Data Points", str(len(dataset))),
        ("Total TV Spend", format_currency(analysis.total_tv_spend, currency_symbol)),
        ("Total Radio Spend", format_currency(analysis.total_radio_spend, currency_symbol)),
        (
            "Total Social Media Spend",
            format_currency(analysis.total_social_spend, currency_symbol),
        ),
        ("Total Spend", format_currency(analysis.total_spend, currency_symbol)),
        ("Total Revenue", format_currency(analysis.total_revenue, currency_symbol)),
        ("Overall ROI", f"{format_fixed(analysis.roi)}%"),
    ]


def correlation_items(analysis: AnalysisResult) -> list[tuple[Channel, str, str]]:
    """Formatted correlation value and strength per channel."""
    return [
        (
            channel,
            format_fixed(analysis.correlations[channel].value),
            analysis.correlations[channel].strength.value,
        )
        for channel in Channel
    ]


def data_rows(dataset: Dataset) -> list[list[str]]:
    """Dataset rows re-emitted with two-decimal numeric fields."""
    return [
        [format_label(row.get(MONTH_COLUMN))]
        + [format_fixed(float(row[column])) for column in NUMERIC_COLUMNS]  # type: ignore[arg-type]
        for row in dataset.rows
    ]


def format_label(value: CellValue) -> str:
    """Render a Month cell the way it was written."""
    if value is None:
        return ""
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return value
