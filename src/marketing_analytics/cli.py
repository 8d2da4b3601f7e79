"""CLI entrypoint for marketing analytics."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from marketing_analytics.config import ensure_output_root, load_config
from marketing_analytics.csv_parser import read_csv_file
from marketing_analytics.exceptions import (
    DatasetValidationError,
    HistoryFileError,
    InvalidConfigError,
    PredictionInputError,
    UnsupportedFileError,
)
from marketing_analytics.history import append_history, clear_history, load_history
from marketing_analytics.models import AnalysisResult, AppConfig, Channel, Dataset, HistoryEntry
from marketing_analytics.predictor import format_currency, parse_spend
from marketing_analytics.report import (
    correlation_items,
    summary_items,
    write_docx_report,
    write_text_report,
)
from marketing_analytics.sample_data import write_sample_csv
from marketing_analytics.session import AnalysisSession
from marketing_analytics.tracing import RunTraceCollector
from marketing_analytics.validator import build_dataset

app = typer.Typer(help="Advertising spend vs sales revenue analysis.")
history_app = typer.Typer(help="Inspect or clear stored analysis snapshots.")
app.add_typer(history_app, name="history")
console = Console()

_VerboseOption = Annotated[
    bool,
    typer.Option("--verbose/--no-verbose", help="Enable detailed logs. Enabled by default."),
]
_ConfigOption = Annotated[Path | None, typer.Option(help="Optional YAML config path.")]
_CsvOption = Annotated[Path, typer.Option("--csv", help="Path to the CSV dataset.")]


class ReportFormat(StrEnum):
    """Supported report file formats."""

    TEXT = "text"
    DOCX = "docx"


def _vprint(enabled: bool, message: str) -> None:
    """Print verbose progress messages."""
    if enabled:
        console.print(f"[cyan]verbose:[/cyan] {escape(message)}")


def _fail(message: str, code: int) -> typer.Exit:
    console.print(f"[red]{escape(message)}[/red]")
    return typer.Exit(code=code)


def _configure_trace_streaming(trace: RunTraceCollector, enabled: bool) -> None:
    """Enable live trace-event printing in verbose mode."""
    if not enabled:
        trace.set_live_sink(None)
        return

    def _sink(event: dict[str, Any]) -> None:
        parts = [
            f"trace[{event.get('seq', '?')}]",
            f"{event.get('component', '')}.{event.get('action', '')}",
            f"status={event.get('status', '')}",
        ]
        if event.get("row_count") != "":
            parts.append(f"rows={event.get('row_count')}")
        if event.get("duration_ms") != "":
            parts.append(f"duration_ms={event.get('duration_ms')}")
        if event.get("details"):
            parts.append(f"details={event.get('details')}")
        _vprint(True, " ".join(parts))

    trace.set_live_sink(_sink)


def _load_runtime_config(config: Path | None, overrides: dict[str, Any] | None = None) -> AppConfig:
    try:
        return load_config(config_path=config, overrides=overrides)
    except InvalidConfigError as exc:
        raise _fail(str(exc), code=3) from exc


def _load_session(csv_path: Path, trace: RunTraceCollector | None = None) -> AnalysisSession:
    session = AnalysisSession(trace=trace)
    try:
        session.load_file(csv_path)
    except UnsupportedFileError as exc:
        raise _fail(str(exc), code=4) from exc
    except DatasetValidationError as exc:
        raise _fail(str(exc), code=2) from exc
    return session


@app.command("validate")
def validate_cmd(csv_path: _CsvOption, verbose: _VerboseOption = True) -> None:
    """Check that a CSV file has the required columns and numeric values."""
    _vprint(verbose, f"Reading dataset: {csv_path}")
    try:
        dataset = build_dataset(read_csv_file(csv_path))
    except UnsupportedFileError as exc:
        raise _fail(str(exc), code=4) from exc
    except DatasetValidationError as exc:
        raise _fail(str(exc), code=2) from exc
    console.print(f"[green]Dataset valid.[/green] Rows: {len(dataset)}")


@app.command("analyze")
def analyze_cmd(
    csv_path: _CsvOption,
    output_root: Annotated[str | None, typer.Option(help="Root output directory.")] = None,
    history: Annotated[
        bool,
        typer.Option("--history/--no-history", help="Record a snapshot in the history file."),
    ] = True,
    config: _ConfigOption = None,
    verbose: _VerboseOption = True,
) -> None:
    """Analyze a dataset and write the run artifacts."""
    trace = RunTraceCollector()
    _configure_trace_streaming(trace, verbose)
    _vprint(verbose, "Loading runtime configuration (YAML + CLI overrides).")
    runtime_config = _load_runtime_config(config, {"output_root": output_root})

    _vprint(verbose, f"Reading dataset: {csv_path}")
    session = _load_session(csv_path, trace=trace)
    dataset, analysis = session.current()
    _print_summary(dataset, analysis, runtime_config.currency_symbol)

    run_dir = _make_run_dir(ensure_output_root(runtime_config.output_root))
    _vprint(verbose, f"Writing run artifacts into: {run_dir}")
    report_path = write_text_report(
        dataset, analysis, run_dir / runtime_config.report_filename, runtime_config.currency_symbol
    )
    (run_dir / "analysis.json").write_text(
        analysis.model_dump_json(indent=2) + "\n", encoding="utf-8"
    )

    if history:
        history_path = Path(runtime_config.history_file)
        try:
            entries = append_history(
                history_path, session.snapshot(), limit=runtime_config.history_limit
            )
        except HistoryFileError as exc:
            raise _fail(str(exc), code=5) from exc
        _vprint(verbose, f"History updated ({len(entries)} entries): {history_path}")

    trace.log(
        event_type="run",
        component="cli",
        action="analyze_finished",
        status="ok",
        row_count=analysis.row_count,
        details={"run_dir": str(run_dir), "report_path": str(report_path)},
    )
    trace.write_json(run_dir / "trace.json")
    trace.write_csv(run_dir / "trace.csv")
    console.print(f"[green]Analysis complete.[/green] {report_path}")


@app.command("predict")
def predict_cmd(
    csv_path: _CsvOption,
    tv: Annotated[str | None, typer.Option(help="Planned TV spend.")] = None,
    radio: Annotated[str | None, typer.Option(help="Planned radio spend.")] = None,
    social: Annotated[str | None, typer.Option(help="Planned social media spend.")] = None,
    config: _ConfigOption = None,
    verbose: _VerboseOption = True,
) -> None:
    """Estimate revenue for a planned spend mix."""
    runtime_config = _load_runtime_config(config)
    session = _load_session(csv_path)
    try:
        prediction = session.predict(
            tv=parse_spend(tv), radio=parse_spend(radio), social=parse_spend(social)
        )
    except PredictionInputError as exc:
        raise _fail(str(exc), code=6) from exc

    symbol = runtime_config.currency_symbol
    _vprint(verbose, f"Baseline revenue: {format_currency(prediction.baseline_revenue, symbol)}")
    for channel in Channel:
        _vprint(
            verbose,
            f"{channel.label} contribution: "
            f"{format_currency(prediction.contributions[channel], symbol)}",
        )
    console.print(
        f"[green]Predicted revenue:[/green] "
        f"{escape(format_currency(prediction.predicted_revenue, symbol))}"
    )


@app.command("report")
def report_cmd(
    csv_path: _CsvOption,
    output: Annotated[Path, typer.Option(help="Destination report file.")],
    report_format: Annotated[
        ReportFormat, typer.Option("--format", help="Report file format.")
    ] = ReportFormat.TEXT,
    config: _ConfigOption = None,
    verbose: _VerboseOption = True,
) -> None:
    """Write the analysis report for a dataset."""
    runtime_config = _load_runtime_config(config)
    session = _load_session(csv_path)
    dataset, analysis = session.current()
    _vprint(verbose, f"Rendering {report_format.value} report.")
    if report_format == ReportFormat.DOCX:
        written = write_docx_report(dataset, analysis, output, runtime_config.currency_symbol)
    else:
        written = write_text_report(dataset, analysis, output, runtime_config.currency_symbol)
    console.print(f"[green]Report written.[/green] {written}")


@app.command("sample")
def sample_cmd(
    output: Annotated[Path, typer.Option(help="Destination CSV path.")],
    rows: Annotated[int, typer.Option(min=3, help="Number of monthly rows.")] = 12,
    seed: Annotated[int, typer.Option(help="Random seed.")] = 7,
) -> None:
    """Write a synthetic dataset."""
    written = write_sample_csv(output, n_rows=rows, seed=seed)
    console.print(f"[green]Sample dataset written.[/green] {written}")


@history_app.command("list")
def history_list_cmd(config: _ConfigOption = None) -> None:
    """List stored analyses, newest first."""
    runtime_config = _load_runtime_config(config)
    entries = _read_history(runtime_config)
    if not entries:
        console.print("No analyses recorded.")
        return
    table = Table(title="Analysis history")
    for column in ["#", "Timestamp", "Rows", "Revenue", "Spend", "ROI"]:
        table.add_column(column)
    symbol = runtime_config.currency_symbol
    for idx, entry in enumerate(entries, start=1):
        table.add_row(
            str(idx),
            entry.timestamp,
            str(entry.data_point_count),
            format_currency(entry.total_revenue, symbol),
            format_currency(entry.total_spend, symbol),
            f"{entry.roi:.2f}%",
        )
    console.print(table)


@history_app.command("show")
def history_show_cmd(
    index: Annotated[int, typer.Argument(min=1, help="1-based entry number from 'history list'.")],
    config: _ConfigOption = None,
) -> None:
    """Show one stored analysis."""
    runtime_config = _load_runtime_config(config)
    entries = _read_history(runtime_config)
    if index > len(entries):
        raise _fail(f"No history entry #{index}; {len(entries)} stored.", code=5)
    entry = entries[index - 1]
    symbol = runtime_config.currency_symbol
    console.print(f"Timestamp: {entry.timestamp}")
    console.print(f"Data points: {entry.data_point_count}")
    console.print(f"Total spend: {escape(format_currency(entry.total_spend, symbol))}")
    console.print(f"Total revenue: {escape(format_currency(entry.total_revenue, symbol))}")
    console.print(f"ROI: {entry.roi:.2f}%")
    for channel, value, strength in correlation_items(entry.analysis_result):
        console.print(f"{channel.label} Spend vs Sales: {value} ({strength})")


@history_app.command("clear")
def history_clear_cmd(config: _ConfigOption = None) -> None:
    """Delete every stored analysis."""
    runtime_config = _load_runtime_config(config)
    clear_history(Path(runtime_config.history_file))
    console.print("[green]History cleared.[/green]")


def _read_history(runtime_config: AppConfig) -> list[HistoryEntry]:
    try:
        return load_history(Path(runtime_config.history_file))
    except HistoryFileError as exc:
        raise _fail(str(exc), code=5) from exc


def _print_summary(dataset: Dataset, analysis: AnalysisResult, currency_symbol: str) -> None:
    summary = Table(title="Summary statistics")
    summary.add_column("Metric")
    summary.add_column("Value", justify="right")
    for label, value in summary_items(dataset, analysis, currency_symbol):
        summary.add_row(label, value)
    console.print(summary)

    correlations = Table(title="Correlation with sales")
    for column in ["Channel", "r", "Strength", "Weight"]:
        correlations.add_column(column)
    weights = {weight.channel: weight for weight in analysis.feature_weights}
    for channel, value, strength in correlation_items(analysis):
        correlations.add_row(
            channel.label, value, strength, f"{weights[channel].normalized_weight:.2f}"
        )
    console.print(correlations)


def _make_run_dir(root: Path) -> Path:
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    run_dir = root / stamp
    suffix = 0
    while run_dir.exists():
        suffix += 1
        run_dir = root / f"{stamp}-{suffix}"
    run_dir.mkdir(parents=True, exist_ok=False)
    return run_dir


def main() -> None:
    """Script entrypoint."""
    app()


if __name__ == "__main__":
    main()
