"""Naive comma-split CSV parsing."""

from __future__ import annotations

import re
from pathlib import Path

from marketing_analytics.exceptions import UnsupportedFileError
from marketing_analytics.models import CellValue, ParsedCsv, Row

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def read_csv_file(path: Path) -> str:
    """Read dataset text from a .csv file."""
    if path.suffix.lower() != ".csv":
        raise UnsupportedFileError(f"Please upload a CSV file: {path.name}")
    if not path.is_file():
        raise UnsupportedFileError(f"CSV file does not exist: {path}")
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnsupportedFileError(f"CSV file is not valid UTF-8: {path.name}") from exc


def parse_csv(text: str) -> ParsedCsv:
    """Split text into a header row and positional rows.

    Fields are split on every comma; quoting is not supported, so a field that
    contains a literal comma shifts the remaining values of its line.
    """
    lines = text.strip().split("\n")
    headers = [header.strip() for header in lines[0].split(",")]
    rows: list[Row] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        values = [value.strip() for value in line.split(",")]
        row: Row = {}
        for idx, header in enumerate(headers):
            row[header] = coerce_value(values[idx]) if idx < len(values) else None
        rows.append(row)
    return ParsedCsv(headers=headers, rows=rows)


def coerce_value(raw: str) -> CellValue:
    """Return a float when the field looks numeric, else the text unchanged."""
    if _NUMBER_RE.match(raw):
        return float(raw)
    return raw
