"""Dataset schema validation."""

from __future__ import annotations

import math

from marketing_analytics.csv_parser import parse_csv
from marketing_analytics.exceptions import (
    InsufficientRowsError,
    InvalidNumericValueError,
    MissingColumnsError,
)
from marketing_analytics.models import (
    MINIMUM_ROWS,
    NUMERIC_COLUMNS,
    REQUIRED_COLUMNS,
    CellValue,
    Dataset,
    Row,
)


def validate_rows(headers: list[str], rows: list[Row]) -> None:
    """Check columns, then row count, then numeric cells.

    Raises the first failure found; the check order keeps error messages
    reproducible for the same input.
    """
    missing = [column for column in REQUIRED_COLUMNS if column not in headers]
    if missing:
        raise MissingColumnsError(missing)

    if len(rows) < MINIMUM_ROWS:
        raise InsufficientRowsError(row_count=len(rows), minimum_rows=MINIMUM_ROWS)

    for row in rows:
        for column in NUMERIC_COLUMNS:
            value = row.get(column)
            if not _is_numeric(value):
                raise InvalidNumericValueError(column, value)


def build_dataset(text: str) -> Dataset:
    """Parse and validate CSV text into a dataset."""
    parsed = parse_csv(text)
    validate_rows(parsed.headers, parsed.rows)
    return Dataset(headers=tuple(parsed.headers), rows=tuple(parsed.rows))


def _is_numeric(value: CellValue) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)
