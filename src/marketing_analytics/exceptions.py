"""Project-specific exceptions."""

from __future__ import annotations


class MarketingAnalyticsError(Exception):
    """Base exception for the project."""


class InvalidConfigError(MarketingAnalyticsError):
    """Raised when runtime configuration is missing or malformed."""


class UnsupportedFileError(MarketingAnalyticsError):
    """Raised when an input file cannot be used as a CSV dataset."""


class DatasetValidationError(MarketingAnalyticsError):
    """Base for user-input errors raised while validating a dataset."""


class MissingColumnsError(DatasetValidationError):
    """Raised when required columns are absent from the header row."""

    def __init__(self, missing_columns: list[str]) -> None:
        self.missing_columns = list(missing_columns)
        super().__init__(f"Missing required columns: {', '.join(self.missing_columns)}")


class InsufficientRowsError(DatasetValidationError):
    """Raised when the dataset has too few data rows."""

    def __init__(self, row_count: int, minimum_rows: int) -> None:
        self.row_count = row_count
        self.minimum_rows = minimum_rows
        super().__init__(f"Minimum {minimum_rows} rows of data required for analysis")


class InvalidNumericValueError(DatasetValidationError):
    """Raised when a numeric column holds a non-numeric value."""

    def __init__(self, column: str, value: object) -> None:
        self.column = column
        self.value = value
        super().__init__(f"Invalid numeric value in {column}: {value}")


class PredictionInputError(MarketingAnalyticsError):
    """Raised when prediction inputs are rejected."""


class NoActiveAnalysisError(MarketingAnalyticsError):
    """Raised when a session is used before a dataset was loaded."""


class HistoryFileError(MarketingAnalyticsError):
    """Raised when the history file cannot be read."""
