"""Core typed models."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

MONTH_COLUMN = "Month"
TARGET_COLUMN = "Sales_Revenue"
MINIMUM_ROWS = 3

CellValue = float | str | None
Row = dict[str, CellValue]


def _read_only(value: dict[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(value)


def _read_only_mapping(key_type: Any, value_type: Any) -> Any:
    # Validated as a dict, held as a read-only view, dumped as a plain dict.
    mapping = dict[key_type, value_type]
    return Annotated[
        mapping, AfterValidator(_read_only), PlainSerializer(dict, return_type=mapping)
    ]


FrozenRow = _read_only_mapping(str, CellValue)


class Channel(StrEnum):
    """Advertising channels, in the fixed feature order."""

    TV = "tv"
    RADIO = "radio"
    SOCIAL = "social"

    @property
    def column(self) -> str:
        return CHANNEL_COLUMNS[self]

    @property
    def label(self) -> str:
        return CHANNEL_LABELS[self]


CHANNEL_COLUMNS: dict[Channel, str] = {
    Channel.TV: "TV_Spend",
    Channel.RADIO: "Radio_Spend",
    Channel.SOCIAL: "SocialMedia_Spend",
}
CHANNEL_LABELS: dict[Channel, str] = {
    Channel.TV: "TV",
    Channel.RADIO: "Radio",
    Channel.SOCIAL: "Social Media",
}
NUMERIC_COLUMNS: tuple[str, ...] = (*CHANNEL_COLUMNS.values(), TARGET_COLUMN)
REQUIRED_COLUMNS: tuple[str, ...] = (MONTH_COLUMN, *NUMERIC_COLUMNS)


class CorrelationStrength(StrEnum):
    """Qualitative bands for the magnitude of a correlation."""

    VERY_STRONG = "Very Strong"
    STRONG = "Strong"
    MODERATE = "Moderate"
    WEAK = "Weak"
    VERY_WEAK = "Very Weak"


class ParsedCsv(BaseModel):
    """Raw parser output before validation."""

    headers: list[str] = Field(default_factory=list)
    rows: list[Row] = Field(default_factory=list)


class Dataset(BaseModel):
    """Validated, ordered monthly rows."""

    model_config = ConfigDict(frozen=True)

    headers: tuple[str, ...]
    rows: tuple[FrozenRow, ...]

    def __len__(self) -> int:
        return len(self.rows)

    def column(self, name: str) -> list[CellValue]:
        """Return one column in row order."""
        return [row.get(name) for row in self.rows]

    def numeric_column(self, name: str) -> list[float]:
        """Return one validated numeric column in row order."""
        return [float(row[name]) for row in self.rows]  # type: ignore[arg-type]


class CorrelationResult(BaseModel):
    """Pearson correlation of one feature against revenue."""

    model_config = ConfigDict(frozen=True)

    value: float
    strength: CorrelationStrength


class RegressionResult(BaseModel):
    """Single-feature least squares fit."""

    model_config = ConfigDict(frozen=True)

    slope: float
    intercept: float


class FeatureWeight(BaseModel):
    """One member of the correlation-weighted regression ensemble."""

    model_config = ConfigDict(frozen=True)

    channel: Channel
    slope: float
    correlation: float
    weight: float
    normalized_weight: float


class SeriesSummary(BaseModel):
    """Descriptive statistics for one numeric column."""

    model_config = ConfigDict(frozen=True)

    mean: float
    std_dev: float
    minimum: float
    maximum: float
    total: float


SummaryMap = _read_only_mapping(str, SeriesSummary)
CorrelationMap = _read_only_mapping(Channel, CorrelationResult)
RegressionMap = _read_only_mapping(Channel, RegressionResult)
ChannelAmounts = _read_only_mapping(Channel, float)


class AnalysisResult(BaseModel):
    """Derived metrics for one dataset."""

    model_config = ConfigDict(frozen=True)

    row_count: int
    months: tuple[CellValue, ...]
    sales: tuple[float, ...]
    tv_spend: tuple[float, ...]
    radio_spend: tuple[float, ...]
    social_spend: tuple[float, ...]
    spend_by_period: tuple[float, ...]
    total_tv_spend: float
    total_radio_spend: float
    total_social_spend: float
    total_spend: float
    total_revenue: float
    roi: float
    avg_roi: float
    summaries: SummaryMap
    correlations: CorrelationMap
    regressions: RegressionMap
    feature_weights: tuple[FeatureWeight, ...]

    def spend_series(self, channel: Channel) -> tuple[float, ...]:
        """Return the spend series for one channel."""
        return {
            Channel.TV: self.tv_spend,
            Channel.RADIO: self.radio_spend,
            Channel.SOCIAL: self.social_spend,
        }[channel]

    def total_for(self, channel: Channel) -> float:
        """Return the total spend for one channel."""
        return {
            Channel.TV: self.total_tv_spend,
            Channel.RADIO: self.total_radio_spend,
            Channel.SOCIAL: self.total_social_spend,
        }[channel]


class Prediction(BaseModel):
    """Revenue estimate for a hypothetical spend mix."""

    model_config = ConfigDict(frozen=True)

    spend: ChannelAmounts
    baseline_revenue: float
    contributions: ChannelAmounts
    predicted_revenue: float


class HistoryEntry(BaseModel):
    """Serializable snapshot of one completed analysis."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: str
    data_point_count: int = Field(alias="dataPointCount")
    total_revenue: float = Field(alias="totalRevenue")
    total_spend: float = Field(alias="totalSpend")
    roi: float
    raw_data: tuple[FrozenRow, ...] = Field(alias="rawData")
    analysis_result: AnalysisResult = Field(alias="analysisResult")


class AppConfig(BaseModel):
    """Runtime configuration."""

    output_root: str = "outputs"
    history_file: str = ".marketing-analytics/history.json"
    history_limit: int = Field(default=10, ge=1)
    currency_symbol: str = "$"
    report_filename: str = "marketing-analytics-report.txt"
