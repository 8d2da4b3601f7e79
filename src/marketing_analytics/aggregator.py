"""Derived metrics for one dataset."""

from __future__ import annotations

from marketing_analytics.models import (
    MONTH_COLUMN,
    NUMERIC_COLUMNS,
    TARGET_COLUMN,
    AnalysisResult,
    Channel,
    CorrelationResult,
    Dataset,
)
from marketing_analytics.regressor import weighted_regression
from marketing_analytics.statistics import (
    correlation,
    correlation_strength,
    linear_regression,
    summarize,
)


def analyze(dataset: Dataset) -> AnalysisResult:
    """Compute totals, ROI, correlations and the regression ensemble."""
    sales = dataset.numeric_column(TARGET_COLUMN)
    spend = {channel: dataset.numeric_column(channel.column) for channel in Channel}

    totals = {channel: sum(series) for channel, series in spend.items()}
    total_spend = totals[Channel.TV] + totals[Channel.RADIO] + totals[Channel.SOCIAL]
    total_revenue = sum(sales)
    roi = (total_revenue - total_spend) / total_spend * 100 if total_spend > 0 else 0.0

    correlations: dict[Channel, CorrelationResult] = {}
    for channel, series in spend.items():
        r_value = correlation(series, sales)
        correlations[channel] = CorrelationResult(
            value=r_value, strength=correlation_strength(r_value)
        )

    spend_by_period = [
        tv + radio + social
        for tv, radio, social in zip(
            spend[Channel.TV], spend[Channel.RADIO], spend[Channel.SOCIAL], strict=True
        )
    ]

    return AnalysisResult(
        row_count=len(dataset),
        months=tuple(dataset.column(MONTH_COLUMN)),
        sales=tuple(sales),
        tv_spend=tuple(spend[Channel.TV]),
        radio_spend=tuple(spend[Channel.RADIO]),
        social_spend=tuple(spend[Channel.SOCIAL]),
        spend_by_period=tuple(spend_by_period),
        total_tv_spend=totals[Channel.TV],
        total_radio_spend=totals[Channel.RADIO],
        total_social_spend=totals[Channel.SOCIAL],
        total_spend=total_spend,
        total_revenue=total_revenue,
        roi=roi,
        # Aggregate ROI divided by row count, kept for report compatibility.
        avg_roi=roi / len(dataset),
        summaries={column: summarize(dataset.numeric_column(column)) for column in NUMERIC_COLUMNS},
        correlations=correlations,
        regressions={
            channel: linear_regression(series, sales) for channel, series in spend.items()
        },
        feature_weights=tuple(weighted_regression(list(spend.items()), sales)),
    )
