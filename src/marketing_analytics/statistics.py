"""Descriptive statistics, correlation and single-feature regression."""

from __future__ import annotations

import math
from collections.abc import Sequence

from marketing_analytics.models import CorrelationStrength, RegressionResult, SeriesSummary

_STRENGTH_BANDS: list[tuple[float, CorrelationStrength]] = [
    (0.8, CorrelationStrength.VERY_STRONG),
    (0.6, CorrelationStrength.STRONG),
    (0.4, CorrelationStrength.MODERATE),
    (0.2, CorrelationStrength.WEAK),
]


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean of a non-empty series."""
    if not values:
        raise ValueError("mean() requires at least one value.")
    return sum(values) / len(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N)."""
    avg = mean(values)
    return math.sqrt(mean([(value - avg) ** 2 for value in values]))


def correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation coefficient, 0 when either series has no variance."""
    mean_x = mean(x)
    mean_y = mean(y)
    numerator = 0.0
    denom_x = 0.0
    denom_y = 0.0
    for x_value, y_value in zip(x, y, strict=True):
        dx = x_value - mean_x
        dy = y_value - mean_y
        numerator += dx * dy
        denom_x += dx * dx
        denom_y += dy * dy
    denominator = math.sqrt(denom_x * denom_y)
    if denominator == 0:
        return 0.0
    return numerator / denominator


def correlation_strength(value: float) -> CorrelationStrength:
    """Classify the magnitude of a correlation; the sign is ignored."""
    magnitude = abs(value)
    for lower_bound, strength in _STRENGTH_BANDS:
        if magnitude >= lower_bound:
            return strength
    return CorrelationStrength.VERY_WEAK


def linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionResult:
    """Ordinary least squares fit of y on a single predictor x."""
    mean_x = mean(x)
    mean_y = mean(y)
    numerator = 0.0
    denominator = 0.0
    for x_value, y_value in zip(x, y, strict=True):
        numerator += (x_value - mean_x) * (y_value - mean_y)
        denominator += (x_value - mean_x) * (x_value - mean_x)
    slope = 0.0 if denominator == 0 else numerator / denominator
    return RegressionResult(slope=slope, intercept=mean_y - slope * mean_x)


def predict_value(x: float, slope: float, intercept: float) -> float:
    """Evaluate a fitted line at x."""
    return slope * x + intercept


def summarize(values: Sequence[float]) -> SeriesSummary:
    """Collect the descriptive statistics shown for one column."""
    return SeriesSummary(
        mean=mean(values),
        std_dev=standard_deviation(values),
        minimum=min(values),
        maximum=max(values),
        total=sum(values),
    )
