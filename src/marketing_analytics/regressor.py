"""Correlation-weighted blend of independent single-feature regressions."""

from __future__ import annotations

from collections.abc import Sequence

from marketing_analytics.models import Channel, FeatureWeight
from marketing_analytics.statistics import correlation, linear_regression


def weighted_regression(
    features: Sequence[tuple[Channel, Sequence[float]]],
    target: Sequence[float],
) -> list[FeatureWeight]:
    """Fit each feature against the target on its own and weight it by |r|.

    This is not a joint least squares fit: collinear features are not
    corrected for. Normalized weights sum to 1, or are all 0 when every
    correlation is 0.
    """
    fitted: list[tuple[Channel, float, float]] = []
    for channel, series in features:
        regression = linear_regression(series, target)
        fitted.append((channel, regression.slope, correlation(series, target)))

    total_weight = sum(abs(r_value) for _, _, r_value in fitted)
    return [
        FeatureWeight(
            channel=channel,
            slope=slope,
            correlation=r_value,
            weight=abs(r_value),
            normalized_weight=abs(r_value) / total_weight if total_weight > 0 else 0.0,
        )
        for channel, slope, r_value in fitted
    ]
