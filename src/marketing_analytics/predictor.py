"""Revenue prediction from the weighted regression ensemble."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from marketing_analytics.exceptions import PredictionInputError
from marketing_analytics.models import AnalysisResult, Channel, Prediction
from marketing_analytics.statistics import mean

_CENTS = Decimal("0.01")
# Enough digits for any finite float at two decimal places.
_WIDE = Context(prec=400)


def parse_spend(raw: str | float | None) -> float:
    """Read one spend input; absent or unparseable values count as 0."""
    if raw is None:
        return 0.0
    try:
        value = float(str(raw).strip())
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def predict_revenue(
    analysis: AnalysisResult,
    tv: float = 0.0,
    radio: float = 0.0,
    social: float = 0.0,
) -> Prediction:
    """Adjust mean revenue by each channel's weighted marginal slope.

    The estimate is ``mean(revenue) + sum(slope * spend * normalized_weight)``
    floored at 0. Per-feature intercepts are not used.
    """
    spend = {Channel.TV: tv, Channel.RADIO: radio, Channel.SOCIAL: social}
    negative = [channel.label for channel, value in spend.items() if value < 0]
    if negative:
        raise PredictionInputError(
            f"Spending amounts cannot be negative: {', '.join(negative)}"
        )
    if all(value == 0 for value in spend.values()):
        raise PredictionInputError("Please enter at least one spending amount")

    baseline = mean(analysis.sales)
    contributions: dict[Channel, float] = {}
    adjustment = 0.0
    for weight in analysis.feature_weights:
        contribution = weight.slope * spend[weight.channel] * weight.normalized_weight
        contributions[weight.channel] = contribution
        adjustment += contribution

    return Prediction(
        spend=spend,
        baseline_revenue=baseline,
        contributions=contributions,
        predicted_revenue=max(adjustment + baseline, 0.0),
    )


def format_currency(value: float, symbol: str = "$") -> str:
    """Render an amount with two decimals and no digit grouping."""
    return f"{symbol}{format_fixed(value)}"


def format_fixed(value: float) -> str:
    """Two decimals with ties rounded away from zero; -0.0 prints as 0.00."""
    exact = Decimal(value + 0.0)
    return f"{exact.quantize(_CENTS, rounding=ROUND_HALF_UP, context=_WIDE):f}"
