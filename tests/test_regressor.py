from __future__ import annotations

import random

import pytest

from marketing_analytics.models import Channel
from marketing_analytics.regressor import weighted_regression
from marketing_analytics.statistics import correlation, linear_regression


def test_weights_are_absolute_correlations_normalized_to_one() -> None:
    target = [10.0, 20.0, 25.0, 40.0]
    features = [
        (Channel.TV, [1.0, 2.0, 3.0, 4.0]),
        (Channel.RADIO, [4.0, 3.0, 3.5, 1.0]),
        (Channel.SOCIAL, [2.0, 2.5, 1.0, 3.0]),
    ]

    weights = weighted_regression(features, target)

    assert [weight.channel for weight in weights] == [Channel.TV, Channel.RADIO, Channel.SOCIAL]
    for weight, (_, series) in zip(weights, features, strict=True):
        assert weight.correlation == correlation(series, target)
        assert weight.slope == linear_regression(series, target).slope
        assert weight.weight == abs(weight.correlation)
    assert sum(weight.normalized_weight for weight in weights) == pytest.approx(1.0)
    assert weights[1].correlation < 0
    assert weights[1].normalized_weight > 0


def test_weights_are_all_zero_when_no_feature_correlates() -> None:
    target = [10.0, 20.0, 30.0]
    features = [
        (Channel.TV, [5.0, 5.0, 5.0]),
        (Channel.RADIO, [1.0, 1.0, 1.0]),
        (Channel.SOCIAL, [0.0, 0.0, 0.0]),
    ]

    weights = weighted_regression(features, target)

    assert [weight.normalized_weight for weight in weights] == [0.0, 0.0, 0.0]
    assert sum(weight.normalized_weight for weight in weights) == 0


def test_normalized_weights_sum_to_one_on_random_data() -> None:
    rng = random.Random(99)
    for _ in range(100):
        size = rng.randint(3, 12)
        target = [rng.uniform(0, 50_000) for _ in range(size)]
        features = [
            (channel, [rng.uniform(0, 10_000) for _ in range(size)]) for channel in Channel
        ]
        weights = weighted_regression(features, target)
        assert sum(weight.normalized_weight for weight in weights) == pytest.approx(1.0)


def test_features_are_fitted_independently() -> None:
    target = [3.0, 5.0, 7.0, 9.0]
    tv = [1.0, 2.0, 3.0, 4.0]

    alone = weighted_regression([(Channel.TV, tv)], target)
    together = weighted_regression(
        [(Channel.TV, tv), (Channel.RADIO, [2.0, 4.0, 6.0, 8.0])], target
    )

    assert alone[0].slope == together[0].slope
    assert alone[0].normalized_weight == pytest.approx(1.0)
    assert together[0].normalized_weight == pytest.approx(0.5)
