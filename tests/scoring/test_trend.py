import pytest

from modelperf.schemas import ModelFingerprint, ScoringPolicy, TrendDirection, TrendMetric
from modelperf.scoring.trend import classify, composite_trend, metric_trend


def test_improving_trend_reports_relative_change():
    result = classify(0.70, 0.65)

    assert result.direction == TrendDirection.IMPROVING
    assert result.percentage_change == pytest.approx(7.6923, rel=1e-4)


@pytest.mark.parametrize("baseline", [0.0, 0.1, 0.5, 0.9, 0.994])
def test_threshold_is_symmetric(baseline):
    assert classify(baseline + 0.006, baseline).direction == TrendDirection.IMPROVING
    assert classify(baseline - 0.006, baseline).direction == TrendDirection.DEGRADING
    assert classify(baseline + 0.002, baseline).direction == TrendDirection.STABLE


def test_small_nonzero_diff_is_stable():
    result = classify(0.503, 0.5)

    assert result.direction == TrendDirection.STABLE
    assert result.percentage_change == pytest.approx(0.6)


@pytest.mark.parametrize("current", [0.0, 0.004, 0.5, 1.0])
def test_zero_baseline_reports_no_percentage(current):
    result = classify(current, 0.0)

    assert result.percentage_change == 0.0


def test_zero_baseline_direction_follows_raw_diff():
    assert classify(0.50, 0.0).direction == TrendDirection.IMPROVING
    assert classify(0.004, 0.0).direction == TrendDirection.STABLE


def test_custom_threshold():
    assert classify(0.52, 0.5, threshold=0.05).direction == TrendDirection.STABLE


def _fingerprint(**kwargs) -> ModelFingerprint:
    return ModelFingerprint(model_id="gpt-4", provider="openai", **kwargs)


def test_composite_trend_compares_weight_with_reconstructed_baseline():
    same = {"latencyP50": 5000, "costPer1KUnits": 0.005, "failureRate": 0.02, "cacheHitRate": 0.3}
    fingerprint = _fingerprint(routing_weight=0.70, window_7d=same, window_30d=same)

    result = composite_trend(fingerprint)

    assert result.baseline == pytest.approx(0.604)
    assert result.current == pytest.approx(0.70)
    assert result.direction == TrendDirection.IMPROVING


def test_composite_trend_for_new_model_without_history():
    fingerprint = _fingerprint(routing_weight=0.5)

    result = composite_trend(fingerprint)

    # No 7d/30d data: zero-filled windows give the neutral 0.80 baseline.
    assert result.baseline == pytest.approx(0.80)
    assert result.direction == TrendDirection.DEGRADING


def test_latency_trend_improves_when_latency_drops():
    fingerprint = _fingerprint(
        window_24h={"latencyP50": 1000, "totalRequests": 50},
        window_7d={"latencyP50": 2000},
        window_30d={"latencyP50": 2000},
    )

    result = metric_trend(fingerprint, TrendMetric.LATENCY)

    assert result.direction == TrendDirection.IMPROVING
    assert result.percentage_change == pytest.approx(-50.0)
    assert result.current == 1000
    assert result.baseline == 2000
    assert result.confidence == pytest.approx(0.5)


def test_cost_trend_degrades_when_cost_rises():
    fingerprint = _fingerprint(
        window_24h={"costPer1KUnits": 0.004, "totalRequests": 500},
        window_7d={"costPer1KUnits": 0.002},
        window_30d={"costPer1KUnits": 0.002},
    )

    result = metric_trend(fingerprint, TrendMetric.COST)

    assert result.direction == TrendDirection.DEGRADING
    assert result.percentage_change == pytest.approx(100.0)
    assert result.confidence == 1.0


def test_cost_trend_above_cap_still_degrades():
    fingerprint = _fingerprint(
        window_24h={"costPer1KUnits": 0.06},
        window_7d={"costPer1KUnits": 0.03},
        window_30d={"costPer1KUnits": 0.03},
    )

    result = metric_trend(fingerprint, TrendMetric.COST)

    assert result.percentage_change == pytest.approx(100.0)
    assert result.direction == TrendDirection.DEGRADING


def test_latency_trend_above_cap_still_improves():
    fingerprint = _fingerprint(
        window_24h={"latencyP50": 12000},
        window_7d={"latencyP50": 20000},
        window_30d={"latencyP50": 20000},
    )

    result = metric_trend(fingerprint, TrendMetric.LATENCY)

    assert result.percentage_change == pytest.approx(-40.0)
    assert result.direction == TrendDirection.IMPROVING


def test_failure_rate_trend_stable_within_threshold():
    fingerprint = _fingerprint(
        window_24h={"failureRate": 0.012},
        window_7d={"failureRate": 0.01},
        window_30d={"failureRate": 0.01},
    )

    result = metric_trend(fingerprint, TrendMetric.FAILURE_RATE)

    assert result.direction == TrendDirection.STABLE
    assert result.percentage_change == pytest.approx(20.0)
    assert result.confidence == 0.0


def test_quality_trend_uses_stored_trend():
    fingerprint = _fingerprint(
        capabilities=[{"capability": "text_generation", "qualityScore": 0.9}],
        trends=[
            {"metric": "quality", "direction": "improving", "percentageChange": 4.0, "confidence": 0.7}
        ],
    )

    result = metric_trend(fingerprint, TrendMetric.QUALITY)

    assert result.direction == TrendDirection.IMPROVING
    assert result.percentage_change == 4.0
    assert result.confidence == 0.7
    assert result.current == pytest.approx(0.9)


def test_quality_trend_without_history_is_stable():
    result = metric_trend(_fingerprint(), TrendMetric.QUALITY)

    assert result.direction == TrendDirection.STABLE
    assert result.percentage_change == 0.0


def test_routing_weight_metric_matches_composite_trend():
    policy = ScoringPolicy(confidence_sample_size=10)
    fingerprint = _fingerprint(routing_weight=0.9, window_24h={"totalRequests": 5})

    result = metric_trend(fingerprint, TrendMetric.ROUTING_WEIGHT, policy)

    assert result.direction == composite_trend(fingerprint, policy).direction
    assert result.metric == TrendMetric.ROUTING_WEIGHT
    assert result.confidence == pytest.approx(0.5)
