"""
Trend classification.

A model's trend compares its current value against the baseline
reconstructed from the older windows. Movements smaller than the policy
threshold are reported as stable to keep low-volume noise out of the
dashboard.
"""

from __future__ import annotations

from modelperf.schemas import ModelFingerprint, ScoringPolicy, TrendDirection, TrendMetric, TrendResult

from .baseline import reconstruct_baseline
from .calculator import DEFAULT_POLICY, resolve_routing_weight

# Window attribute per metric; all of them are "lower is better".
_WINDOW_METRICS: dict[TrendMetric, str] = {
    TrendMetric.LATENCY: "latency_p50",
    TrendMetric.COST: "cost_per_1k_units",
    TrendMetric.FAILURE_RATE: "failure_rate",
}


def _metric_scale(metric: TrendMetric, policy: ScoringPolicy) -> float:
    if metric == TrendMetric.LATENCY:
        return policy.latency_cap_ms
    if metric == TrendMetric.COST:
        return policy.cost_cap_per_1k_units
    return 1.0


def _percentage_change(current: float, baseline: float) -> float:
    if baseline > 0:
        return (current - baseline) / baseline * 100.0
    return 0.0


def _direction(diff: float, threshold: float) -> TrendDirection:
    if diff > threshold:
        return TrendDirection.IMPROVING
    if diff < -threshold:
        return TrendDirection.DEGRADING
    return TrendDirection.STABLE


def classify(
    current_weight: float,
    baseline_weight: float,
    threshold: float = DEFAULT_POLICY.trend_threshold,
) -> TrendResult:
    """
    Compare a current score with its baseline.

    A zero baseline (no prior history) reports 0% change; the direction
    still follows the raw difference.
    """
    diff = current_weight - baseline_weight
    return TrendResult(
        direction=_direction(diff, threshold),
        percentage_change=_percentage_change(current_weight, baseline_weight),
        current=current_weight,
        baseline=baseline_weight,
    )


def _confidence(fingerprint: ModelFingerprint, policy: ScoringPolicy) -> float:
    requests = max(fingerprint.window_24h.total_requests, 0)
    return min(1.0, requests / policy.confidence_sample_size)


def composite_trend(
    fingerprint: ModelFingerprint, policy: ScoringPolicy = DEFAULT_POLICY
) -> TrendResult:
    current = resolve_routing_weight(fingerprint, policy)
    baseline = reconstruct_baseline(fingerprint.window_7d, fingerprint.window_30d, policy)
    return classify(current, baseline, policy.trend_threshold)


def _quality(fingerprint: ModelFingerprint) -> float:
    return max((c.quality_score for c in fingerprint.capability_scores), default=0.0)


def metric_trend(
    fingerprint: ModelFingerprint,
    metric: TrendMetric,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> TrendResult:
    """
    Trend of a single metric for one model.

    Direction is decided on the raw change scaled by the metric's score cap,
    signed so that a drop counts as improving; one threshold then applies
    to every metric. The reported percentage is the change of the raw metric.
    """
    confidence = _confidence(fingerprint, policy)

    if metric == TrendMetric.ROUTING_WEIGHT:
        result = composite_trend(fingerprint, policy)
        return result.model_copy(update={"confidence": confidence})

    if metric == TrendMetric.QUALITY:
        # Windows carry no quality history; rely on the upstream trend if any.
        quality = _quality(fingerprint)
        stored = fingerprint.stored_trend(TrendMetric.QUALITY)
        if stored is None:
            return TrendResult(
                direction=TrendDirection.STABLE,
                percentage_change=0.0,
                current=quality,
                baseline=quality,
                metric=metric,
                confidence=0.0,
            )
        return TrendResult(
            direction=stored.direction,
            percentage_change=stored.percentage_change,
            current=quality,
            baseline=quality,
            metric=metric,
            confidence=stored.confidence,
        )

    field = _WINDOW_METRICS[metric]
    w7, w30 = fingerprint.window_7d, fingerprint.window_30d
    current_raw = getattr(fingerprint.window_24h, field)
    baseline_raw = (getattr(w7, field) + getattr(w30, field)) / 2.0

    # Unclamped so a model already past the cap still shows movement.
    diff = (baseline_raw - current_raw) / _metric_scale(metric, policy)

    return TrendResult(
        direction=_direction(diff, policy.trend_threshold),
        percentage_change=_percentage_change(current_raw, baseline_raw),
        current=current_raw,
        baseline=baseline_raw,
        metric=metric,
        confidence=confidence,
    )


__all__ = ["classify", "composite_trend", "metric_trend"]
