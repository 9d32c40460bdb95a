"""
Routing weight calculator.

Maps latency, cost, failure rate and cache hit rate onto a single
desirability score in [0, 1]. The function is pure and total: it never
raises and always clamps, so callers can feed it raw averages without
pre-validation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from modelperf.schemas import MetricWindow, ModelFingerprint, ScoringPolicy

DEFAULT_POLICY = ScoringPolicy()


@dataclass(frozen=True)
class ScoreBreakdown:
    latency_score: float
    cost_score: float
    reliability_score: float
    cache_score: float
    weight: float


def _finite_or_zero(value: float | None) -> float:
    if value is None or math.isnan(value):
        return 0.0
    return float(value)


def _clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


def _normalise(value: float, cap: float) -> float:
    """
    Map value onto [0, 1] with `cap` as the worst case; 1.0 means best.
    """
    return 1.0 - min(1.0, value / cap)


def score_breakdown(
    avg_latency_p50: float | None,
    avg_cost_per_1k_units: float | None,
    avg_failure_rate: float | None,
    avg_cache_hit_rate: float | None,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> ScoreBreakdown:
    latency_score = _normalise(_finite_or_zero(avg_latency_p50), policy.latency_cap_ms)
    cost_score = _normalise(_finite_or_zero(avg_cost_per_1k_units), policy.cost_cap_per_1k_units)
    reliability_score = 1.0 - _finite_or_zero(avg_failure_rate)
    cache_score = _finite_or_zero(avg_cache_hit_rate)

    weight = (
        latency_score * policy.latency_weight
        + cost_score * policy.cost_weight
        + reliability_score * policy.reliability_weight
        + cache_score * policy.cache_weight
    )
    # inf - inf style inputs can still produce NaN here.
    weight = 0.0 if math.isnan(weight) else _clamp(weight)
    return ScoreBreakdown(
        latency_score=latency_score,
        cost_score=cost_score,
        reliability_score=reliability_score,
        cache_score=cache_score,
        weight=weight,
    )


def score(
    avg_latency_p50: float | None,
    avg_cost_per_1k_units: float | None,
    avg_failure_rate: float | None,
    avg_cache_hit_rate: float | None,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> float:
    """
    Composite routing weight in [0, 1].

    All-zero input yields 0.80 with the default policy: an unobserved model
    is not penalised as failing, but gets no credit for cache efficiency.
    """
    return score_breakdown(
        avg_latency_p50,
        avg_cost_per_1k_units,
        avg_failure_rate,
        avg_cache_hit_rate,
        policy,
    ).weight


def score_window(window: MetricWindow, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    return score(
        window.latency_p50,
        window.cost_per_1k_units,
        window.failure_rate,
        window.cache_hit_rate,
        policy,
    )


def resolve_routing_weight(
    fingerprint: ModelFingerprint, policy: ScoringPolicy = DEFAULT_POLICY
) -> float:
    """
    The stored routing weight, or the 24h window score when the record has none.
    """
    if fingerprint.routing_weight is not None:
        return _clamp(fingerprint.routing_weight)
    return score_window(fingerprint.window_24h, policy)


__all__ = [
    "DEFAULT_POLICY",
    "ScoreBreakdown",
    "resolve_routing_weight",
    "score",
    "score_breakdown",
    "score_window",
]
