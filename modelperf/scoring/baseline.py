"""
Previous-period baseline reconstruction.

Only three rolling windows exist at any time, so there is no stored
"previous 24h" score to diff against. The 7d and 30d windows are averaged
metric by metric and run through the same calculator as the live score,
which keeps current and baseline formula-consistent.
"""

from __future__ import annotations

from modelperf.logging_config import logger
from modelperf.schemas import MetricWindow, ScoringPolicy

from .calculator import DEFAULT_POLICY, score


def _mean(a: float, b: float) -> float:
    return (a + b) / 2.0


def reconstruct_baseline(
    window_7d: MetricWindow,
    window_30d: MetricWindow,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> float:
    # A window without data stays in the mean as zeros, which pulls the
    # baseline toward the neutral all-zero score. Kept as observed upstream.
    if window_7d.has_data != window_30d.has_data:
        logger.debug(
            "Baseline reconstructed with a zero-filled %s window",
            "7d" if not window_7d.has_data else "30d",
        )

    return score(
        _mean(window_7d.latency_p50, window_30d.latency_p50),
        _mean(window_7d.cost_per_1k_units, window_30d.cost_per_1k_units),
        _mean(window_7d.failure_rate, window_30d.failure_rate),
        _mean(window_7d.cache_hit_rate, window_30d.cache_hit_rate),
        policy,
    )


__all__ = ["reconstruct_baseline"]
