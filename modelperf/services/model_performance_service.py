"""
Model performance operations exposed to the HTTP layer.

Each call takes one bounded read of the telemetry store and hands the
snapshot to the pure scoring pipeline. Timeouts and cancellation only
apply to the read; scoring a snapshot is fast and runs to completion.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from redis.asyncio import Redis
from redis.exceptions import RedisError

from modelperf.logging_config import logger
from modelperf.schemas import (
    FingerprintFilter,
    HealthReport,
    RankingResult,
    ScoringPolicy,
    TrendMetric,
    TrendResult,
)
from modelperf.scoring import (
    FingerprintNotFound,
    FingerprintSourceUnavailable,
    InvalidFingerprint,
    metric_trend,
    parse_fingerprint,
    rank_fingerprints,
)
from modelperf.settings import Settings, settings
from modelperf.storage.redis_service import (
    get_fingerprint_payload,
    get_health_checks,
    list_fingerprint_payloads,
)

T = TypeVar("T")


def load_scoring_policy(cfg: Settings = settings) -> ScoringPolicy:
    return ScoringPolicy(
        latency_weight=cfg.score_latency_weight,
        cost_weight=cfg.score_cost_weight,
        reliability_weight=cfg.score_reliability_weight,
        cache_weight=cfg.score_cache_weight,
        latency_cap_ms=cfg.score_latency_cap_ms,
        cost_cap_per_1k_units=cfg.score_cost_cap_per_1k_units,
        trend_threshold=cfg.trend_threshold,
        confidence_sample_size=cfg.trend_confidence_sample_size,
    )


async def _bounded_read(read: Awaitable[T], what: str) -> T:
    timeout = settings.fingerprint_read_timeout_seconds
    try:
        return await asyncio.wait_for(read, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise FingerprintSourceUnavailable(
            f"Timed out after {timeout:.1f}s reading {what}"
        ) from exc
    except RedisError as exc:
        raise FingerprintSourceUnavailable(f"Failed to read {what}: {exc}") from exc


async def rank_models(
    redis: Redis,
    criteria: FingerprintFilter | None = None,
    policy: ScoringPolicy | None = None,
) -> RankingResult:
    payloads = await _bounded_read(list_fingerprint_payloads(redis), "fingerprints")
    return rank_fingerprints(payloads, criteria, policy or load_scoring_policy())


async def get_model_trend(
    redis: Redis,
    model_id: str,
    metric: TrendMetric = TrendMetric.COST,
    policy: ScoringPolicy | None = None,
) -> TrendResult:
    payload = await _bounded_read(
        get_fingerprint_payload(redis, model_id), f"fingerprint '{model_id}'"
    )
    if payload is None:
        raise FingerprintNotFound(model_id)
    try:
        fingerprint = parse_fingerprint(payload)
    except InvalidFingerprint as exc:
        logger.warning("Stored fingerprint for %s is invalid: %s", model_id, exc)
        raise FingerprintNotFound(model_id) from exc
    return metric_trend(fingerprint, metric, policy or load_scoring_policy())


async def get_health(redis: Redis) -> HealthReport:
    try:
        checks = await _bounded_read(get_health_checks(redis), "health checks")
    except FingerprintSourceUnavailable as exc:
        logger.warning("Health source unavailable: %s", exc)
        return HealthReport(healthy=False, checks={})
    return HealthReport(healthy=bool(checks) and all(checks.values()), checks=checks)


__all__ = ["get_health", "get_model_trend", "load_scoring_policy", "rank_models"]
