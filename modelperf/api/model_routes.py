from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from redis.asyncio import Redis

from modelperf.auth import require_api_key
from modelperf.deps import get_redis
from modelperf.errors import not_found, service_unavailable
from modelperf.schemas import (
    FingerprintFilter,
    HealthReport,
    RankedModel,
    RankingResult,
    TrendMetric,
    TrendResult,
)
from modelperf.scoring import FingerprintNotFound, FingerprintSourceUnavailable, top_performers
from modelperf.services.model_performance_service import get_health, get_model_trend, rank_models

router = APIRouter(
    tags=["model-performance"],
    dependencies=[Depends(require_api_key)],
)


class RankedModelsResponse(BaseModel):
    items: list[RankedModel] = Field(default_factory=list)
    skipped: int = Field(0, description="Invalid fingerprint records skipped")
    total: int = Field(0, description="Number of items returned")


def get_fingerprint_filter(
    capability: str | None = Query(default=None),
    max_cost_per_1k_units: float | None = Query(default=None),
    min_quality_score: float | None = Query(default=None),
    max_latency_ms: float | None = Query(default=None),
    min_routing_weight: float | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
) -> FingerprintFilter:
    return FingerprintFilter(
        capability=capability,
        max_cost_per_1k_units=max_cost_per_1k_units,
        min_quality_score=min_quality_score,
        max_latency_ms=max_latency_ms,
        min_routing_weight=min_routing_weight,
        limit=limit,
    )


async def _rank_or_503(redis: Redis, criteria: FingerprintFilter) -> RankingResult:
    try:
        return await rank_models(redis, criteria)
    except FingerprintSourceUnavailable as exc:
        raise service_unavailable(str(exc))


@router.get("/models/best", response_model=RankedModelsResponse)
async def best_models(
    criteria: FingerprintFilter = Depends(get_fingerprint_filter),
    redis: Redis = Depends(get_redis),
) -> RankedModelsResponse:
    """
    Rank active models by routing weight under the given filter.
    """
    result = await _rank_or_503(redis, criteria)
    return RankedModelsResponse(items=result.items, skipped=result.skipped, total=result.total)


@router.get("/models/top", response_model=RankedModelsResponse)
async def top_models(
    count: int = Query(default=3, ge=1, le=50),
    criteria: FingerprintFilter = Depends(get_fingerprint_filter),
    redis: Redis = Depends(get_redis),
) -> RankedModelsResponse:
    result = await _rank_or_503(redis, criteria)
    items = top_performers(result, count)
    return RankedModelsResponse(items=items, skipped=result.skipped, total=len(items))


@router.get("/models/{model_id:path}/trend", response_model=TrendResult)
async def model_trend(
    model_id: str,
    metric: TrendMetric = Query(default=TrendMetric.COST),
    redis: Redis = Depends(get_redis),
) -> TrendResult:
    """
    Trend of one metric for one model (routing_weight gives the composite trend).
    """
    try:
        return await get_model_trend(redis, model_id, metric)
    except FingerprintNotFound as exc:
        raise not_found(str(exc), details={"model_id": exc.model_id})
    except FingerprintSourceUnavailable as exc:
        raise service_unavailable(str(exc))


@router.get("/health", response_model=HealthReport)
async def subsystem_health(redis: Redis = Depends(get_redis)) -> HealthReport:
    return await get_health(redis)


__all__ = ["router"]
