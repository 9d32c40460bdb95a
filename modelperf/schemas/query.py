from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .fingerprint import ModelFingerprint
from .trend import TrendDirection


class FingerprintFilter(BaseModel):
    """
    Conjunctive filter for the best-models query. Every field is optional.
    """

    capability: str | None = Field(
        default=None, description="Only keep models exposing this capability"
    )
    max_cost_per_1k_units: float | None = Field(
        default=None, description="Upper bound on 24h cost per 1K units"
    )
    min_quality_score: float | None = Field(
        default=None, description="Lower bound on capability quality score"
    )
    max_latency_ms: float | None = Field(
        default=None, description="Upper bound on 24h p50 latency"
    )
    min_routing_weight: float | None = Field(
        default=None, description="Lower bound on the routing weight"
    )
    limit: int | None = Field(
        default=None, description="Maximum number of ranked rows to return", ge=1
    )

    @field_validator(
        "max_cost_per_1k_units",
        "min_quality_score",
        "max_latency_ms",
        "min_routing_weight",
    )
    @classmethod
    def _non_finite_means_unconstrained(cls, value: float | None) -> float | None:
        if value is None or not math.isfinite(value):
            return None
        return value

    @field_validator("capability", mode="before")
    @classmethod
    def _blank_capability(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RankedModel(BaseModel):
    fingerprint: ModelFingerprint
    routing_weight: float = Field(..., description="Resolved routing weight in [0, 1]")
    trend_direction: TrendDirection
    trend_percentage: float


class RankingResult(BaseModel):
    items: list[RankedModel] = Field(default_factory=list)
    skipped: int = Field(default=0, description="Invalid fingerprint records skipped", ge=0)

    @property
    def total(self) -> int:
        return len(self.items)


__all__ = ["FingerprintFilter", "RankedModel", "RankingResult"]
