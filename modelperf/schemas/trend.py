from enum import Enum

from pydantic import BaseModel, Field


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DEGRADING = "degrading"
    STABLE = "stable"


class TrendMetric(str, Enum):
    LATENCY = "latency"
    COST = "cost"
    FAILURE_RATE = "failure_rate"
    QUALITY = "quality"
    ROUTING_WEIGHT = "routing_weight"


class TrendResult(BaseModel):
    """
    Transient trend classification for one model; never persisted.
    """

    direction: TrendDirection = Field(..., description="improving / degrading / stable")
    percentage_change: float = Field(
        ..., description="Signed change relative to the baseline, in percent"
    )
    current: float = Field(..., description="Value compared against the baseline")
    baseline: float = Field(..., description="Reconstructed previous-period value")
    metric: TrendMetric = Field(
        default=TrendMetric.ROUTING_WEIGHT, description="Metric the trend was computed for"
    )
    confidence: float | None = Field(
        default=None,
        description="Share of the confidence sample size observed in the 24h window",
        ge=0.0,
        le=1.0,
    )


__all__ = ["TrendDirection", "TrendMetric", "TrendResult"]
