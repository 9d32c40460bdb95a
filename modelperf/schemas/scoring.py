from pydantic import BaseModel, Field


class ScoringPolicy(BaseModel):
    """
    Policy constants for the routing weight formula and trend threshold.
    """

    latency_weight: float = Field(
        default=0.25, description="Latency score weight coefficient", ge=0.0
    )
    cost_weight: float = Field(
        default=0.25, description="Cost score weight coefficient", ge=0.0
    )
    reliability_weight: float = Field(
        default=0.30, description="Reliability (1 - failure rate) weight coefficient", ge=0.0
    )
    cache_weight: float = Field(
        default=0.20, description="Cache hit rate weight coefficient", ge=0.0
    )
    latency_cap_ms: float = Field(
        default=10000.0, description="p50 latency treated as the worst case", gt=0.0
    )
    cost_cap_per_1k_units: float = Field(
        default=0.01, description="Cost per 1K units treated as the worst case", gt=0.0
    )
    trend_threshold: float = Field(
        default=0.005,
        description="Score movement below this is reported as stable",
        ge=0.0,
    )
    confidence_sample_size: int = Field(
        default=100,
        description="24h requests needed for a fully confident single-metric trend",
        ge=1,
    )


__all__ = ["ScoringPolicy"]
