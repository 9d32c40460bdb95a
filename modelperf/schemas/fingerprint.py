"""
Fingerprint data model.

Telemetry records arrive from the ingestion pipeline in a loosely typed
shape: camelCase keys, a nested ``latency`` block, fields that are missing
or null for horizons without traffic yet. Everything is normalised here,
once, so that the scoring code can rely on fully populated numbers.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .trend import TrendDirection, TrendMetric

_LATENCY_PERCENTILES = ("p50", "p90", "p95", "p99")

# window attribute -> accepted keys in incoming payloads
_WINDOW_KEYS = {
    "window_24h": ("window_24h", "window24h", "24h"),
    "window_7d": ("window_7d", "window7d", "7d"),
    "window_30d": ("window_30d", "window30d", "30d"),
}


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _first_present(payload: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if not _is_absent(value):
            return value
    return None


def _absent_to_zero(value: Any) -> Any:
    if _is_absent(value):
        return 0
    return value


class MetricWindow(BaseModel):
    """
    Telemetry for one model over one trailing horizon (24h, 7d or 30d).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    latency_p50: float = Field(
        0.0,
        validation_alias=AliasChoices("latency_p50", "latencyP50"),
        description="P50 latency in milliseconds",
    )
    latency_p90: float = Field(
        0.0,
        validation_alias=AliasChoices("latency_p90", "latencyP90"),
        description="P90 latency in milliseconds",
    )
    latency_p95: float = Field(
        0.0,
        validation_alias=AliasChoices("latency_p95", "latencyP95"),
        description="P95 latency in milliseconds",
    )
    latency_p99: float = Field(
        0.0,
        validation_alias=AliasChoices("latency_p99", "latencyP99"),
        description="P99 latency in milliseconds",
    )
    total_requests: int = Field(
        0, validation_alias=AliasChoices("total_requests", "totalRequests")
    )
    successful_requests: int = Field(
        0, validation_alias=AliasChoices("successful_requests", "successfulRequests")
    )
    failed_requests: int = Field(
        0, validation_alias=AliasChoices("failed_requests", "failedRequests")
    )
    failure_rate: float = Field(
        0.0,
        validation_alias=AliasChoices("failure_rate", "failureRate"),
        description="Failed / total requests in [0, 1]",
    )
    cost_per_1k_units: float = Field(
        0.0,
        validation_alias=AliasChoices(
            "cost_per_1k_units", "costPer1KUnits", "costPer1KTokens", "cost_per_1k_tokens"
        ),
        description="Cost per 1,000 billing units (tokens)",
    )
    avg_cost_per_request: float = Field(
        0.0, validation_alias=AliasChoices("avg_cost_per_request", "avgCostPerRequest")
    )
    cache_hit_rate: float = Field(
        0.0,
        validation_alias=AliasChoices("cache_hit_rate", "cacheHitRate"),
        description="Cache hit ratio in [0, 1]",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalise_payload(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        payload = dict(data)
        latency = payload.pop("latency", None)
        if isinstance(latency, dict):
            for key in _LATENCY_PERCENTILES:
                if _first_present(payload, f"latency_{key}", f"latencyP{key[1:]}") is None:
                    payload[f"latency_{key}"] = latency.get(key)

        # failure_rate is optional upstream; derive it from the counters.
        if _first_present(payload, "failure_rate", "failureRate") is None:
            total = _first_present(payload, "total_requests", "totalRequests")
            failed = _first_present(payload, "failed_requests", "failedRequests")
            if isinstance(total, (int, float)) and isinstance(failed, (int, float)) and total > 0:
                payload["failure_rate"] = failed / total
        return payload

    @field_validator(
        "latency_p50",
        "latency_p90",
        "latency_p95",
        "latency_p99",
        "total_requests",
        "successful_requests",
        "failed_requests",
        "failure_rate",
        "cost_per_1k_units",
        "avg_cost_per_request",
        "cache_hit_rate",
        mode="before",
    )
    @classmethod
    def _default_missing(cls, value: Any) -> Any:
        return _absent_to_zero(value)

    @property
    def has_data(self) -> bool:
        return self.total_requests > 0 or any(
            (
                self.latency_p50,
                self.cost_per_1k_units,
                self.failure_rate,
                self.cache_hit_rate,
            )
        )


class CapabilityScore(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    capability: str
    quality_score: float = Field(
        0.0, validation_alias=AliasChoices("quality_score", "qualityScore")
    )
    cost_efficiency: float = Field(
        0.0, validation_alias=AliasChoices("cost_efficiency", "costEfficiency")
    )
    performance_score: float = Field(
        0.0, validation_alias=AliasChoices("performance_score", "performanceScore")
    )
    sample_size: int = Field(0, validation_alias=AliasChoices("sample_size", "sampleSize"))

    @field_validator(
        "quality_score", "cost_efficiency", "performance_score", "sample_size", mode="before"
    )
    @classmethod
    def _default_missing(cls, value: Any) -> Any:
        return _absent_to_zero(value)


class StoredTrend(BaseModel):
    """
    Trend precomputed by the telemetry pipeline and shipped with the record.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    metric: TrendMetric
    direction: TrendDirection = TrendDirection.STABLE
    percentage_change: float = Field(
        0.0, validation_alias=AliasChoices("percentage_change", "percentageChange")
    )
    confidence: float = Field(0.0, ge=0.0, le=1.0)

    @field_validator("percentage_change", "confidence", mode="before")
    @classmethod
    def _default_missing(cls, value: Any) -> Any:
        return _absent_to_zero(value)


class ModelFingerprint(BaseModel):
    """
    Complete performance record for one model. Read-only: the scoring code
    derives transient values from it and never writes it back.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    model_id: str = Field(..., validation_alias=AliasChoices("model_id", "modelId"))
    provider: str = Field(..., description="Provider id")
    display_name: str = Field(
        ..., validation_alias=AliasChoices("display_name", "displayName", "modelName", "model_name")
    )
    routing_weight: float | None = Field(
        default=None,
        validation_alias=AliasChoices("routing_weight", "routingWeight"),
        description="Composite score of the 24h window; computed on read when absent",
    )
    window_24h: MetricWindow = Field(default_factory=MetricWindow)
    window_7d: MetricWindow = Field(default_factory=MetricWindow)
    window_30d: MetricWindow = Field(default_factory=MetricWindow)
    capability_scores: list[CapabilityScore] = Field(
        default_factory=list,
        validation_alias=AliasChoices("capability_scores", "capabilityScores", "capabilities"),
    )
    trends: list[StoredTrend] = Field(default_factory=list)
    active: bool = Field(True, validation_alias=AliasChoices("active", "isActive", "is_active"))

    @model_validator(mode="before")
    @classmethod
    def _normalise_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        payload = dict(data)
        windows = payload.pop("windows", None)
        windows = windows if isinstance(windows, dict) else {}
        for attr, keys in _WINDOW_KEYS.items():
            window = _first_present(payload, *keys)
            if window is None:
                window = _first_present(windows, *keys)
            for key in keys:
                payload.pop(key, None)
            # A horizon without data is an all-zero window.
            payload[attr] = {} if window is None else window

        display_keys = ("display_name", "displayName", "modelName", "model_name")
        display_name = next(
            (
                payload[key]
                for key in display_keys
                if isinstance(payload.get(key), str) and payload[key].strip()
            ),
            None,
        )
        for key in display_keys:
            payload.pop(key, None)
        payload["display_name"] = display_name or _first_present(payload, "model_id", "modelId")

        for key in ("capability_scores", "capabilityScores", "capabilities", "trends"):
            if key in payload and payload[key] is None:
                payload[key] = []
        return payload

    @field_validator("model_id", "provider")
    @classmethod
    def _require_identity(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("identity fields must not be blank")
        return value

    @field_validator("routing_weight", mode="before")
    @classmethod
    def _nan_weight_is_missing(cls, value: Any) -> Any:
        return None if _is_absent(value) else value

    def capability(self, name: str) -> CapabilityScore | None:
        for entry in self.capability_scores:
            if entry.capability == name:
                return entry
        return None

    def stored_trend(self, metric: TrendMetric) -> StoredTrend | None:
        for entry in self.trends:
            if entry.metric == metric:
                return entry
        return None


__all__ = ["CapabilityScore", "MetricWindow", "ModelFingerprint", "StoredTrend"]
