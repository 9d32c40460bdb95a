from __future__ import annotations

import fnmatch
import json
from typing import Any


class InMemoryRedis:
    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._hashes: dict[str, dict[str, str]] = {}

    async def get(self, key: str):
        return self._data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None):
        self._data[key] = value

    async def keys(self, pattern: str) -> list[str]:
        # Reverse insertion order to make sure callers do their own sorting.
        return [k for k in reversed(list(self._data)) if fnmatch.fnmatch(k, pattern)]

    async def hset(self, key: str, mapping: dict[str, Any]) -> int:
        bucket = self._hashes.setdefault(key, {})
        for field, value in mapping.items():
            bucket[field] = str(value)
        return len(mapping)

    async def hgetall(self, key: str) -> dict[str, str]:
        return dict(self._hashes.get(key, {}))


def window(
    *,
    latency_p50: float = 0.0,
    cost: float = 0.0,
    failure_rate: float = 0.0,
    cache_hit_rate: float = 0.0,
    total_requests: int = 0,
) -> dict[str, Any]:
    return {
        "latencyP50": latency_p50,
        "costPer1KUnits": cost,
        "failureRate": failure_rate,
        "cacheHitRate": cache_hit_rate,
        "totalRequests": total_requests,
    }


def fingerprint_payload(
    model_id: str,
    *,
    provider: str = "openai",
    routing_weight: float | None = None,
    window_24h: dict[str, Any] | None = None,
    window_7d: dict[str, Any] | None = None,
    window_30d: dict[str, Any] | None = None,
    capabilities: list[dict[str, Any]] | None = None,
    active: bool = True,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "modelId": model_id,
        "provider": provider,
        "isActive": active,
        "capabilities": capabilities or [],
    }
    if routing_weight is not None:
        payload["routingWeight"] = routing_weight
    if window_24h is not None:
        payload["window24h"] = window_24h
    if window_7d is not None:
        payload["window7d"] = window_7d
    if window_30d is not None:
        payload["window30d"] = window_30d
    return payload


async def store_fingerprint(redis: InMemoryRedis, payload: dict[str, Any]) -> None:
    await redis.set(f"perf:fingerprint:{payload['modelId']}", json.dumps(payload))
