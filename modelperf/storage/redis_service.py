"""
Read-only access to the telemetry store.

Fingerprints and health checks are written by the external ingestion
pipeline; this module only reads them. Key layout:

    perf:fingerprint:{model_id}   JSON fingerprint record
    perf:health                   hash of check name -> "1"/"0"/"true"/"false"
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from redis.asyncio import Redis

from modelperf.logging_config import logger
from modelperf.redis_client import redis_get_json

FINGERPRINT_KEY_TEMPLATE = "perf:fingerprint:{model_id}"
HEALTH_KEY = "perf:health"

_TRUTHY = {"1", "true", "yes", "ok", "up"}


def fingerprint_key(model_id: str) -> str:
    return FINGERPRINT_KEY_TEMPLATE.format(model_id=model_id)


async def list_fingerprint_payloads(redis: Redis) -> List[Any]:
    """
    Bulk read of every stored fingerprint, as raw decoded JSON.

    Keys are sorted so the snapshot order does not depend on the server's
    keyspace iteration. Malformed JSON shows up as None and is counted as
    an invalid record downstream.
    """
    pattern = fingerprint_key("*")
    keys = sorted(await redis.keys(pattern))
    payloads: List[Any] = []
    for key in keys:
        payloads.append(await redis_get_json(redis, key))
    logger.debug("Loaded %d fingerprint payloads", len(payloads))
    return payloads


async def get_fingerprint_payload(redis: Redis, model_id: str) -> Optional[Any]:
    return await redis_get_json(redis, fingerprint_key(model_id))


def _as_bool(raw: Any) -> bool:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="ignore")
    return str(raw).strip().lower() in _TRUTHY


async def get_health_checks(redis: Redis) -> Dict[str, bool]:
    raw = await redis.hgetall(HEALTH_KEY)
    checks: Dict[str, bool] = {}
    for name, value in (raw or {}).items():
        if isinstance(name, bytes):
            name = name.decode("utf-8", errors="ignore")
        checks[str(name)] = _as_bool(value)
    return dict(sorted(checks.items()))


__all__ = [
    "FINGERPRINT_KEY_TEMPLATE",
    "HEALTH_KEY",
    "fingerprint_key",
    "get_fingerprint_payload",
    "get_health_checks",
    "list_fingerprint_payloads",
]
