"""
Redis helper utilities.

Central place to construct the Redis client and small helpers for
JSON-style key access, shared by the fingerprint source and the HTTP
dependencies.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from redis.asyncio import Redis

from .settings import settings

_redis_client: Optional[Redis] = None


def get_redis_client() -> Redis:
    """
    Return a lazily-created global Redis client.

    Construction is sync and does not connect; commands on the client are
    awaited by callers.
    """
    global _redis_client
    if _redis_client is None:
        _redis_client = Redis.from_url(settings.redis_url, decode_responses=True)
    return _redis_client


async def redis_get_json(redis: Redis, key: str) -> Optional[Any]:
    """
    Load a JSON value from Redis.
    Returns None on missing key or malformed payload.
    """
    raw = await redis.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return None


__all__ = ["get_redis_client", "redis_get_json"]
