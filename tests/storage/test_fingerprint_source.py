import json

import pytest

from modelperf.storage.redis_service import (
    HEALTH_KEY,
    fingerprint_key,
    get_fingerprint_payload,
    get_health_checks,
    list_fingerprint_payloads,
)
from tests.utils import InMemoryRedis, fingerprint_payload, store_fingerprint


def test_fingerprint_key_layout():
    assert fingerprint_key("openai/gpt-4o") == "perf:fingerprint:openai/gpt-4o"


@pytest.mark.asyncio
async def test_list_fingerprint_payloads_is_sorted_by_key():
    redis = InMemoryRedis()
    for model_id in ("b-model", "c-model", "a-model"):
        await store_fingerprint(redis, fingerprint_payload(model_id))
    await redis.set("unrelated:key", "{}")

    payloads = await list_fingerprint_payloads(redis)

    assert [p["modelId"] for p in payloads] == ["a-model", "b-model", "c-model"]


@pytest.mark.asyncio
async def test_list_fingerprint_payloads_keeps_malformed_entries_as_none():
    redis = InMemoryRedis()
    await store_fingerprint(redis, fingerprint_payload("good"))
    await redis.set(fingerprint_key("broken"), "{not json")

    payloads = await list_fingerprint_payloads(redis)

    assert payloads[0] is None
    assert payloads[1]["modelId"] == "good"


@pytest.mark.asyncio
async def test_get_fingerprint_payload_missing_returns_none():
    redis = InMemoryRedis()
    await redis.set(fingerprint_key("gpt-4o"), json.dumps({"modelId": "gpt-4o"}))

    assert await get_fingerprint_payload(redis, "gpt-4o") == {"modelId": "gpt-4o"}
    assert await get_fingerprint_payload(redis, "unknown") is None


@pytest.mark.asyncio
async def test_get_health_checks_parses_flags():
    redis = InMemoryRedis()
    await redis.hset(
        HEALTH_KEY,
        mapping={"redis": "1", "ingest": "false", "aggregator": "OK", "scorer": 0},
    )

    checks = await get_health_checks(redis)

    assert checks == {"aggregator": True, "ingest": False, "redis": True, "scorer": False}
    assert list(checks) == ["aggregator", "ingest", "redis", "scorer"]


@pytest.mark.asyncio
async def test_get_health_checks_empty_hash():
    assert await get_health_checks(InMemoryRedis()) == {}
