"""
Query, filter and rank model fingerprints.

Pure pipeline over an in-memory snapshot: validate each record, drop
what the filter rejects, attach the composite trend and sort with a
total ordering so that "top performers" lists are reproducible.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from modelperf.logging_config import logger
from modelperf.schemas import (
    FingerprintFilter,
    ModelFingerprint,
    RankedModel,
    RankingResult,
    ScoringPolicy,
)

from .calculator import DEFAULT_POLICY, resolve_routing_weight
from .exceptions import InvalidFingerprint
from .trend import composite_trend


def parse_fingerprint(record: Any) -> ModelFingerprint:
    """
    Validate one raw record, raising InvalidFingerprint when it cannot be used.
    """
    if isinstance(record, ModelFingerprint):
        return record
    if not isinstance(record, dict):
        raise InvalidFingerprint(f"expected a mapping, got {type(record).__name__}")
    try:
        return ModelFingerprint.model_validate(record)
    except ValidationError as exc:
        model_id = record.get("model_id") or record.get("modelId")
        raise InvalidFingerprint(str(exc), model_id=model_id) from exc


def parse_fingerprints(records: Iterable[Any]) -> tuple[list[ModelFingerprint], int]:
    """
    Return (valid fingerprints, number of skipped records).
    """
    parsed: list[ModelFingerprint] = []
    skipped = 0
    for record in records:
        try:
            parsed.append(parse_fingerprint(record))
        except InvalidFingerprint as exc:
            skipped += 1
            logger.debug("Skipping invalid fingerprint %s: %s", exc.model_id, exc)
    return parsed, skipped


def _best_quality(fingerprint: ModelFingerprint, capability: str | None) -> float:
    if capability:
        entry = fingerprint.capability(capability)
        return entry.quality_score if entry is not None else 0.0
    return max((c.quality_score for c in fingerprint.capability_scores), default=0.0)


def matches_filter(
    fingerprint: ModelFingerprint,
    criteria: FingerprintFilter,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> bool:
    if not fingerprint.active:
        return False

    window = fingerprint.window_24h
    if criteria.capability and fingerprint.capability(criteria.capability) is None:
        return False
    if (
        criteria.max_cost_per_1k_units is not None
        and window.cost_per_1k_units > criteria.max_cost_per_1k_units
    ):
        return False
    if criteria.max_latency_ms is not None and window.latency_p50 > criteria.max_latency_ms:
        return False
    if (
        criteria.min_quality_score is not None
        and _best_quality(fingerprint, criteria.capability) < criteria.min_quality_score
    ):
        return False
    if (
        criteria.min_routing_weight is not None
        and resolve_routing_weight(fingerprint, policy) < criteria.min_routing_weight
    ):
        return False
    return True


def _sort_key(item: RankedModel) -> tuple[float, float, str]:
    return (-item.routing_weight, item.fingerprint.window_24h.latency_p50, item.fingerprint.model_id)


def rank_fingerprints(
    records: Iterable[Any],
    criteria: FingerprintFilter | None = None,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> RankingResult:
    """
    Filter and rank fingerprints by routing weight.

    Ties are broken by lower 24h p50 latency, then by model id. Invalid
    records are skipped and counted; an empty result is a valid answer.
    """
    criteria = criteria or FingerprintFilter()
    fingerprints, skipped = parse_fingerprints(records)
    if skipped:
        logger.warning("Skipped %d invalid fingerprint records", skipped)

    ranked: list[RankedModel] = []
    for fingerprint in fingerprints:
        if not matches_filter(fingerprint, criteria, policy):
            continue
        trend = composite_trend(fingerprint, policy)
        ranked.append(
            RankedModel(
                fingerprint=fingerprint,
                routing_weight=trend.current,
                trend_direction=trend.direction,
                trend_percentage=trend.percentage_change,
            )
        )

    ranked.sort(key=_sort_key)
    if criteria.limit is not None:
        ranked = ranked[: criteria.limit]

    logger.info(
        "Ranked %d of %d fingerprints (skipped=%d)",
        len(ranked),
        len(fingerprints),
        skipped,
    )
    return RankingResult(items=ranked, skipped=skipped)


def top_performers(result: RankingResult, count: int = 3) -> list[RankedModel]:
    if count <= 0:
        return []
    return result.items[:count]


__all__ = [
    "matches_filter",
    "parse_fingerprint",
    "parse_fingerprints",
    "rank_fingerprints",
    "top_performers",
]
