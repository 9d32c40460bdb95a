from .baseline import reconstruct_baseline
from .calculator import (
    DEFAULT_POLICY,
    ScoreBreakdown,
    resolve_routing_weight,
    score,
    score_breakdown,
    score_window,
)
from .exceptions import FingerprintNotFound, FingerprintSourceUnavailable, InvalidFingerprint
from .ranking import (
    matches_filter,
    parse_fingerprint,
    parse_fingerprints,
    rank_fingerprints,
    top_performers,
)
from .trend import classify, composite_trend, metric_trend

__all__ = [
    "DEFAULT_POLICY",
    "FingerprintNotFound",
    "FingerprintSourceUnavailable",
    "InvalidFingerprint",
    "ScoreBreakdown",
    "classify",
    "composite_trend",
    "matches_filter",
    "metric_trend",
    "parse_fingerprint",
    "parse_fingerprints",
    "rank_fingerprints",
    "reconstruct_baseline",
    "resolve_routing_weight",
    "score",
    "score_breakdown",
    "score_window",
    "top_performers",
]
