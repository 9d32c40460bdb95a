"""
Pydantic data models shared by the scoring core, the fingerprint source
and the HTTP layer.
"""

from .fingerprint import CapabilityScore, MetricWindow, ModelFingerprint, StoredTrend
from .health import HealthReport
from .query import FingerprintFilter, RankedModel, RankingResult
from .scoring import ScoringPolicy
from .trend import TrendDirection, TrendMetric, TrendResult

__all__ = [
    "CapabilityScore",
    "FingerprintFilter",
    "HealthReport",
    "MetricWindow",
    "ModelFingerprint",
    "RankedModel",
    "RankingResult",
    "ScoringPolicy",
    "StoredTrend",
    "TrendDirection",
    "TrendMetric",
    "TrendResult",
]
