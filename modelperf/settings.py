from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read from OS env and optional .env file in project root.
    _project_root = Path(__file__).parent.parent

    model_config = SettingsConfigDict(
        env_file=str(_project_root / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Redis connection string (fingerprint + health source).
    redis_url: str = Field(
        "redis://localhost:6379/0",
        alias="REDIS_URL",
        description="Redis connection URL, e.g. 'redis://redis:6379/0'",
    )
    fingerprint_read_timeout_seconds: float = Field(
        5.0,
        alias="FINGERPRINT_READ_TIMEOUT_SECONDS",
        description="Upper bound for one bulk read of fingerprints from the telemetry store",
        gt=0,
    )

    # Application log level for the modelperf logger.
    # Can be overridden via LOG_LEVEL env var, e.g. "DEBUG" while debugging.
    log_level: str = Field(
        "INFO",
        alias="LOG_LEVEL",
        description="Application log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_timezone: Optional[str] = Field(
        default=None,
        alias="LOG_TIMEZONE",
        description="Timezone name for log timestamps, e.g. 'Asia/Shanghai'. Defaults to system local time.",
    )
    log_dir: str = Field(
        "logs",
        alias="LOG_DIR",
        description="Directory for the daily rotated log files",
    )

    # Shared API token required by clients when calling the dashboard API.
    # Left empty, every authenticated endpoint answers 500 until it is set.
    api_auth_token: str = Field(
        "",
        alias="APIPROXY_AUTH_TOKEN",
        description="Plain token; clients send base64(token) as Bearer or X-API-Key",
    )

    # Scoring policy. Defaults mirror the routing weight formula used by the
    # telemetry pipeline; only change them together with the writer side.
    score_latency_cap_ms: float = Field(
        10000.0,
        alias="SCORE_LATENCY_CAP_MS",
        description="p50 latency that maps to the worst latency score",
        gt=0,
    )
    score_cost_cap_per_1k_units: float = Field(
        0.01,
        alias="SCORE_COST_CAP_PER_1K_UNITS",
        description="Cost per 1K units that maps to the worst cost score",
        gt=0,
    )
    score_latency_weight: float = Field(0.25, alias="SCORE_LATENCY_WEIGHT", ge=0.0)
    score_cost_weight: float = Field(0.25, alias="SCORE_COST_WEIGHT", ge=0.0)
    score_reliability_weight: float = Field(
        0.30, alias="SCORE_RELIABILITY_WEIGHT", ge=0.0
    )
    score_cache_weight: float = Field(0.20, alias="SCORE_CACHE_WEIGHT", ge=0.0)
    trend_threshold: float = Field(
        0.005,
        alias="TREND_THRESHOLD",
        description="Minimum score movement reported as improving/degrading",
        ge=0.0,
    )
    trend_confidence_sample_size: int = Field(
        100,
        alias="TREND_CONFIDENCE_SAMPLE_SIZE",
        description="24h request count at which a single-metric trend reaches full confidence",
        ge=1,
    )


settings = Settings()
