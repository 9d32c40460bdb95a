from __future__ import annotations


class InvalidFingerprint(ValueError):
    """Raised when a fingerprint record lacks usable identity fields."""

    def __init__(self, message: str, *, model_id: str | None = None):
        self.model_id = model_id
        super().__init__(message)


class FingerprintNotFound(LookupError):
    """Raised when a single-model lookup finds no fingerprint."""

    def __init__(self, model_id: str):
        self.model_id = model_id
        super().__init__(f"Model '{model_id}' not found")


class FingerprintSourceUnavailable(RuntimeError):
    """Raised when the telemetry store cannot be read in time."""


__all__ = ["FingerprintNotFound", "FingerprintSourceUnavailable", "InvalidFingerprint"]
