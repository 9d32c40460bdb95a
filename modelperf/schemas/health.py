from pydantic import BaseModel, Field


class HealthReport(BaseModel):
    healthy: bool = Field(..., description="True when every reported check passes")
    checks: dict[str, bool] = Field(default_factory=dict)


__all__ = ["HealthReport"]
