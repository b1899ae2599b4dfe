"""Health and error envelopes shared by every route."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

API_VERSION = "0.1.0"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Liveness answer; says nothing about the store."""

    status: HealthStatus
    timestamp: datetime = Field(default_factory=_utcnow)
    version: str = Field(default=API_VERSION, description="API version")


class CheckResult(BaseModel):
    """Outcome of one readiness check."""

    name: str = Field(description="Checked dependency, e.g. 'database'")
    healthy: bool
    latency_ms: float | None = Field(default=None, description="Time the check took")
    error: str | None = Field(default=None, description="Failure reason when unhealthy")


class ReadinessResponse(BaseModel):
    """Readiness answer, healthy only when the match store responds."""

    status: HealthStatus
    timestamp: datetime = Field(default_factory=_utcnow)
    checks: list[CheckResult] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """JSON body of every error returned by the error middleware.

    `error` carries the machine-readable error_type (e.g. "self_like",
    "match_not_found"); `message` is for humans.
    """

    error: str = Field(description="Error type for client handling")
    message: str = Field(description="Human-readable error description")
    details: list[dict[str, Any]] | None = Field(default=None, description="Extra context, if any")
    request_id: str | None = Field(default=None, description="X-Request-ID of the failed request")
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_exception(
        cls,
        error_type: str,
        message: str,
        details: list[dict[str, Any]] | None = None,
        request_id: str | None = None,
    ) -> "ErrorResponse":
        """Build the envelope from an APIError's fields."""
        return cls(error=error_type, message=message, details=details or None, request_id=request_id)
