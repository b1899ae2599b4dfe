"""Health check endpoints for monitoring and deployment verification."""

import time

from fastapi import APIRouter, Response, status

from src.api.deps import Store
from src.core.store import StoreError
from src.schemas.common import CheckResult, HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running. Used for liveness probes.",
)
async def health_check() -> HealthResponse:
    """Return basic health status.

    Always 200 while the process is serving; dependencies are not checked.
    """
    return HealthResponse(status=HealthStatus.HEALTHY)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Store reachable"},
        503: {"description": "Store unreachable"},
    },
    summary="Readiness check",
)
async def readiness_check(response: Response, store: Store) -> ReadinessResponse:
    """Check that the match store can serve requests.

    Args:
        response: FastAPI response object for setting status code.
        store: The application's match store.

    Returns:
        ReadinessResponse: Status of the store check.
    """
    start_time = time.perf_counter()
    try:
        store.ping()
        healthy, error = True, None
    except StoreError as e:
        healthy, error = False, str(e)
    latency_ms = (time.perf_counter() - start_time) * 1000

    checks = [
        CheckResult(
            name="database",
            healthy=healthy,
            latency_ms=round(latency_ms, 2),
            error=error,
        )
    ]

    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status=HealthStatus.HEALTHY if healthy else HealthStatus.UNHEALTHY,
        checks=checks,
    )
