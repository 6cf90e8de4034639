"""
Pipeline Demo — Health Check Route
===================================

What:  Liveness endpoint for monitors, load balancers and pipeline smoke tests.
How:   Reads uptime and process memory counters; nothing is stored or mutated.
When:  Computed fresh on every request.

Health Check Philosophy:
    The service has no dependencies (no database, no upstream APIs), so a
    process that can answer this request is healthy. The status is always
    "healthy" with HTTP 200.
"""

from fastapi import APIRouter

from pipeline_demo.schemas.user import HealthResponse, utc_timestamp
from pipeline_demo.services.system import memory_usage, uptime_seconds

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns uptime in seconds, a timestamp and process memory counters.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        uptime=uptime_seconds(),
        timestamp=utc_timestamp(),
        memory=memory_usage(),
    )
