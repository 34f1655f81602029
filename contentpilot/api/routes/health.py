"""Health check endpoints for the ContentPilot API.

Reports configuration readiness of the AI gateway. No upstream call is made:
a health probe must not spend model credits.
"""

from datetime import datetime, timezone
import time
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException

from contentpilot import __version__
from contentpilot.api.models import HealthCheckResponse, HealthStatus
from contentpilot.config.settings import get_settings, Settings

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])

# Track server start time for uptime calculation
_server_start_time: Optional[float] = None


def set_server_start_time() -> None:
    """Set the server start time. Called on application startup."""
    global _server_start_time
    _server_start_time = time.time()


def get_uptime_seconds() -> Optional[float]:
    """Get server uptime in seconds."""
    if _server_start_time is None:
        return None
    return time.time() - _server_start_time


def check_gateway_config(settings: Settings) -> HealthStatus:
    """Check that the AI gateway can be called."""
    if not settings.has_gateway_credentials:
        return HealthStatus(
            status="unhealthy",
            message="AI_GATEWAY_API_KEY is not configured",
        )
    return HealthStatus(
        status="healthy",
        message=f"Gateway configured for model {settings.ai_model}",
    )


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health Check",
    description="Check the health status of the API and its configuration.",
)
async def health_check(
    settings: Settings = Depends(get_settings),
) -> HealthCheckResponse:
    """Report the status of each component."""
    services = {"ai_gateway": check_gateway_config(settings)}

    statuses = [s.status for s in services.values()]
    if all(s == "healthy" for s in statuses):
        overall_status = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall_status = "unhealthy"
    else:
        overall_status = "degraded"

    return HealthCheckResponse(
        status=overall_status,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        services=services,
        uptime_seconds=get_uptime_seconds(),
    )


@router.get(
    "/health/live",
    summary="Liveness Check",
    description="Simple liveness check for container orchestration.",
)
async def liveness() -> dict:
    """
    Simple liveness probe for Kubernetes/Cloud Run.

    Returns 200 if the service is alive.
    """
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get(
    "/health/ready",
    summary="Readiness Check",
    description="Check if the service is ready to accept traffic.",
)
async def readiness(
    settings: Settings = Depends(get_settings),
) -> dict:
    """
    Readiness probe for Kubernetes/Cloud Run.

    Returns 200 only if the gateway credentials are configured.
    """
    gateway_status = check_gateway_config(settings)

    if gateway_status.status == "unhealthy":
        logger.warning("readiness_failed", reason=gateway_status.message)
        raise HTTPException(
            status_code=503,
            detail="Service not ready: AI gateway not configured",
        )

    return {"status": "ready", "timestamp": datetime.now(timezone.utc).isoformat()}
