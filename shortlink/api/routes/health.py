"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status

from shortlink.api import schemas
from shortlink.api.dependencies import get_link_store, get_settings
from shortlink.core.config import Settings
from shortlink.repositories.base import LinkStore

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=schemas.HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(
    store: LinkStore = Depends(get_link_store),
    settings: Settings = Depends(get_settings)
):
    """Check health of all system components."""
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {}
    }

    start_time = time.time()
    reachable = await store.ping()
    latency = round((time.time() - start_time) * 1000, 2)

    if reachable:
        health_status["components"]["store"] = {
            "status": "healthy",
            "backend": type(store).__name__,
            "latency_ms": latency
        }
    else:
        health_status["status"] = "degraded"
        health_status["components"]["store"] = {
            "status": "unhealthy",
            "backend": type(store).__name__,
            "error": "Link store is not reachable"
        }

    return health_status


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(store: LinkStore = Depends(get_link_store)):
    """Check if application is ready to handle requests."""
    components_status = {"api": True, "store": await store.ping()}

    return {
        "ready": all(components_status.values()),
        "components": components_status
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
