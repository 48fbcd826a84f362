"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status

from app.api import schemas
from app.api.dependencies import get_paste_storage
from app.core.config import settings
from app.storage import PasteStorage

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    response_model=schemas.HealthStatus,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(storage: PasteStorage = Depends(get_paste_storage)):
    """Check health of all system components."""
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {}
    }

    # Measure storage ping latency
    start_time = time.time()
    is_up = await storage.ping()
    latency = round((time.time() - start_time) * 1000, 2)

    if is_up:
        health_status["components"]["storage"] = {
            "status": "healthy",
            "backend": storage.name,
            "latency_ms": latency
        }
    else:
        health_status["status"] = "degraded"
        health_status["components"]["storage"] = {
            "status": "unhealthy",
            "backend": storage.name,
            "error": "Storage ping failed"
        }

    return health_status


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(storage: PasteStorage = Depends(get_paste_storage)):
    """Check if application is ready to handle requests."""
    components_status = {"api": True, "storage": await storage.ping()}

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


@router.get(
    "/healthz",
    response_model=schemas.HealthCheck,
    summary="Storage reachability probe",
)
async def healthz(storage: PasteStorage = Depends(get_paste_storage)):
    return schemas.HealthCheck(ok=await storage.ping())
