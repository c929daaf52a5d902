# tabstate/routers/health.py
# Health check endpoints for monitoring and load balancers

import time
import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from tabstate.repositories.history_repository import HistoryRepository
from tabstate.routers.history import get_history_repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


class HealthStatus(BaseModel):
    """Health check response model."""
    status: str  # "healthy", "unhealthy"
    timestamp: float
    version: str = "1.0.0"
    checks: Dict[str, Dict[str, Any]] = {}


class ComponentHealth(BaseModel):
    """Individual component health."""
    status: str
    latency_ms: float = 0.0
    message: str = ""


async def check_storage_health(repo: HistoryRepository) -> ComponentHealth:
    """Check that the history key-value store answers."""
    start = time.time()
    try:
        await repo.store.ping()
        return ComponentHealth(
            status="healthy",
            latency_ms=(time.time() - start) * 1000,
            message=type(repo.store).__name__,
        )
    except Exception as e:
        logger.error(f"Storage health check failed: {e}")
        return ComponentHealth(
            status="unhealthy",
            latency_ms=(time.time() - start) * 1000,
            message=f"Storage error: {type(e).__name__}"
        )


@router.get("/health", response_model=HealthStatus)
async def health_check(
    response: Response,
    repo: HistoryRepository = Depends(get_history_repository),
):
    """
    Full health check endpoint.
    Returns status of all components.
    """
    storage = await check_storage_health(repo)
    checks = {
        "storage": {
            "status": storage.status,
            "latency_ms": round(storage.latency_ms, 2),
            "message": storage.message,
        }
    }

    if storage.status == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        response.status_code = status.HTTP_200_OK

    return HealthStatus(status=storage.status, timestamp=time.time(), checks=checks)


@router.get("/health/live")
async def liveness_probe():
    """
    Liveness probe.
    Returns 200 if the application is running.
    Does NOT check external dependencies.
    """
    return {"status": "alive"}
