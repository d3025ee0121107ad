"""
Health Check Endpoints

Kubernetes-style health probes for production deployments.

ARCHITECTURE: Health checks must never fail the application.
They report status for orchestration decisions.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from pulih import __version__
from pulih.config import Settings, get_settings
from pulih.config.logging_config import get_logger
from pulih.infrastructure.database import get_db_manager

logger = get_logger(__name__)

router = APIRouter()


class HealthStatus(BaseModel):
    """Health check response."""

    status: str  # healthy, unhealthy
    timestamp: str
    version: str = __version__
    checks: dict[str, dict] = {}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _check_storage(settings: Settings) -> dict:
    """Check the configured storage backend."""
    if settings.storage_backend == "memory":
        return {"status": "healthy", "backend": "memory"}

    start = time.perf_counter()
    db = get_db_manager()
    if not await db.health_check():
        return {
            "status": "unhealthy",
            "backend": "database",
            "message": "Database connection failed",
        }
    return {
        "status": "healthy",
        "backend": "database",
        "latency_ms": int((time.perf_counter() - start) * 1000),
    }


@router.get("", response_model=HealthStatus)
async def health_summary(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> HealthStatus:
    """Overall status with per-component checks."""
    storage = await _check_storage(settings)
    status = storage["status"]
    if status != "healthy":
        response.status_code = 503

    return HealthStatus(
        status=status,
        timestamp=_now(),
        checks={"storage": storage, "process": {"status": "alive"}},
    )


@router.get("/live", response_model=HealthStatus)
async def liveness() -> HealthStatus:
    """
    Liveness probe.

    This should ALWAYS return 200 unless the process is deadlocked.
    """
    return HealthStatus(
        status="healthy",
        timestamp=_now(),
        checks={"process": {"status": "alive"}},
    )


@router.get("/ready", response_model=HealthStatus)
async def readiness(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> HealthStatus:
    """
    Readiness probe.

    Returns 503 while storage is unreachable.
    """
    storage = await _check_storage(settings)
    if storage["status"] != "healthy":
        logger.warning("Readiness check failed", backend=storage["backend"])
        response.status_code = 503

    return HealthStatus(
        status=storage["status"],
        timestamp=_now(),
        checks={"storage": storage},
    )
