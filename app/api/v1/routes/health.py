"""Liveness and dependency health endpoints."""
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status

from app.services.health_service import HealthCheckService, HealthStatus, health_service

router = APIRouter(prefix="/health", tags=["health"])


def get_health_service() -> HealthCheckService:
    return health_service


@router.get("")
async def liveness() -> Dict[str, str]:
    """Process is up; touches no dependency."""
    return {"status": "ok"}


@router.get("/detailed")
async def detailed_health(
    response: Response,
    service: HealthCheckService = Depends(get_health_service),
) -> Dict[str, Any]:
    """Database and Redis status.

    A missing cache only degrades the service (200); an unreachable
    database makes it unhealthy (503).
    """
    report = await service.get_overall_health()
    if report["status"] == HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return report
