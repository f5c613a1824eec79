"""Service banner and liveness check, both served outside the API prefix."""

from __future__ import annotations

from fastapi import APIRouter, Request

from ...deps import SettingsDependency
from ...schemas.system import HealthStatus, ServiceInfo

router = APIRouter(tags=["system"])

BANNER = "Task Manager API is running..."


@router.get("/", response_model=ServiceInfo, summary="Service banner")
async def read_root(request: Request, settings: SettingsDependency) -> ServiceInfo:
    return ServiceInfo(
        message=BANNER,
        name=settings.project_name,
        environment=settings.environment,
        version=settings.version,
        api_prefix=getattr(request.app.state, "api_prefix", settings.api_prefix) or "/",
    )


@router.get("/healthz", response_model=HealthStatus, summary="Liveness check")
async def read_health() -> HealthStatus:
    return HealthStatus()
