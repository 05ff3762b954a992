"""Health check endpoints.

The recipe guide has no external dependencies, so readiness only reports
that the process is serving.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_guide.core.config import Settings, get_settings
from recipe_guide.schemas.enums import HealthStatus
from recipe_guide.schemas.health import HealthResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Check if the service is alive."""
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness probe",
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Check if the service is ready to handle requests."""
    return HealthResponse(
        status=HealthStatus.READY,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )
