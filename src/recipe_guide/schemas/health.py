"""Health and root endpoint schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from recipe_guide.schemas.base import APIResponse
from recipe_guide.schemas.enums import HealthStatus


class HealthResponse(APIResponse):
    """Health check response model."""

    status: HealthStatus = Field(..., description="Health status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class RootResponse(APIResponse):
    """Basic service information returned at ``/``."""

    service: str = Field(..., examples=["Recipe Guide Service"])
    version: str = Field(..., examples=["0.1.0"])
    docs: str = Field(..., description="API documentation URL or 'disabled'")
    health: str = Field(..., description="Health check endpoint URL")
