"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up the middleware stack in the correct order
- Registers exception handlers
- Mounts API routers
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_guide.api.v1.router import router as v1_router
from recipe_guide.core.config import Settings, get_settings
from recipe_guide.core.events.lifespan import lifespan
from recipe_guide.core.exceptions import setup_exception_handlers
from recipe_guide.core.middleware import LoggingMiddleware, RequestIDMiddleware
from recipe_guide.schemas.health import RootResponse


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.is_non_production
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description=(
            "Recipe Guide Service - encodes recipe steps into ticket print codes "
            "and resolves modifier combinations to their recipes"
        ),
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes and lifespan
    app.state.settings = settings
    # Routes resolve settings through get_settings; point it at the override
    app.dependency_overrides[get_settings] = lambda: settings

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. From the request's
    perspective RequestIDMiddleware runs first, then LoggingMiddleware, then
    CORSMiddleware.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    # Root info (no prefix, for load balancers)
    @app.get("/", include_in_schema=False, response_model=RootResponse)
    async def root() -> RootResponse:
        """Root endpoint returning basic service info."""
        return RootResponse(
            service=settings.app.name,
            version=settings.app.version,
            docs="/docs" if settings.is_non_production else "disabled",
            health=f"{settings.api.v1_prefix}/health",
        )
