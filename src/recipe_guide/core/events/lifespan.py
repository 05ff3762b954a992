"""Application lifespan event handlers.

The recipe guide holds no connections or caches, so startup only configures
logging and shutdown only records that the process is stopping.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_guide.core.config import Settings, get_settings
from recipe_guide.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


def _startup(settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        combination_warning_threshold=settings.recipe_guide.combination_warning_threshold,
        lenient_empty_groups=settings.recipe_guide.lenient_empty_groups,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    _startup(settings)
    yield
    logger.info("Application shutdown complete")
