"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_guide.main:app --reload
"""

from recipe_guide.factory import create_app


# Create the application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    from recipe_guide.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "recipe_guide.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
