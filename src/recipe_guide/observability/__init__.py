"""Observability components."""

from recipe_guide.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    logger,
    setup_logging,
)


__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "logger",
    "setup_logging",
]
