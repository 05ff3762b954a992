"""Custom middleware components."""

from recipe_guide.core.middleware.logging import LoggingMiddleware
from recipe_guide.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
