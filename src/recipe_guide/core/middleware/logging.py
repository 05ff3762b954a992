"""Request logging middleware."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_guide.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

DEFAULT_EXCLUDED_PATHS = frozenset({"/health", "/ready", "/favicon.ico"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one record when a request starts and one when it completes."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: set[str] | frozenset[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = (
            DEFAULT_EXCLUDED_PATHS if exclude_paths is None else frozenset(exclude_paths)
        )

    def _is_excluded(self, path: str) -> bool:
        return any(path == p or path.endswith(p) for p in self.exclude_paths)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request and response."""
        if self._is_excluded(request.url.path):
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
        )
        logger.info("Request started")

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=elapsed_ms,
        )
        return response

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        """Client IP, preferring the first hop of ``X-Forwarded-For``."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip
        if request.client:
            return request.client.host
        return "unknown"
