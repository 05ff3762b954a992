"""HTTP-facing exceptions and exception handlers.

Service packages raise their own domain exceptions; endpoints translate
them into the ``AppError`` subclasses below, which the registered handlers
render as a structured ``ErrorResponse``.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_guide.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request

    from recipe_guide.services.encoding.exceptions import StepValidationError

logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppError(Exception):
    """Base application exception rendered by the registered handlers."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class BadRequestError(AppError):
    """Bad request exception."""

    def __init__(self, message: str, error: str = "BAD_REQUEST") -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error=error,
            message=message,
        )


class UnprocessableRecipeError(AppError):
    """A recipe's steps cannot be encoded as authored.

    The error code is the validation kind so the console can point the
    author at the offending step.
    """

    def __init__(self, exc: StepValidationError) -> None:
        field = None if exc.step_index is None else f"steps.{exc.step_index}"
        super().__init__(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            error=str(exc.kind),
            message=str(exc),
            details=[ErrorDetail(code=str(exc.kind), message=str(exc), field=field)],
        )


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppError)
    async def app_exception_handler(
        request: Request,
        exc: AppError,
    ) -> ORJSONResponse:
        """Handle application exceptions."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=exc.error,
                message=exc.message,
                details=exc.details,
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle Starlette HTTP exceptions."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error="HTTP_ERROR",
                message=str(exc.detail),
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle request body validation errors."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return ORJSONResponse(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                error="VALIDATION_ERROR",
                message="Request validation failed",
                details=details,
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions."""
        logger.opt(exception=exc).error("Unhandled exception")

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                request_id=_get_request_id(request),
            ).model_dump(),
        )
