"""FastAPI Exception Handlers

Turns ValidationError raised by validator chains into a structured 4xx JSON
response, and anything unexpected into a 500 with the traceback logged.
"""
from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bouncer.config import get_settings
from bouncer.logging import http_logger

from .types import AppError, ErrorCode, ErrorContext

log = http_logger()


def _correlation_id(request: Request) -> str:
    return (
        request.headers.get("X-Correlation-ID")
        or structlog.contextvars.get_contextvars().get("correlation_id", "")
    )


def result_to_response(error: AppError, status_code: int | None = None) -> JSONResponse:
    """Convert AppError to a JSONResponse, logging it on the way out."""
    status_code = status_code or error.code.http_status

    log_method = log.warning if status_code < 500 else log.error
    log_method(
        "error_response",
        error_code=error.code.name,
        message=error.message,
        category=error.code.category,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
        metadata=error.metadata,
    )

    return JSONResponse(status_code=status_code, content=error.to_dict())


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle ValidationError raised by a chain or a request-level check."""
    from bouncer.validation.errors import ValidationError

    if not isinstance(exc, ValidationError):
        raise exc

    settings = get_settings()
    error = exc.to_app_error(include_key=settings.EXPOSE_VALIDATION_KEY).with_context(
        correlation_id=_correlation_id(request),
        request_id=request.headers.get("X-Request-ID"),
    )
    return result_to_response(error, status_code=settings.VALIDATION_STATUS_CODE)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for errors that are not validation failures, including callback bugs."""
    error = AppError(
        code=ErrorCode.E9001_UNEXPECTED_ERROR,
        message="An unexpected error occurred",
        context=ErrorContext(
            correlation_id=_correlation_id(request) or ErrorContext().correlation_id,
            origin="unhandled",
        ),
        cause=exc,
    )

    log.exception(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        correlation_id=error.context.correlation_id,
    )

    return result_to_response(error)


def register_error_handlers(app: FastAPI) -> None:
    """Register the handlers on a FastAPI app.

    Usage:
        app = FastAPI(...)
        register_error_handlers(app)
    """
    from bouncer.validation.errors import ValidationError

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
