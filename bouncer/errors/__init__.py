"""Application error envelope and HTTP handlers.

Usage:
    from bouncer.errors import register_error_handlers

    app = FastAPI()
    register_error_handlers(app)
"""
from .types import AppError, ErrorCode, ErrorContext
from .handlers import (
    register_error_handlers,
    result_to_response,
    validation_error_handler,
    unhandled_exception_handler,
)

__all__ = [
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "register_error_handlers",
    "result_to_response",
    "validation_error_handler",
    "unhandled_exception_handler",
]
