"""Validation Error

The single failure signal raised by validator chains. It carries the key whose
chain failed (``None`` for request-level checks) and a human message, and knows
how to render itself into the application error envelope.
"""
from __future__ import annotations

from dataclasses import dataclass

from bouncer.errors.types import AppError, ErrorCode, ErrorContext


@dataclass(eq=False)
class ValidationError(Exception):
    """A failed check on a request value.

    Raised synchronously by the first failing method of a chain; the host
    framework is expected to turn it into a 4xx response.
    """
    key: str | None
    message: str

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_app_error(self, *, include_key: bool = True, origin: str = "validation") -> AppError:
        """Convert to AppError for the HTTP error handlers."""
        return AppError(
            code=ErrorCode.E2000_VALIDATION_GENERIC,
            message=self.message,
            context=ErrorContext(origin=origin),
            metadata={"key": self.key} if include_key else {},
        )
