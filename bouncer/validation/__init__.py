"""Validation chain.

Usage:
    from bouncer.validation import Validator, ValidationError

    vals = {}
    Validator(ctx=None, key="page", vals=vals, value="3").to_int().clamp(1, 100)
    vals["page"]  # 3
"""
from .errors import ValidationError
from .predicates import (
    MAX_SAFE_INTEGER,
    MIN_SAFE_INTEGER,
    is_safe_integer,
    is_int_string,
    is_decimal_string,
    is_float_including_infinity,
)
from .registry import ValidatorRegistry
from .validator import Validator, gated

__all__ = [
    "ValidationError",
    "Validator",
    "ValidatorRegistry",
    "gated",
    "MAX_SAFE_INTEGER",
    "MIN_SAFE_INTEGER",
    "is_safe_integer",
    "is_int_string",
    "is_decimal_string",
    "is_float_including_infinity",
]
