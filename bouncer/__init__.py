# Package exports
from bouncer.binding import Bouncer, load_body
from bouncer.middleware import BouncerMiddleware, get_bouncer
from bouncer.validation import (
    ValidationError,
    Validator,
    ValidatorRegistry,
    MAX_SAFE_INTEGER,
    MIN_SAFE_INTEGER,
    is_safe_integer,
)

__version__ = "0.3.0"

__all__ = [
    "Bouncer",
    "BouncerMiddleware",
    "ValidationError",
    "Validator",
    "ValidatorRegistry",
    "get_bouncer",
    "load_body",
    "is_safe_integer",
    "MAX_SAFE_INTEGER",
    "MIN_SAFE_INTEGER",
]
