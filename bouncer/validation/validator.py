"""Validator Chain

A Validator wraps one key of the per-request value bag. Each chain method either
asserts something about the current value (raising ValidationError on failure)
or replaces it with a converted value, then returns the Validator so calls can
be chained:

    (bouncer.validate_query("ids")
        .optional()
        .to_array()
        .to_ints()
        .uniq())

Optional state:
    ``optional()`` puts the Validator in OPTIONAL state when the value is absent
    (``None``) or a blank string; blank strings are also removed from the bag.
    Every gated method is a no-op while OPTIONAL. The state is re-evaluated
    lazily on each read, so once the value becomes defined and non-blank the
    chain is ACTIVE again without another ``optional()`` call.

Callbacks:
    Functions passed to ``check_pred``, ``check_not_pred``, ``tap`` receive the
    current value. If a callback declares a ``ctx`` parameter it is also given
    the request as ``ctx=``; ``default_to`` factories are called the same way.
"""
from __future__ import annotations

import base64
import functools
import inspect
import json
import math
import re
from typing import Any, Callable, NoReturn, TypeVar

from bouncer.logging import validation_logger

from . import predicates
from .errors import ValidationError

log = validation_logger()

F = TypeVar("F", bound=Callable[..., Any])


def gated(method: F) -> F:
    """Make a chain method a no-op while the Validator is in OPTIONAL state."""

    @functools.wraps(method)
    def wrapper(self: Validator, *args, **kwargs):
        if self.is_optional():
            return self
        return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _takes_ctx(fn: Callable[..., Any]) -> bool:
    try:
        parameters = inspect.signature(fn).parameters
    except (TypeError, ValueError):
        # Builtins without an introspectable signature
        return False
    param = parameters.get("ctx")
    return param is not None and param.kind is not inspect.Parameter.POSITIONAL_ONLY


def _is_blank(value: Any) -> bool:
    return isinstance(value, str) and not value.strip()


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


def _require_numbers(*values: Any) -> None:
    for value in values:
        if not predicates.is_number(value):
            raise TypeError(f"Expected a number, got {type(value).__name__}")


def _require_string(value: Any) -> None:
    if not isinstance(value, str):
        raise TypeError(f"Expected a string, got {type(value).__name__}")


class Validator:
    """Chainable checks and conversions for one key of the request value bag."""

    def __init__(self, ctx: Any, key: str, vals: dict[str, Any], value: Any = None):
        self.ctx = ctx
        self.key = key
        self.vals = vals
        self._optional = False
        # The key is present in the bag from the start, even when its value is None
        self.vals[key] = value

    def __repr__(self) -> str:
        state = "optional" if self._optional else "active"
        return f"Validator(key={self.key!r}, value={self.value()!r}, state={state})"

    # ------------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------------

    def value(self) -> Any:
        return self.vals.get(self.key)

    def set_value(self, value: Any) -> Validator:
        self.vals[self.key] = value
        return self

    def is_optional(self) -> bool:
        if self._optional:
            value = self.value()
            if _is_blank(value):
                return True
            if value is not None:
                self._optional = False
        return self._optional

    def optional(self) -> Validator:
        value = self.value()
        if _is_blank(value):
            self.vals.pop(self.key, None)
            self._optional = True
        elif value is None:
            self._optional = True
        else:
            self._optional = False
        return self

    @classmethod
    def add_method(cls, name: str, fn: Callable[..., Any]) -> None:
        """Register a custom chain method that skips while OPTIONAL.

        ``fn`` receives the Validator as its first argument and should return it.
        """
        if not callable(fn):
            raise TypeError(f"Validator method {name!r} must be callable")
        setattr(cls, name, gated(fn))

    # ------------------------------------------------------------------------
    # Core methods
    # ------------------------------------------------------------------------

    def _fail(self, tip: str | None = None, cause: BaseException | None = None) -> NoReturn:
        message = tip or f"Invalid value for {self.key}"
        log.debug("validation_failed", key=self.key, message=message)
        error = ValidationError(self.key, message)
        if cause is not None:
            raise error from cause
        raise error

    def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        if _takes_ctx(fn):
            return fn(*args, ctx=self.ctx)
        return fn(*args)

    @gated
    def check(self, result: Any, tip: str | None = None) -> Validator:
        if not result:
            self._fail(tip)
        return self

    @gated
    def check_not(self, result: Any, tip: str | None = None) -> Validator:
        if result:
            self._fail(tip)
        return self

    @gated
    def check_pred(self, pred: Callable[..., Any], tip: str | None = None) -> Validator:
        if not callable(pred):
            raise TypeError("check_pred expects a callable predicate")
        return self.check(self._call(pred, self.value()), tip)

    @gated
    def check_not_pred(self, pred: Callable[..., Any], tip: str | None = None) -> Validator:
        if not callable(pred):
            raise TypeError("check_not_pred expects a callable predicate")
        return self.check_not(self._call(pred, self.value()), tip)

    @gated
    def tap(self, f: Callable[..., Any], tip: str | None = None) -> Validator:
        """Replace the value with ``f(value)``.

        A ValidationError raised inside ``f`` is re-raised for this key with
        ``tip``; its original message is not kept.
        """
        if not callable(f):
            raise TypeError("tap expects a callable")
        try:
            result = self._call(f, self.value())
        except ValidationError as exc:
            self._fail(tip, cause=exc)
        return self.set_value(result)

    # ------------------------------------------------------------------------
    # General methods
    # ------------------------------------------------------------------------

    def required(self, tip: str | None = None) -> Validator:
        return self.check_not_pred(lambda value: value is None, tip or f"{self.key} is required")

    @gated
    def is_in(self, options: list | tuple | set | frozenset, tip: str | None = None) -> Validator:
        if not isinstance(options, (list, tuple, set, frozenset)):
            raise TypeError("is_in expects a list of options")
        return self.check_pred(lambda value: predicates.contains(options, value), tip)

    @gated
    def is_not_in(self, options: list | tuple | set | frozenset, tip: str | None = None) -> Validator:
        if not isinstance(options, (list, tuple, set, frozenset)):
            raise TypeError("is_not_in expects a list of options")
        return self.check_not_pred(lambda value: predicates.contains(options, value), tip)

    @gated
    def is_array(self, tip: str | None = None) -> Validator:
        return self.check_pred(lambda value: isinstance(value, list), tip or f"{self.key} must be an array")

    @gated
    def eq(self, other: Any, tip: str | None = None) -> Validator:
        return self.check_pred(lambda value: predicates.strictly_equal(value, other), tip)

    @gated
    def gt(self, other: Any, tip: str | None = None) -> Validator:
        _require_numbers(self.value(), other)
        return self.check_pred(lambda value: value > other, tip)

    @gated
    def gte(self, other: Any, tip: str | None = None) -> Validator:
        _require_numbers(self.value(), other)
        return self.check_pred(lambda value: value >= other, tip)

    @gated
    def lt(self, other: Any, tip: str | None = None) -> Validator:
        _require_numbers(self.value(), other)
        return self.check_pred(lambda value: value < other, tip)

    @gated
    def lte(self, other: Any, tip: str | None = None) -> Validator:
        _require_numbers(self.value(), other)
        return self.check_pred(lambda value: value <= other, tip)

    @gated
    def is_length(self, min_length: int, max_length: int, tip: str | None = None) -> Validator:
        """Length of a string or list within [min_length, max_length]."""
        if not hasattr(self.value(), "__len__"):
            raise TypeError(f"{self.key} has no length")
        if not isinstance(min_length, int) or not isinstance(max_length, int):
            raise TypeError("is_length bounds must be integers")
        if min_length > max_length:
            raise ValueError("is_length requires min_length <= max_length")
        tip = tip or f"{self.key} must be {min_length}-{max_length} characters long"
        self.check_pred(lambda value: len(value) >= min_length, tip)
        self.check_pred(lambda value: len(value) <= max_length, tip)
        return self

    @gated
    def default_to(self, default: Any) -> Validator:
        """Set the value when it is None. Callables are invoked to build the default."""
        if self.value() is not None:
            return self
        if callable(default):
            return self.set_value(self._call(default))
        return self.set_value(default)

    @gated
    def is_string(self, tip: str | None = None) -> Validator:
        return self.check_pred(lambda value: isinstance(value, str), tip or f"{self.key} must be a string")

    @gated
    def is_int(self, tip: str | None = None) -> Validator:
        """Value must already be an integral number within the safe range."""
        self.check_pred(predicates.is_integer, tip or f"{self.key} must be an integer")
        self.check_pred(predicates.is_safe_integer, tip or f"{self.key} is out of integer range")
        return self

    @gated
    def to_int(self, tip: str | None = None) -> Validator:
        self.check_pred(predicates.is_int_string, tip or f"{self.key} must be an integer")
        number = predicates.parse_int(self.value())
        self.check(predicates.is_safe_integer(number), tip or f"{self.key} is out of integer range")
        return self.set_value(number)

    @gated
    def is_finite_number(self, tip: str | None = None) -> Validator:
        return self.check_pred(predicates.is_finite_number, tip or f"{self.key} must be a number")

    @gated
    def to_array(self) -> Validator:
        self.default_to([])
        return self.tap(lambda value: value if isinstance(value, list) else [value])

    @gated
    def to_ints(self, tip: str | None = None) -> Validator:
        """Convert every item to an int.

        ``"5abc"`` fails even though a lenient parse would read 5.
        """
        self.to_array()
        self.check_pred(
            lambda values: all(predicates.is_int_string(item) for item in values),
            tip or f"{self.key} must be array of integers",
        )
        numbers = [predicates.parse_int(item) for item in self.value()]
        self.check(
            all(predicates.is_safe_integer(number) for number in numbers),
            tip or f"{self.key} must not contain numbers out of integer range",
        )
        return self.set_value(numbers)

    @gated
    def uniq(self) -> Validator:
        if not isinstance(self.value(), list):
            raise TypeError(f"uniq expects {self.key} to be an array")
        return self.tap(predicates.unique)

    @gated
    def to_boolean(self) -> Validator:
        return self.tap(bool)

    @gated
    def to_decimal(self, tip: str | None = None) -> Validator:
        self.check_pred(predicates.is_decimal_string, tip or f"{self.key} must be a decimal number")
        return self.set_value(predicates.parse_float(self.value()))

    @gated
    def to_float(self, tip: str | None = None) -> Validator:
        self.check_pred(predicates.is_float_including_infinity, tip or f"{self.key} must be a float")
        return self.set_value(predicates.parse_float(self.value()))

    @gated
    def to_finite_float(self, tip: str | None = None) -> Validator:
        return self.to_float(tip).is_finite_number(tip)

    @gated
    def to_string(self) -> Validator:
        value = self.value()
        if not value or (isinstance(value, float) and math.isnan(value)):
            return self.set_value("")
        return self.set_value(predicates.stringify(value))

    @gated
    def trim(self) -> Validator:
        _require_string(self.value())
        return self.tap(str.strip)

    @gated
    def match(self, pattern: str | re.Pattern, tip: str | None = None) -> Validator:
        _require_string(self.value())
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return self.check_pred(lambda value: regex.search(value) is not None, tip)

    @gated
    def not_match(self, pattern: str | re.Pattern, tip: str | None = None) -> Validator:
        _require_string(self.value())
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return self.check_not_pred(lambda value: regex.search(value) is not None, tip)

    @gated
    def from_json(self, tip: str | None = None) -> Validator:
        _require_string(self.value())
        try:
            parsed = json.loads(self.value(), parse_constant=_reject_constant)
        except ValueError as exc:
            self._fail(tip or f"Invalid JSON for {self.key}", cause=exc)
        return self.set_value(parsed)

    # ------------------------------------------------------------------------
    # Format methods
    # ------------------------------------------------------------------------

    @gated
    def is_json(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must be JSON"
        self.is_string(tip)
        try:
            json.loads(self.value(), parse_constant=_reject_constant)
        except ValueError as exc:
            self._fail(tip, cause=exc)
        return self

    @gated
    def is_alpha(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must only contain chars a-z"
        self.is_string(tip)
        return self.check_pred(predicates.is_alpha, tip)

    @gated
    def is_alphanumeric(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must be alphanumeric (a-z, 0-9)"
        self.is_string(tip)
        return self.check_pred(predicates.is_alphanumeric, tip)

    @gated
    def is_numeric(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must only contain numbers"
        self.is_string(tip)
        return self.check_pred(predicates.is_numeric, tip)

    @gated
    def is_ascii(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must contain only ASCII chars"
        self.is_string(tip)
        return self.check_pred(predicates.is_ascii, tip)

    @gated
    def is_base64(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must be base64 encoded"
        self.is_string(tip)
        if self.value() == "":
            return self
        return self.check_pred(predicates.is_base64, tip)

    @gated
    def is_email(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must be a valid email address"
        self.is_string(tip)
        return self.check_pred(predicates.is_email, tip)

    @gated
    def is_hex_color(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must be a hex color"
        self.is_string(tip)
        return self.check_pred(predicates.is_hex_color, tip)

    @gated
    def is_uuid(self, version: str | None = None, tip: str | None = None) -> Validator:
        """Check for a UUID string.

        Accepts ``is_uuid()``, ``is_uuid("v4")``, ``is_uuid("v4", "tip")`` and
        ``is_uuid("tip")``: a lone argument that is not a version tag is the tip.
        """
        if version is None:
            version = "all"
        elif version not in predicates.UUID_VERSIONS:
            if tip is not None:
                raise ValueError(f"Unknown UUID version: {version!r}")
            tip, version = version, "all"
        tip = tip or f"{self.key} must be a UUID" + ("" if version == "all" else f" {version}")
        self.is_string(tip)
        return self.check_pred(lambda value: predicates.is_uuid(value, version), tip)

    @gated
    def encode_base64(self, tip: str | None = None) -> Validator:
        self.is_string(tip)
        return self.tap(lambda value: base64.b64encode(value.encode("utf-8")).decode("ascii"), tip)

    @gated
    def decode_base64(self, tip: str | None = None) -> Validator:
        tip = tip or f"{self.key} must be base64 encoded"
        self.is_string(tip)
        if self.value() == "":
            return self
        self.is_base64(tip)
        return self.tap(lambda value: base64.b64decode(value).decode("utf-8", errors="replace"))

    @gated
    def clamp(self, min_value: int | float, max_value: int | float) -> Validator:
        _require_numbers(self.value(), min_value, max_value)
        if min_value > max_value:
            raise ValueError("clamp requires min_value <= max_value")
        self.tap(lambda value: min_value if value < min_value else value)
        self.tap(lambda value: max_value if value > max_value else value)
        return self
