"""Predicate and Parsing Primitives

Pure functions the validator chain is built on. None of them raise for
unexpected input types: a value of the wrong shape is simply not a match.

Numbers follow IEEE-754 double semantics where it matters for request input:
an integer is only accepted when it is exactly representable (the "safe"
range), and integral floats such as ``5.0`` count as integers.
"""
from __future__ import annotations

import math
import re
from typing import Any, Iterable

MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -(2**53 - 1)

UUID_VERSIONS = ("v3", "v4", "v5", "all")


# ============================================================================
# Patterns
# ============================================================================

INT_RE = re.compile(r"[-+]?(?:0|[1-9][0-9]*)")

# Plain decimal numerals only: no exponent, no Infinity
DECIMAL_RE = re.compile(r"[-+]?(?:[0-9]+|\.[0-9]+|[0-9]+\.[0-9]+)")

# Anything float() accepts that also reads as a numeral, exponent included
FLOAT_RE = re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")

INFINITY_TOKENS = {"Infinity": math.inf, "-Infinity": -math.inf}

ALPHA_RE = re.compile(r"[a-z]*", re.IGNORECASE | re.ASCII)
ALPHANUMERIC_RE = re.compile(r"[a-z0-9]*", re.IGNORECASE | re.ASCII)
NUMERIC_RE = re.compile(r"[0-9]*")
ASCII_RE = re.compile(r"[\x00-\x7F]*")

BASE64_RE = re.compile(
    r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=|[A-Za-z0-9+/]{4})"
)
HEX_COLOR_RE = re.compile(r"#?(?:[0-9a-f]{3}|[0-9a-f]{6})", re.IGNORECASE)

# RFC 5322 simplified pattern
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

UUID_RES = {
    "v3": re.compile(r"[0-9A-F]{8}-[0-9A-F]{4}-3[0-9A-F]{3}-[0-9A-F]{4}-[0-9A-F]{12}", re.IGNORECASE),
    "v4": re.compile(r"[0-9A-F]{8}-[0-9A-F]{4}-4[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}", re.IGNORECASE),
    "v5": re.compile(r"[0-9A-F]{8}-[0-9A-F]{4}-5[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}", re.IGNORECASE),
    "all": re.compile(r"[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}", re.IGNORECASE),
}


# ============================================================================
# Numbers
# ============================================================================

def is_number(value: Any) -> bool:
    """True for int and float values. Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_safe_integer(value: Any) -> bool:
    """True if value is a number within [MIN_SAFE_INTEGER, MAX_SAFE_INTEGER]."""
    return is_number(value) and MIN_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


def is_integer(value: Any) -> bool:
    """True for ints and for floats with no fractional part."""
    if isinstance(value, float):
        return value.is_integer()
    return is_number(value)


def is_finite_number(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    return is_number(value)


def _numeral(value: Any) -> str | None:
    """Text form used to recognise numerals in strings and numbers alike."""
    if isinstance(value, str):
        return value
    if not is_number(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def stringify(value: Any) -> str:
    """Text form of a request value, spelled the way JSON and JavaScript spell it.

    ``True`` becomes ``"true"``, ``5.0`` becomes ``"5"`` and infinities become
    ``"Infinity"`` / ``"-Infinity"``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


def is_int_string(value: Any) -> bool:
    """True if value is a full integer literal, e.g. ``"-42"`` but not ``"5abc"``."""
    text = _numeral(value)
    return text is not None and INT_RE.fullmatch(text) is not None


def is_decimal_string(value: Any) -> bool:
    """True for plain decimals like ``"+4.55"``; rejects ``"5e3"`` and ``"Infinity"``."""
    text = _numeral(value)
    return text is not None and DECIMAL_RE.fullmatch(text) is not None


def is_float_including_infinity(value: Any) -> bool:
    """True if value is a non-NaN number or a string that fully parses as a float."""
    if isinstance(value, float):
        return not math.isnan(value)
    if is_number(value):
        return True
    if isinstance(value, str):
        text = value.strip()
        return text in INFINITY_TOKENS or FLOAT_RE.fullmatch(text) is not None
    return False


def parse_int(value: Any) -> int:
    """Parse a value already accepted by is_int_string."""
    return int(_numeral(value), 10)


def parse_float(value: Any) -> float:
    """Parse a value already accepted by is_float_including_infinity or is_decimal_string."""
    if is_number(value):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    text = value.strip()
    if text in INFINITY_TOKENS:
        return INFINITY_TOKENS[text]
    return float(text)


# ============================================================================
# Equality
# ============================================================================

def strictly_equal(a: Any, b: Any) -> bool:
    """Equality without cross-type coercion.

    ``1 == 1.0`` holds (both numbers) but ``1 != True`` and ``"1" != 1``.
    """
    if is_number(a) and is_number(b):
        return a == b
    return type(a) is type(b) and a == b


def contains(seq: Iterable[Any], value: Any) -> bool:
    return any(strictly_equal(item, value) for item in seq)


def unique(items: Iterable[Any]) -> list[Any]:
    """Order-preserving de-duplication; works for unhashable items."""
    result: list[Any] = []
    for item in items:
        if not contains(result, item):
            result.append(item)
    return result


# ============================================================================
# Formats
# ============================================================================

def is_alpha(value: str) -> bool:
    return ALPHA_RE.fullmatch(value) is not None


def is_alphanumeric(value: str) -> bool:
    return ALPHANUMERIC_RE.fullmatch(value) is not None


def is_numeric(value: str) -> bool:
    return NUMERIC_RE.fullmatch(value) is not None


def is_ascii(value: str) -> bool:
    return ASCII_RE.fullmatch(value) is not None


def is_base64(value: str) -> bool:
    return BASE64_RE.fullmatch(value) is not None


def is_hex_color(value: str) -> bool:
    return HEX_COLOR_RE.fullmatch(value) is not None


def is_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None


def is_uuid(value: str, version: str = "all") -> bool:
    """Match a UUID string. v4 and v5 also require the RFC 4122 variant."""
    return UUID_RES[version].fullmatch(value) is not None
