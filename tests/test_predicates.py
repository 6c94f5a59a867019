import math

import pytest

from bouncer.validation import predicates
from bouncer.validation.predicates import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER

UUID_V3 = "A987FBC9-4BED-3078-CF07-9141BA07C9F3"
UUID_V4 = "713ae7e3-cb32-45f9-adcb-7c4fa86b90c1"
UUID_V5 = "987FBC97-4BED-5078-AF07-9141BA07C9F3"


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, True),
        (MAX_SAFE_INTEGER, True),
        (MIN_SAFE_INTEGER, True),
        (MAX_SAFE_INTEGER + 1, False),
        (MIN_SAFE_INTEGER - 1, False),
        (5.5, True),
        ("5", False),
        (True, False),
        (None, False),
    ],
)
def test_is_safe_integer(value, expected):
    assert predicates.is_safe_integer(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [(5, True), (5.0, True), (5.0001, False), (math.inf, False), (math.nan, False), (True, False), ("5", False)],
)
def test_is_integer(value, expected):
    assert predicates.is_integer(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0", True),
        ("-42", True),
        ("+7", True),
        (42, True),
        (5.0, True),
        ("007", False),
        ("5abc", False),
        ("5.5", False),
        ("", False),
        (" 5", False),
        (math.nan, False),
        (None, False),
        (True, False),
    ],
)
def test_is_int_string(value, expected):
    assert predicates.is_int_string(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("+4.55", True),
        ("-6.0001", True),
        (".5", True),
        ("5", True),
        (2.5, True),
        ("5.", False),
        ("5e3", False),
        ("Infinity", False),
        ("05.67abc", False),
        ("", False),
    ],
)
def test_is_decimal_string(value, expected):
    assert predicates.is_decimal_string(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("05.67", True),
        ("5e3", True),
        ("-1.5E-3", True),
        ("Infinity", True),
        ("-Infinity", True),
        (" 4.2 ", True),
        ("5.", True),
        (math.inf, True),
        (3, True),
        (".", False),
        ("e5", False),
        ("05.67abc", False),
        ("", False),
        ("inf", False),
        ("nan", False),
        (math.nan, False),
        (True, False),
        (None, False),
    ],
)
def test_is_float_including_infinity(value, expected):
    assert predicates.is_float_including_infinity(value) is expected


def test_parse_float():
    assert predicates.parse_float("05.67") == 5.67
    assert predicates.parse_float(" -Infinity ") == -math.inf
    assert predicates.parse_float(3) == 3.0
    assert predicates.parse_float(10**400) == math.inf
    assert predicates.parse_float(-(10**400)) == -math.inf


@pytest.mark.parametrize(
    "value, expected",
    [(True, "true"), (False, "false"), (5.0, "5"), (1e21, "1e+21"), (2.5, "2.5"), (-math.inf, "-Infinity"), (7, "7")],
)
def test_stringify(value, expected):
    assert predicates.stringify(value) == expected


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (1, 1.0, True),
        (1, True, False),
        ("1", 1, False),
        ([1], [1], True),
        (None, None, True),
        ("a", "a", True),
    ],
)
def test_strictly_equal(a, b, expected):
    assert predicates.strictly_equal(a, b) is expected


def test_unique_keeps_first_occurrence_and_handles_unhashables():
    assert predicates.unique([1, "1", 1, [2], [2], True, 1.0]) == [1, "1", [2], True]


@pytest.mark.parametrize(
    "value, version, expected",
    [
        (UUID_V4, "v4", True),
        (UUID_V4.upper(), "v4", True),
        (UUID_V3, "v3", True),
        (UUID_V3, "v4", False),
        (UUID_V5, "v5", True),
        (UUID_V4, "v5", False),
        (UUID_V3, "all", True),
        ("00000000-0000-4000-0000-000000000000", "v4", False),
        ("not-a-uuid", "all", False),
    ],
)
def test_is_uuid(value, version, expected):
    assert predicates.is_uuid(value, version) is expected


@pytest.mark.parametrize(
    "fn, value, expected",
    [
        (predicates.is_alpha, "abcXYZ", True),
        (predicates.is_alpha, "abc1", False),
        (predicates.is_alpha, "é", False),
        (predicates.is_alphanumeric, "abc123", True),
        (predicates.is_alphanumeric, "abc 123", False),
        (predicates.is_numeric, "0123", True),
        (predicates.is_numeric, "12a", False),
        (predicates.is_ascii, "foo bar!", True),
        (predicates.is_ascii, "ｆｏｏ", False),
        (predicates.is_base64, "aGVsbG8=", True),
        (predicates.is_base64, "aGVsbG8=$", False),
        (predicates.is_hex_color, "#ff0034", True),
        (predicates.is_hex_color, "CCCCCC", True),
        (predicates.is_hex_color, "#ff", False),
        (predicates.is_email, "kate@example.com", True),
        (predicates.is_email, "kate", False),
        (predicates.is_email, "kate@example", False),
    ],
)
def test_format_predicates(fn, value, expected):
    assert fn(value) is expected
