"""Tests for canonical operand strings and display formatting."""

import pytest

from keycalc.formatting import canonical, format_number, parse_operand


# --- canonical (6 tests) ---

def test_canonical_drops_integral_point():
    assert canonical(10.0) == "10"


def test_canonical_negative_zero():
    assert canonical(-0.0) == "0"
    assert canonical(-1e-12, precision=10) == "0"


def test_canonical_no_exponent():
    assert canonical(1e-05) == "0.00001"
    assert canonical(1e22) == "1" + "0" * 22


def test_canonical_rounds_shortest_repr():
    assert canonical(1.005, precision=2) == "1.01"
    assert canonical(-2.5, precision=0) == "-3"


def test_canonical_strips_trailing_zeros_after_rounding():
    assert canonical(0.1 + 0.2, precision=10) == "0.3"


def test_canonical_large_value_with_precision():
    # Needs far more than the default 28 significant digits
    assert canonical(1e300, precision=10) == "1" + "0" * 300


# --- parse_operand (2 tests) ---

@pytest.mark.parametrize("text,expected", [
    ("0", 0.0),
    ("12.5", 12.5),
    ("5.", 5.0),
    (".5", 0.5),
    ("-4", -4.0),
])
def test_parse_operand_valid(text, expected):
    assert parse_operand(text) == expected


@pytest.mark.parametrize("text", ["", ".", "-", "Error", "inf", "nan", "1e5", " 1"])
def test_parse_operand_rejects(text):
    assert parse_operand(text) is None


# --- format_number (6 tests) ---

def test_format_error_verbatim():
    assert format_number("Error") == "Error"


def test_format_groups_thousands():
    assert format_number("1234567") == "1,234,567"
    assert format_number("123") == "123"


def test_format_keeps_fraction_unchanged():
    assert format_number("1234.5000") == "1,234.5000"
    assert format_number("0.") == "0."


def test_format_negative():
    assert format_number("-1234.5") == "-1,234.5"
    assert format_number("-0.5") == "-0.5"


def test_format_empty_integer_part():
    assert format_number("") == ""
    assert format_number(".") == "."


def test_format_custom_separator():
    assert format_number("9876543", separator=" ") == "9 876 543"


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_canonical_rejects_non_finite(value):
    with pytest.raises(ValueError):
        canonical(value)
