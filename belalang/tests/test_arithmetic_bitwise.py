"""
Tests for arithmetic, comparison, bitwise and logical operators in Belalang
"""
import math

import pytest

from belalang.exceptions import (
    DivisionByZeroError,
    IntegerOverflowError,
    LogicalOperandError,
    UnknownInfixOperatorError,
    UnknownPrefixOperatorError,
)
from belalang.objects import FALSE, TRUE, Boolean, Float, Integer, String

from belalang.tests.utils import run_source


@pytest.mark.parametrize("source, expected", [
    ("1 + 2 * 3;", 7),
    ("(1 + 2) * 3;", 9),
    ("1 - 2 - 3;", -4),
    ("-5 + 10;", 5),
    ("--5;", 5),
    ("2 * (3 + 4) - 10 / 2;", 9),
    ("7 / 2;", 3),
    ("-7 / 2;", -3),
    ("7 / -2;", -3),
    ("7 % 3;", 1),
    ("-7 % 3;", -1),
    ("7 % -3;", 1),
])
def test_integer_arithmetic(source, expected):
    """
    Test integer arithmetic, including truncating division and dividend-signed remainder.
    """
    assert run_source(source) == Integer(expected)


@pytest.mark.parametrize("source, expected", [
    ("6 & 3;", 2),
    ("6 | 3;", 7),
    ("6 ^ 3;", 5),
    ("1 << 4;", 16),
    ("256 >> 4;", 16),
    ("-16 >> 2;", -4),
    ("1 << 63;", -9223372036854775808),
    ("3 << 63;", -9223372036854775808),
])
def test_bitwise_operators(source, expected):
    """
    Test bitwise operators; left shifts wrap to 64 bits.
    """
    assert run_source(source) == Integer(expected)


@pytest.mark.parametrize("source", ["1 << 64;", "1 << -1;", "1 >> 64;"])
def test_shift_amount_out_of_range(source):
    with pytest.raises(IntegerOverflowError):
        run_source(source)


@pytest.mark.parametrize("source", [
    "9223372036854775807 + 1;",
    "-9223372036854775807 - 2;",
    "4611686018427387904 * 2;",
])
def test_integer_overflow(source):
    """
    Test that results outside the signed 64-bit range raise an error.
    """
    with pytest.raises(IntegerOverflowError):
        run_source(source)


@pytest.mark.parametrize("source", ["1 / 0;", "1 % 0;", "x := 0; 5 / x;"])
def test_integer_division_by_zero(source):
    with pytest.raises(DivisionByZeroError):
        run_source(source)


def test_float_arithmetic():
    assert run_source("1.5 + 2.25;") == Float(3.75)
    assert run_source("1.0 / 4.0;") == Float(0.25)
    assert run_source("-2.5;") == Float(-2.5)
    assert run_source("7.5 % 2.0;") == Float(1.5)


def test_float_division_by_zero_follows_ieee():
    """
    Test that float division by zero produces infinities or NaN.
    """
    assert run_source("1.0 / 0.0;") == Float(math.inf)
    assert run_source("-1.0 / 0.0;") == Float(-math.inf)
    assert math.isnan(run_source("0.0 / 0.0;").value)
    assert math.isnan(run_source("1.0 % 0.0;").value)


@pytest.mark.parametrize("source, expected", [
    ("1 < 2;", TRUE),
    ("2 <= 2;", TRUE),
    ("3 > 4;", FALSE),
    ("4 >= 5;", FALSE),
    ("1 == 1;", TRUE),
    ("1 != 1;", FALSE),
    ("1.5 < 2.5;", TRUE),
    ('"a" == "a";', TRUE),
    ('"a" != "b";', TRUE),
    ("true == true;", TRUE),
    ("true != false;", TRUE),
    ("1 == 1.0;", FALSE),
    ("1 != 1.0;", TRUE),
    ('1 == "1";', FALSE),
    ("(1 < 2) == true;", TRUE),
])
def test_comparisons(source, expected):
    """
    Test comparisons; values of different types are never equal.
    """
    assert run_source(source) == expected


def test_logical_operators():
    assert run_source("true && false;") == FALSE
    assert run_source("true || false;") == TRUE
    assert run_source("!true;") == FALSE
    assert run_source("!(1 > 2);") == TRUE


def test_logical_operators_short_circuit():
    """
    Test that the right operand is not evaluated when the left decides the result.
    """
    assert run_source("false && undefined_name;") == FALSE
    assert run_source("true || 1 / 0;") == TRUE


def test_non_boolean_logical_operand_skips_right_side(capsys):
    """
    Test that a non-boolean left operand fails before the right side runs.
    """
    with pytest.raises(LogicalOperandError) as excinfo:
        run_source("1 && missing;")
    assert isinstance(excinfo.value, UnknownInfixOperatorError)
    assert excinfo.value.right is None

    with pytest.raises(UnknownInfixOperatorError):
        run_source('1 || print("side effect");')
    assert capsys.readouterr().out == ""


def test_string_concatenation():
    """
    Test that string + string concatenates with no separator.
    """
    assert run_source('"foo" + "bar";') == String("foobar")
    assert run_source('"" + "";') == String("")


@pytest.mark.parametrize("source", [
    "5 + true;",
    "1 + 1.0;",
    '"a" - "b";',
    '"a" + 1;',
    "true + true;",
    "1 && true;",
    "true && 1;",
    "true < false;",
    "1.5 & 2.5;",
])
def test_unsupported_infix_combinations(source):
    with pytest.raises(UnknownInfixOperatorError):
        run_source(source)


def test_infix_error_names_types():
    """
    Test that the error message names the operator and both operand types.
    """
    with pytest.raises(UnknownInfixOperatorError) as excinfo:
        run_source("5 + true;")
    message = str(excinfo.value)
    assert "Integer" in message
    assert "Boolean" in message
    assert "5 + true" in message


@pytest.mark.parametrize("source", ["!5;", '-"a";', "-true;"])
def test_unsupported_prefix_combinations(source):
    with pytest.raises(UnknownPrefixOperatorError):
        run_source(source)


def test_prefix_error_message():
    with pytest.raises(UnknownPrefixOperatorError) as excinfo:
        run_source("!5;")
    assert str(excinfo.value).startswith("unknown operator: !5 (!Integer)")


def test_boolean_results_are_booleans():
    result = run_source("1 < 2;")
    assert isinstance(result, Boolean)
    assert result.value is True
