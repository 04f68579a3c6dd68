"""
Tests for builtin functions in Belalang
"""
import io

import pytest

from belalang.builtins import Builtins
from belalang.evaluator import Evaluator
from belalang.exceptions import BuiltinError
from belalang.objects import NULL, Float, Integer, String

from belalang.tests.utils import run_source


def test_print_output(capsys):
    """
    Test that print separates its arguments with spaces and ends the line.
    """
    result = run_source('print("hello", 1, 2.5, true);')
    assert result is NULL
    assert capsys.readouterr().out == "hello 1 2.5 true\n"


def test_print_no_arguments(capsys):
    run_source("print();")
    assert capsys.readouterr().out == "\n"


def test_print_functions_and_builtins(capsys):
    run_source("print(fn(x) { x }); print(len);")
    assert capsys.readouterr().out.splitlines() == ["fn(x) { x; }", "<builtin len>"]


def test_print_to_custom_stream():
    """
    Test that the registry writes to the stream it was given.
    """
    stream = io.StringIO()
    evaluator = Evaluator(builtins=Builtins(stdout=stream))
    run_source('print("captured");', evaluator)
    assert stream.getvalue() == "captured\n"


def test_len():
    assert run_source('len("hello");') == Integer(5)
    assert run_source('len("");') == Integer(0)
    assert run_source('len("a\\nb");') == Integer(3)


@pytest.mark.parametrize("source", ["len(1);", 'len("a", "b");', "len();"])
def test_len_errors(source):
    with pytest.raises(BuiltinError):
        run_source(source)


@pytest.mark.parametrize("source, expected", [
    ("type(1);", "Integer"),
    ("type(1.0);", "Float"),
    ('type("");', "String"),
    ("type(true);", "Boolean"),
    ("type(fn() { });", "Function"),
    ("type(len);", "Builtin"),
    ("f := fn() { }; type(f());", "Null"),
])
def test_type(source, expected):
    assert run_source(source) == String(expected)


@pytest.mark.parametrize("source, expected", [
    ("str(42);", "42"),
    ("str(-1.5);", "-1.5"),
    ("str(true);", "true"),
    ('str("x");', "x"),
    ("str(1) + str(2);", "12"),
])
def test_str(source, expected):
    assert run_source(source) == String(expected)


@pytest.mark.parametrize("source, expected", [
    ('int("42");', 42),
    ('int(" -7 ");', -7),
    ("int(3.9);", 3),
    ("int(-3.9);", -3),
    ("int(true);", 1),
    ("int(false);", 0),
    ("int(5);", 5),
])
def test_int(source, expected):
    assert run_source(source) == Integer(expected)


@pytest.mark.parametrize("source", [
    'int("abc");',
    'int("99999999999999999999");',
    "int(1.0 / 0.0);",
    "int(fn() { });",
])
def test_int_errors(source):
    with pytest.raises(BuiltinError):
        run_source(source)


def test_float():
    assert run_source("float(2);") == Float(2.0)
    assert run_source('float("2.5");') == Float(2.5)
    assert run_source("float(0.5);") == Float(0.5)
    with pytest.raises(BuiltinError):
        run_source("float(true);")
    with pytest.raises(BuiltinError):
        run_source('float("x");')


def test_builtin_error_message():
    with pytest.raises(BuiltinError) as excinfo:
        run_source("len(1);")
    assert str(excinfo.value) == "len(): only works on strings, got Integer"


def test_registry_interface():
    """
    Test the has/call/names interface the evaluator relies on.
    """
    builtins = Builtins()
    assert builtins.has("print")
    assert not builtins.has("nope")
    assert builtins.names() == ["float", "int", "len", "print", "str", "type"]
    assert builtins.call("len", [String("abc")]) == Integer(3)
    with pytest.raises(BuiltinError):
        builtins.call("nope", [])

