"""
Tests for function calls and return in Belalang
"""
import pytest

from belalang.evaluator import Evaluator
from belalang.exceptions import ArityError, EvalRecursionError, NotAFunctionError
from belalang.objects import NULL, Function, Integer, String

from belalang.tests.utils import parse_source, run_source


def test_call_with_return():
    assert run_source("add := fn(a, b) { return a + b; }; add(2, 3);") == Integer(5)


def test_implicit_result_is_last_statement():
    assert run_source("double := fn(x) { x * 2 }; double(21);") == Integer(42)


def test_immediately_invoked_function():
    assert run_source("fn(x) { x * 2 }(4);") == Integer(8)


def test_return_stops_function_early():
    """
    Test that a return inside an if ends the whole function.
    """
    source = (
        "sign := fn(x) {\n"
        "    if (x > 0) { return 1; }\n"
        "    return -1;\n"
        "};\n"
        "sign(5) + sign(-5) * 10;\n"
    )
    assert run_source(source) == Integer(-9)


def test_return_from_inside_loop():
    source = (
        "f := fn() {\n"
        "    i := 0;\n"
        "    while (true) {\n"
        "        i += 1;\n"
        "        if (i == 5) { return i; }\n"
        "    }\n"
        "};\n"
        "f();\n"
    )
    assert run_source(source) == Integer(5)


def test_return_does_not_leak_past_call():
    """
    Test that a return only ends the function it belongs to.
    """
    source = "f := fn() { return 1; }; x := f(); x + 1;"
    assert run_source(source) == Integer(2)


def test_return_inside_if_value_ends_function():
    """
    Test that a return inside an if used as a value ends the whole function.
    """
    source = "f := fn() { x := if (true) { return 3; } else { 4 }; x + 1 }; f();"
    assert run_source(source) == Integer(3)


def test_return_inside_call_argument_ends_function(capsys):
    """
    Test that a return in argument position skips the call and ends the function.
    """
    source = "f := fn() { print(if (true) { return 1; }); 2 }; f();"
    assert run_source(source) == Integer(1)
    assert capsys.readouterr().out == ""


def test_return_inside_operand_ends_function():
    source = "f := fn() { y := 10 + if (true) { return 5; }; y * 2 }; f();"
    assert run_source(source) == Integer(5)


def test_return_inside_while_condition_ends_function():
    source = "f := fn() { while (if (true) { return 7; }) { 0 }; 8 }; f();"
    assert run_source(source) == Integer(7)


def test_top_level_return_ends_program():
    assert run_source("return 5; 10;") == Integer(5)


def test_empty_body_returns_null():
    assert run_source("f := fn() { }; f();") is NULL


def test_functions_are_values():
    """
    Test passing functions as arguments and returning them.
    """
    source = "apply := fn(f, x) { f(x) }; apply(fn(n) { n * n }, 7);"
    assert run_source(source) == Integer(49)

    result = run_source("fn(a, b) { a };")
    assert isinstance(result, Function)
    assert str(result) == "fn(a, b) { a; }"


def test_builtins_are_values():
    assert run_source('p := len; p("abc");') == Integer(3)


def test_arguments_evaluated_left_to_right(capsys):
    source = (
        "id := fn(x) { print(x); x };\n"
        "f := fn(a, b, c) { a + b + c };\n"
        "f(id(1), id(2), id(3));\n"
    )
    assert run_source(source) == Integer(6)
    assert capsys.readouterr().out.splitlines() == ['1', '2', '3']


@pytest.mark.parametrize("source", [
    "f := fn(a) { a }; f(1, 2);",
    "f := fn(a, b) { a }; f(1);",
    "fn() { 1 }(1);",
])
def test_arity_mismatch(source):
    """
    Test that calling with the wrong number of arguments is an error.
    """
    with pytest.raises(ArityError):
        run_source(source)


def test_arity_error_message():
    with pytest.raises(ArityError) as excinfo:
        run_source("f := fn(a) { a }; f(1, 2);")
    assert str(excinfo.value).startswith("wrong number of arguments: expected 1, got 2")


@pytest.mark.parametrize("source", ["x := 1; x();", '"s"(1);', "true();"])
def test_not_a_function(source):
    with pytest.raises(NotAFunctionError):
        run_source(source)


def test_recursion_depth_limit():
    """
    Test that runaway recursion stops at the configured depth.
    """
    source = "f := fn(n) { if (n == 0) { 0 } else { 1 + f(n - 1) } };"
    evaluator = Evaluator(max_depth=10)
    run_source(source, evaluator)
    assert run_source("f(5);", evaluator) == Integer(5)
    with pytest.raises(EvalRecursionError):
        run_source("f(20);", evaluator)
    # The depth counter is restored after the failure.
    assert evaluator.depth == 0
    assert run_source("f(9);", evaluator) == Integer(9)


def test_host_recursion_limit_reported():
    """
    Test that exhausting the Python stack surfaces as an evaluation error.
    """
    evaluator = Evaluator(max_depth=10**7)
    program = parse_source("f := fn(n) { 1 + f(n + 1) }; f(0);")
    with pytest.raises(EvalRecursionError):
        evaluator.evaluate(program)


def test_string_building_function():
    source = 'greet := fn(name) { "hello, " + name }; greet("bela");'
    assert run_source(source) == String("hello, bela")
