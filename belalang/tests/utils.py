"""
Utility functions shared across Belalang tests.
"""
from belalang.evaluator import Evaluator
from belalang.parser import Parser


def parse_source(source: str):
    """
    Parse source code and return the Program.
    """
    return Parser(source, '<test>').parse_program()


def run_source(source: str, evaluator: Evaluator | None = None):
    """
    Parse and evaluate source code, returning the program's value.
    """
    if evaluator is None:
        evaluator = Evaluator(file='<test>')
    return evaluator.evaluate(parse_source(source))


def parse_errors(source: str) -> list:
    """
    Parse source code that is expected to fail and return the recorded errors.
    """
    parser = Parser(source, '<test>')
    try:
        parser.parse_program()
    except SyntaxError:
        return parser.errors
    raise AssertionError(f"expected syntax errors in {source!r}")
