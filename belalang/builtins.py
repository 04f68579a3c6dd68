"""Builtin functions.

The :class:`Builtins` registry maps reserved names to native Python
implementations. The evaluator consults it only after a name is missing from
the whole environment chain, and never looks inside: it asks ``has(name)``
and hands the evaluated arguments to ``call(name, args)``.


File: builtins.py
Version: 0.1.0
License: MIT
"""

import math
import sys

from belalang.exceptions import BuiltinError
from belalang.objects import (
    INT_MAX,
    INT_MIN,
    NULL,
    Boolean,
    Float,
    Integer,
    Object,
    String,
)


def _expect_arity(name: str, args: list, count: int) -> None:
    if len(args) != count:
        plural = '' if count == 1 else 's'
        raise BuiltinError(name, f"expects {count} argument{plural}, got {len(args)}")


def _checked_int(name: str, value: int) -> Integer:
    if not INT_MIN <= value <= INT_MAX:
        raise BuiltinError(name, f"{value} is outside the 64-bit integer range")
    return Integer(value)


def builtin_len(args: list) -> Object:
    """Length of a string."""
    _expect_arity('len', args, 1)
    arg = args[0]
    if not isinstance(arg, String):
        raise BuiltinError('len', f"only works on strings, got {arg.type_name}")
    return Integer(len(arg.value))


def builtin_type(args: list) -> Object:
    """Name of the argument's type."""
    _expect_arity('type', args, 1)
    return String(args[0].type_name)


def builtin_str(args: list) -> Object:
    """String rendering of any value."""
    _expect_arity('str', args, 1)
    return String(str(args[0]))


def builtin_int(args: list) -> Object:
    """
    Convert an Integer, Float, Boolean or decimal String to an Integer.
    Floats are truncated toward zero.
    """
    _expect_arity('int', args, 1)
    arg = args[0]
    match arg:
        case Integer():
            return arg
        case Boolean(value=value):
            return Integer(1 if value else 0)
        case Float(value=value):
            if not math.isfinite(value):
                raise BuiltinError('int', f"cannot convert {arg} to an integer")
            return _checked_int('int', int(value))
        case String(value=value):
            try:
                return _checked_int('int', int(value.strip(), 10))
            except ValueError as e:
                raise BuiltinError('int', f"invalid integer literal {arg.inspect()}") from e
    raise BuiltinError('int', f"cannot convert {arg.type_name} to an integer")


def builtin_float(args: list) -> Object:
    """Convert an Integer, Float or numeric String to a Float."""
    _expect_arity('float', args, 1)
    arg = args[0]
    match arg:
        case Float():
            return arg
        case Integer(value=value):
            return Float(float(value))
        case String(value=value):
            try:
                return Float(float(value.strip()))
            except ValueError as e:
                raise BuiltinError('float', f"invalid float literal {arg.inspect()}") from e
    raise BuiltinError('float', f"cannot convert {arg.type_name} to a float")


class Builtins:
    """
    Registry of native functions available to every program.
    """

    def __init__(self, stdout=None):
        """
        Parameters:
            stdout: Stream `print` writes to; defaults to the current `sys.stdout`.
        """
        self.stdout = stdout
        self._functions = {
            'print': self.builtin_print,
            'len': builtin_len,
            'type': builtin_type,
            'str': builtin_str,
            'int': builtin_int,
            'float': builtin_float,
        }

    def has(self, name: str) -> bool:
        return name in self._functions

    def names(self) -> list[str]:
        return sorted(self._functions)

    def call(self, name: str, args: list) -> Object:
        """
        Run the builtin `name` on already evaluated arguments.

        Raises:
            BuiltinError: If the builtin does not exist or rejects its arguments.
        """
        function = self._functions.get(name)
        if function is None:
            raise BuiltinError(name, "no such builtin")
        return function(args)

    def builtin_print(self, args: list) -> Object:
        """Write the arguments separated by spaces, then a newline."""
        stream = self.stdout if self.stdout is not None else sys.stdout
        print(' '.join(str(arg) for arg in args), file=stream)
        return NULL
