"""Errors.

Belalang keeps two disjoint error families. Syntax errors derive from
:class:`ParserError` (itself a :class:`SyntaxError`) and are collected by the
parser. Runtime errors derive from :class:`EvaluatorError` and abort the
program being evaluated. ``return`` is not an error; it travels through the
evaluator as :class:`belalang.objects.ReturnValue`.


File: exceptions.py
Version: 0.1.0
License: MIT
"""


def _located(message, line=None, file=None):
    if line is not None:
        message += f" on line {line}"
    if file is not None:
        message += f" in {file}"
    return message


# ----------------------------------------------------------------------
# Syntax errors
# ----------------------------------------------------------------------

class ParserError(SyntaxError):
    """
    Base class for every error reported by the parser.
    """
    def __init__(self, message, line=None, file=None):
        self.line = line
        self.file = file
        super().__init__(_located(message, line, file))


class UnexpectedTokenError(ParserError):
    """
    A token appeared where the grammar does not allow it.
    """
    def __init__(self, token, expected=None, file=None):
        self.token = token
        self.expected = expected
        message = f"unexpected token: {token.literal}"
        if expected is not None:
            message += f" (expected {expected})"
        super().__init__(message, token.line, file)


class PrefixOperatorError(ParserError):
    """
    An operator token that cannot start an expression.
    """
    def __init__(self, token, file=None):
        self.token = token
        super().__init__(f"unknown prefix operator: {token.literal}", token.line, file)


class ParsingIntegerError(ParserError):
    """
    An integer lexeme that is malformed or outside the 64-bit range.
    """
    def __init__(self, lexeme, line=None, file=None):
        self.lexeme = lexeme
        super().__init__(
            f"error parsing integer: could not parse {lexeme} as integer", line, file
        )


class ParsingFloatError(ParserError):
    """
    A float lexeme that is malformed or not finite.
    """
    def __init__(self, lexeme, line=None, file=None):
        self.lexeme = lexeme
        super().__init__(
            f"error parsing float: could not parse {lexeme} as float", line, file
        )


class IllegalTokenError(ParserError):
    """
    A character the lexer does not recognise.
    """
    def __init__(self, text, line=None, file=None):
        self.text = text
        super().__init__(f"illegal token: {text}", line, file)


class EscapeStringError(ParserError):
    """
    An unknown escape sequence inside a string literal.
    """
    def __init__(self, escape, line=None, file=None):
        self.escape = escape
        super().__init__(f"unknown escape string: \\{escape}", line, file)


class UnclosedStringError(ParserError):
    """
    A string literal that runs into the end of the input.
    """
    def __init__(self, line=None, file=None):
        super().__init__("unclosed string", line, file)


class UnexpectedEOFError(ParserError):
    """
    The input ended in the middle of a construct.
    """
    def __init__(self, line=None, file=None):
        super().__init__("unexpected EOF", line, file)


class MaxRecursionDepthError(ParserError):
    """
    Expression nesting exceeded the parser's depth limit.
    """
    def __init__(self, limit, line=None, file=None):
        self.limit = limit
        super().__init__(f"maximum nesting depth of {limit} exceeded", line, file)


class ParserErrors(SyntaxError):
    """
    Every syntax error found in one call to ``parse_program``.
    """
    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))

    @property
    def incomplete(self) -> bool:
        """
        True when the only problem is that the input stopped too early.
        """
        return all(
            isinstance(e, (UnexpectedEOFError, UnclosedStringError))
            for e in self.errors
        )


# ----------------------------------------------------------------------
# Evaluation errors
# ----------------------------------------------------------------------

class EvaluatorError(Exception):
    """
    Base class for every runtime error raised by the evaluator.
    """
    def __init__(self, message, line=None, file=None):
        self.line = line
        self.file = file
        super().__init__(_located(message, line, file))


class UnknownPrefixOperatorError(EvaluatorError):
    """
    Unary operator applied to an operand it does not support.
    """
    def __init__(self, op, right, line=None, file=None):
        self.op = op
        self.right = right
        super().__init__(
            f"unknown operator: {op}{right.inspect()} ({op}{right.type_name})",
            line,
            file,
        )


class UnknownInfixOperatorError(EvaluatorError):
    """
    Binary operator applied to operands it does not support.
    """
    def __init__(self, left, op, right, line=None, file=None):
        self.left = left
        self.op = op
        self.right = right
        super().__init__(
            f"unknown operator: {left.inspect()} {op} {right.inspect()} "
            f"({left.type_name} {op} {right.type_name})",
            line,
            file,
        )


class LogicalOperandError(UnknownInfixOperatorError):
    """
    Non-boolean left operand of ``&&`` or ``||``. The right operand is never
    evaluated.
    """
    def __init__(self, left, op, line=None, file=None):
        self.left = left
        self.op = op
        self.right = None
        EvaluatorError.__init__(
            self,
            f"unknown operator: {left.inspect()} {op} ({left.type_name} {op})",
            line,
            file,
        )


class UnknownVariableError(EvaluatorError):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"unknown variable: {varname}", line, file)


class NotAFunctionError(EvaluatorError):
    """
    Attempted call on a value that is neither a function nor a builtin.
    """
    def __init__(self, value, line=None, file=None):
        self.value = value
        super().__init__(f"not a function: {value.type_name}", line, file)


class OverwriteBuiltinError(EvaluatorError):
    """
    Attempted to bind a name owned by the builtin registry.
    """
    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"overwriting builtin: {name}", line, file)


class VariableRedeclarationError(EvaluatorError):
    """
    ``:=`` used on a name already bound in the current scope.
    """
    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"variable redeclaration: {name}", line, file)


class ConditionTypeError(EvaluatorError):
    """
    ``if`` or ``while`` condition that did not evaluate to a boolean.
    """
    def __init__(self, construct, value, line=None, file=None):
        self.construct = construct
        self.value = value
        super().__init__(
            f"{construct} condition must be Boolean, got {value.type_name}",
            line,
            file,
        )


class ArityError(EvaluatorError):
    """
    Function called with the wrong number of arguments.
    """
    def __init__(self, expected, got, line=None, file=None):
        self.expected = expected
        self.got = got
        super().__init__(
            f"wrong number of arguments: expected {expected}, got {got}", line, file
        )


class DivisionByZeroError(EvaluatorError):
    """
    Integer division or remainder by zero.
    """
    def __init__(self, op, line=None, file=None):
        self.op = op
        super().__init__(f"division by zero: {op}", line, file)


class IntegerOverflowError(EvaluatorError):
    """
    Integer result or shift amount outside the 64-bit range.
    """
    def __init__(self, detail, line=None, file=None):
        self.detail = detail
        super().__init__(f"integer overflow: {detail}", line, file)


class BuiltinError(EvaluatorError):
    """
    A builtin rejected its arguments.
    """
    def __init__(self, name, message, line=None, file=None):
        self.name = name
        super().__init__(f"{name}(): {message}", line, file)


class EvalRecursionError(EvaluatorError):
    """
    Evaluation nested deeper than the evaluator's depth limit.
    """
    def __init__(self, limit, line=None, file=None):
        self.limit = limit
        super().__init__(f"maximum recursion depth of {limit} exceeded", line, file)
