"""
Expression parsing utilities for Belalang.

These functions operate on a `belalang.parser.parser.Parser` instance and
implement Pratt (precedence climbing) parsing. Each token type maps to at
most one prefix rule and at most one infix rule; `parse_expression` runs the
prefix rule for the current token and then folds infix rules for as long as
the next operator binds tighter than the caller's bound. Passing the
operator's own precedence as the bound for its right operand makes equal
precedence chains associate to the left.


File: expressions.py
Version: 0.1.0
License: MIT
"""

import math
from enum import IntEnum
from typing import TYPE_CHECKING

from belalang.ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    PrefixExpression,
    StringLiteral,
)
from belalang.exceptions import ParsingFloatError, ParsingIntegerError
from belalang.objects import INT_MAX
from belalang.operations import INFIX_OPS, PREFIX_OPS

if TYPE_CHECKING:
    from belalang.parser import Parser


class Precedence(IntEnum):
    """
    Binding power of operators, lowest first.
    """
    LOWEST = 1
    LOGICAL_OR = 2
    LOGICAL_AND = 3
    EQUALS = 4
    LESS_GREATER = 5
    BITWISE_OR = 6
    BITWISE_XOR = 7
    BITWISE_AND = 8
    SHIFT = 9
    SUM = 10
    PRODUCT = 11
    PREFIX = 12
    CALL = 13


PRECEDENCES = {
    'OR': Precedence.LOGICAL_OR,
    'AND': Precedence.LOGICAL_AND,
    'EQ': Precedence.EQUALS,
    'NE': Precedence.EQUALS,
    'LT': Precedence.LESS_GREATER,
    'LE': Precedence.LESS_GREATER,
    'GT': Precedence.LESS_GREATER,
    'GE': Precedence.LESS_GREATER,
    'PIPE': Precedence.BITWISE_OR,
    'CARET': Precedence.BITWISE_XOR,
    'AMP': Precedence.BITWISE_AND,
    'LSHIFT': Precedence.SHIFT,
    'RSHIFT': Precedence.SHIFT,
    'PLUS': Precedence.SUM,
    'MINUS': Precedence.SUM,
    'MUL': Precedence.PRODUCT,
    'DIV': Precedence.PRODUCT,
    'MOD': Precedence.PRODUCT,
    'LPAREN': Precedence.CALL,
}


# ---- Entry point ----

def parse_expression(parser: 'Parser', precedence: Precedence = Precedence.LOWEST):
    """
    Parse an expression whose infix operators bind tighter than `precedence`.

    Args:
        parser: The parser instance.
        precedence: Minimum binding power an infix operator needs to be folded in.

    Returns:
        Expression: The parsed expression node.

    Raises:
        ParserError: If no prefix rule exists for the current token, or any
            sub-expression fails.
    """
    with parser.nested():
        tok = parser.curr_token
        prefix = PREFIX_RULES.get(tok.type)
        if prefix is None:
            raise parser.prefix_error(tok)
        left = prefix(parser)

        while precedence < parser.curr_precedence():
            infix = INFIX_RULES[parser.curr_token.type]
            left = infix(parser, left)
        return left


# ---- Prefix rules ----

def parse_identifier(parser: 'Parser') -> Identifier:
    """Parse a bare identifier."""
    tok = parser.eat('IDENT', 'identifier')
    return Identifier(tok.value, tok.line)


def parse_integer_literal(parser: 'Parser') -> IntegerLiteral:
    """
    Convert an integer lexeme, rejecting values outside the signed 64-bit range.
    """
    tok = parser.eat('INT')
    try:
        value = int(tok.value, 10)
    except ValueError as e:
        raise ParsingIntegerError(tok.value, tok.line, parser.source_file) from e
    if value > INT_MAX:
        raise ParsingIntegerError(tok.value, tok.line, parser.source_file)
    return IntegerLiteral(value, tok.line)


def parse_float_literal(parser: 'Parser') -> FloatLiteral:
    """
    Convert a float lexeme, rejecting values that overflow to infinity.
    """
    tok = parser.eat('FLOAT')
    try:
        value = float(tok.value)
    except ValueError as e:
        raise ParsingFloatError(tok.value, tok.line, parser.source_file) from e
    if not math.isfinite(value):
        raise ParsingFloatError(tok.value, tok.line, parser.source_file)
    return FloatLiteral(value, tok.line)


def parse_string_literal(parser: 'Parser') -> StringLiteral:
    """Escapes were already resolved by the lexer."""
    tok = parser.eat('STRING')
    return StringLiteral(tok.value, tok.line)


def parse_boolean(parser: 'Parser') -> BooleanLiteral:
    tok = parser.curr_token
    parser.advance()
    return BooleanLiteral(tok.type == 'TRUE', tok.line)


def parse_prefix_expression(parser: 'Parser') -> PrefixExpression:
    """
    Parse a unary `!` or `-` applied to an operand.

    Syntax:
        !<expression> | -<expression>
    """
    tok = parser.curr_token
    parser.advance()
    right = parser.expr(Precedence.PREFIX)
    return PrefixExpression(PREFIX_OPS[tok.type], right, tok.line)


def parse_grouped_expression(parser: 'Parser'):
    """
    Parse a parenthesized expression.

    Syntax:
        ( <expression> )
    """
    parser.eat('LPAREN')
    node = parser.expr()
    parser.eat('RPAREN')
    return node


def parse_if_expression(parser: 'Parser') -> IfExpression:
    """
    Parse a conditional expression with an optional else branch.

    Syntax:
        if (<condition>) { <block> }
        if (<condition>) { <block> } else { <block> }
        if (<condition>) { <block> } else if ...

    Args:
        parser: The parser instance.

    Returns:
        IfExpression: The conditional node. An `else if` is stored as an
            alternative block holding the nested `if`.
    """
    tok = parser.eat('IF')
    parser.eat('LPAREN')
    condition = parser.expr()
    parser.eat('RPAREN')
    consequence = parser.block()

    alternative = None
    if parser.curr_token.type == 'ELSE':
        parser.advance()
        if parser.curr_token.type == 'IF':
            nested_tok = parser.curr_token
            nested = parse_if_expression(parser)
            alternative = BlockStatement(
                (ExpressionStatement(nested, nested_tok.line),), nested_tok.line
            )
        else:
            alternative = parser.block()

    return IfExpression(condition, consequence, alternative, tok.line)


def parse_function_literal(parser: 'Parser') -> FunctionLiteral:
    """
    Parse an anonymous function.

    Syntax:
        fn(<param>, <param>, ...) { <block> }
    """
    tok = parser.eat('FN')
    parser.eat('LPAREN')
    params = []
    if parser.curr_token.type != 'RPAREN':
        params.append(parse_identifier(parser))
        while parser.curr_token.type == 'COMMA':
            parser.advance()
            params.append(parse_identifier(parser))
    parser.eat('RPAREN')
    body = parser.block()
    return FunctionLiteral(tuple(params), body, tok.line)


# ---- Infix rules ----

def parse_infix_expression(parser: 'Parser', left) -> InfixExpression:
    """
    Parse the right operand of a binary operator and fold it with `left`.
    """
    tok = parser.curr_token
    precedence = PRECEDENCES[tok.type]
    parser.advance()
    right = parser.expr(precedence)
    return InfixExpression(INFIX_OPS[tok.type], left, right, tok.line)


def parse_call_expression(parser: 'Parser', function) -> CallExpression:
    """
    Parse the argument list applied to `function`.

    Syntax:
        <expression>(<expression>, <expression>, ...)
    """
    tok = parser.eat('LPAREN')
    args = []
    if parser.curr_token.type != 'RPAREN':
        args.append(parser.expr())
        while parser.curr_token.type == 'COMMA':
            parser.advance()
            args.append(parser.expr())
    parser.eat('RPAREN')
    return CallExpression(function, tuple(args), tok.line)


PREFIX_RULES = {
    'IDENT': parse_identifier,
    'INT': parse_integer_literal,
    'FLOAT': parse_float_literal,
    'STRING': parse_string_literal,
    'TRUE': parse_boolean,
    'FALSE': parse_boolean,
    'NOT': parse_prefix_expression,
    'MINUS': parse_prefix_expression,
    'LPAREN': parse_grouped_expression,
    'IF': parse_if_expression,
    'FN': parse_function_literal,
}

INFIX_RULES = {token_type: parse_infix_expression for token_type in INFIX_OPS}
INFIX_RULES['LPAREN'] = parse_call_expression
