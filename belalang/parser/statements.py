"""Statement parsing utilities for Belalang.

These functions operate on a `belalang.parser.parser.Parser` instance and
handle the statement forms of the language: blocks, `let`, `return`,
declarations and assignments, `while` loops and expression statements.
Every statement may be followed by a semicolon, which is consumed but not
required.


File: statements.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from belalang.ast import (
    BlockStatement,
    ExpressionStatement,
    Identifier,
    LetStatement,
    ReturnStatement,
    VarStatement,
    WhileStatement,
)
from belalang.exceptions import ParserError
from belalang.operations import ASSIGN_OPS

if TYPE_CHECKING:
    from belalang.parser import Parser


def parse_block(parser: 'Parser') -> BlockStatement:
    """
    Parse a block of statements enclosed in braces.

    A statement that fails is recorded on the parser and skipped, so one
    block can report several independent errors.

    Syntax:
        { <statement>* }

    Args:
        parser: The parser instance.

    Returns:
        BlockStatement: The block node.
    """
    with parser.nested():
        tok = parser.eat('LBRACE')
        statements = []
        while parser.curr_token.type not in ('RBRACE', 'EOF'):
            if parser.curr_token.type == 'SEMICOLON':
                parser.advance()
                continue
            try:
                statements.append(parser.statement())
            except ParserError as e:
                parser.record(e)
                parser.synchronize()
        parser.eat('RBRACE')
        return BlockStatement(tuple(statements), tok.line)


def parse_statement(parser: 'Parser'):
    """
    Parse a single statement.

    Syntax:
        <statement> [;]

    Args:
        parser: The parser instance.

    Returns:
        Statement: The statement node.
    """
    tok = parser.curr_token
    if tok.type == 'LET':
        stmt = parse_let(parser)
    elif tok.type == 'RETURN':
        stmt = parse_return(parser)
    elif tok.type == 'IDENT' and parser.peek_token.type in ASSIGN_OPS:
        stmt = parse_var(parser)
    elif tok.type == 'WHILE':
        stmt = parse_while(parser)
    elif tok.type == 'LBRACE':
        stmt = parse_block(parser)
    else:
        stmt = parse_expression_statement(parser)

    if parser.curr_token.type == 'SEMICOLON':
        parser.advance()
    return stmt


def parse_let(parser: 'Parser') -> LetStatement:
    """
    Parse a `let` binding.

    Syntax:
        let <identifier> = <expression>
    """
    tok = parser.eat('LET')
    id_tok = parser.eat('IDENT', 'identifier after let')
    parser.eat('ASSIGN')
    value = parser.expr()
    return LetStatement(Identifier(id_tok.value, id_tok.line), value, tok.line)


def parse_return(parser: 'Parser') -> ReturnStatement:
    """
    Parse a `return` statement.

    Syntax:
        return <expression>
    """
    tok = parser.eat('RETURN')
    value = parser.expr()
    return ReturnStatement(value, tok.line)


def parse_var(parser: 'Parser') -> VarStatement:
    """
    Parse a declaration, assignment or compound assignment.

    Syntax:
        <identifier> := <expression>
        <identifier> = <expression>
        <identifier> += <expression>   (likewise -= *= /= %= &= |= ^= <<= >>=)
    """
    id_tok = parser.eat('IDENT')
    op_tok = parser.curr_token
    parser.advance()
    value = parser.expr()
    return VarStatement(
        Identifier(id_tok.value, id_tok.line), ASSIGN_OPS[op_tok.type], value, id_tok.line
    )


def parse_while(parser: 'Parser') -> WhileStatement:
    """
    Parse a `while` loop.

    Syntax:
        while (<condition>) { <block> }
    """
    tok = parser.eat('WHILE')
    parser.eat('LPAREN')
    condition = parser.expr()
    parser.eat('RPAREN')
    body = parser.block()
    return WhileStatement(condition, body, tok.line)


def parse_expression_statement(parser: 'Parser') -> ExpressionStatement:
    tok = parser.curr_token
    expression = parser.expr()
    return ExpressionStatement(expression, tok.line)
