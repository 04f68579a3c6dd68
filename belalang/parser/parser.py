"""
Main parser entry point for Belalang.

This module defines the `Parser` class, which owns the token lookahead and
the list of collected syntax errors. The actual parsing routines are split
across `belalang.parser.expressions` (Pratt expression parsing) and
`belalang.parser.statements`.


File: parser.py
Version: 0.1.0
License: MIT
"""

import logging
from contextlib import contextmanager

from belalang.ast import Program
from belalang.exceptions import (
    EscapeStringError,
    IllegalTokenError,
    MaxRecursionDepthError,
    ParserError,
    ParserErrors,
    PrefixOperatorError,
    UnclosedStringError,
    UnexpectedEOFError,
    UnexpectedTokenError,
)
from belalang.lexer import LITERALS, Lexer
from belalang.operations import ASSIGN_OPS, INFIX_OPS

from . import expressions as _expr
from . import statements as _stmt
from .expressions import PRECEDENCES, Precedence

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200

# Operators that cannot start an expression.
_OPERATOR_TOKENS = (set(INFIX_OPS) | set(ASSIGN_OPS)) - {'MINUS'}


class Parser:
    """Belalang parser."""

    def __init__(self, lexer, file: str = "<stdin>", max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize the parser over a token stream.

        Parameters:
            lexer: A token stream (anything with ``next_token()``) or a source string.
            file (str): The name of the script, used in error messages.
            max_depth (int): Deepest nesting of expressions and blocks accepted.
        """
        if isinstance(lexer, str):
            lexer = Lexer(lexer)
        self.lexer = lexer
        self.source_file = file
        self.max_depth = max_depth
        self.depth = 0
        self.errors: list[ParserError] = []
        self.curr_token = self.lexer.next_token()
        self.peek_token = self.lexer.next_token()

    def advance(self) -> None:
        """
        Shift the lookahead window by one token.
        """
        self.curr_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def eat(self, token_type: str, expected: str | None = None):
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.
            expected (str): Human readable description for the error message.

        Returns:
            Token: The consumed token.

        Raises:
            ParserError: If the token does not match the expected type.
        """
        tok = self.curr_token
        if tok.type != token_type:
            raise self.token_error(tok, expected or repr(LITERALS.get(token_type, token_type)))
        self.advance()
        return tok

    def curr_precedence(self) -> Precedence:
        """
        Precedence of the current token as an infix operator.
        """
        return PRECEDENCES.get(self.curr_token.type, Precedence.LOWEST)

    def token_error(self, tok, expected: str | None = None) -> ParserError:
        """
        Build the syntax error describing an unwanted token.
        """
        match tok.type:
            case 'EOF':
                return UnexpectedEOFError(tok.line, self.source_file)
            case 'ILLEGAL':
                return IllegalTokenError(tok.value, tok.line, self.source_file)
            case 'UNCLOSED_STRING':
                return UnclosedStringError(tok.line, self.source_file)
            case 'BAD_ESCAPE':
                return EscapeStringError(tok.value, tok.line, self.source_file)
        return UnexpectedTokenError(tok, expected, self.source_file)

    def prefix_error(self, tok) -> ParserError:
        """
        Build the syntax error for a token that has no prefix rule.
        """
        if tok.type in _OPERATOR_TOKENS:
            return PrefixOperatorError(tok, self.source_file)
        return self.token_error(tok)

    @contextmanager
    def nested(self):
        """
        Track one level of recursion, failing past ``max_depth``.
        """
        if self.depth >= self.max_depth:
            raise MaxRecursionDepthError(self.max_depth, self.curr_token.line, self.source_file)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def record(self, error: ParserError) -> None:
        """
        Remember a syntax error and keep going.
        """
        logger.debug("syntax error recorded: %s", error)
        self.errors.append(error)

    def synchronize(self) -> None:
        """
        Skip to the next statement boundary after a syntax error.

        Stops before a closing brace so the enclosing block can finish, and
        consumes a terminating semicolon.
        """
        while self.curr_token.type not in ('SEMICOLON', 'RBRACE', 'EOF'):
            self.advance()
        if self.curr_token.type == 'SEMICOLON':
            self.advance()


    # Expression wrappers
    def expr(self, precedence: Precedence = Precedence.LOWEST):
        """
        Parse an expression whose operators bind tighter than ``precedence``.
        """
        return _expr.parse_expression(self, precedence)


    # Statement wrappers
    def block(self):
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_block(self)

    def statement(self):
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)


    def parse_program(self) -> Program:
        """
        Parse the full input into a Program.

        Raises:
            ParserErrors: If any syntax error was found.
        """
        statements = []
        while self.curr_token.type != 'EOF':
            if self.curr_token.type == 'SEMICOLON':
                self.advance()
                continue
            try:
                statements.append(self.statement())
            except ParserError as e:
                self.record(e)
                self.synchronize()
                if self.curr_token.type == 'RBRACE':
                    # A stray closer at top level; skip it.
                    self.advance()
        if self.errors:
            raise ParserErrors(self.errors)
        return Program(tuple(statements))

    parse = parse_program


def parse(source, file: str = "<stdin>", max_depth: int = DEFAULT_MAX_DEPTH) -> Program:
    """
    Parse source text (or a token stream) into a Program.

    Raises:
        ParserErrors: If any syntax error was found.
    """
    return Parser(source, file, max_depth).parse_program()
