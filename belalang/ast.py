"""Abstract syntax tree for Belalang.

Two closed families of immutable nodes: statements and expressions. Every
node is a frozen dataclass owning its children exclusively (sequences are
tuples), and ``str(node)`` renders source text that parses back to an equal
node. The ``line`` attribute records where the node started and takes no
part in equality.


File: ast.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from belalang.operations import Op


_STRING_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\t': '\\t',
    '\r': '\\r',
    '\0': '\\0',
}


class Node:
    """Common base of every AST node."""


class Statement(Node):
    """Base of the statement family."""


class Expression(Node):
    """Base of the expression family."""


def _line():
    return field(default=None, compare=False, repr=False)


# ---- Expressions ----

@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FloatLiteral(Expression):
    value: float
    line: Optional[int] = _line()

    def __str__(self) -> str:
        text = format(Decimal(repr(self.value)), 'f')
        return text if '.' in text else text + '.0'


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return '"' + ''.join(_STRING_ESCAPES.get(ch, ch) for ch in self.value) + '"'


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(frozen=True)
class Identifier(Expression):
    name: str
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: Op
    right: Expression
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return f"({self.operator.value}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    operator: Op
    left: Expression
    right: Expression
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return f"({self.left} {self.operator.value} {self.right})"


@dataclass(frozen=True)
class IfExpression(Expression):
    """
    ``if (condition) { ... } else { ... }``. An ``else if`` chain is stored as
    an alternative block holding a single nested ``if``.
    """
    condition: Expression
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None
    line: Optional[int] = _line()

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        alt = self.alternative
        if alt is None:
            return text
        nested = alt.single_if()
        if nested is not None:
            return f"{text} else {nested}"
        return f"{text} else {alt}"


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    params: Tuple[Identifier, ...]
    body: 'BlockStatement'
    line: Optional[int] = _line()

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.params)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    function: Expression
    args: Tuple[Expression, ...]
    line: Optional[int] = _line()

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.args)
        return f"{self.function}({args})"


# ---- Statements ----

@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return f"{self.expression};"


@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Expression
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Expression
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass(frozen=True)
class VarStatement(Statement):
    """
    Declaration (``:=``), assignment (``=``) or compound assignment (``+=`` ...).
    """
    name: Identifier
    operator: Op
    value: Expression
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return f"{self.name} {self.operator.value} {self.value};"


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: Tuple[Statement, ...]
    line: Optional[int] = _line()

    def single_if(self) -> Optional[IfExpression]:
        """
        Return the nested ``if`` when this block is the tail of an else-if chain.
        """
        if len(self.statements) != 1:
            return None
        stmt = self.statements[0]
        if isinstance(stmt, ExpressionStatement) and isinstance(stmt.expression, IfExpression):
            return stmt.expression
        return None

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + ' '.join(str(s) for s in self.statements) + ' }'


@dataclass(frozen=True)
class WhileStatement(Statement):
    condition: Expression
    body: BlockStatement
    line: Optional[int] = _line()

    def __str__(self) -> str:
        return f"while ({self.condition}) {self.body}"


@dataclass(frozen=True)
class Program(Node):
    """
    Root of the tree: the ordered top-level statements.
    """
    statements: Tuple[Statement, ...] = ()

    def __str__(self) -> str:
        return '\n'.join(str(s) for s in self.statements)
