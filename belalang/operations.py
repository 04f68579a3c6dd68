"""Shared definitions for operators.

This module centralizes the operator vocabulary used by the parser and the
evaluator. Each member's value is the operator's source spelling, so AST nodes
print back as source text and error messages read naturally.


File: operations.py
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported operators.
    """

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"

    # Bitwise
    AND_BITS = "&"
    OR_BITS = "|"
    XOR_BITS = "^"
    SHL = "<<"
    SHR = ">>"

    # Comparison
    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    # Boolean
    NOT = "!"
    AND = "&&"
    OR = "||"

    # Binding
    DECLARE = ":="
    ASSIGN = "="
    ADD_ASSIGN = "+="
    SUB_ASSIGN = "-="
    MUL_ASSIGN = "*="
    DIV_ASSIGN = "/="
    MOD_ASSIGN = "%="
    AND_BITS_ASSIGN = "&="
    OR_BITS_ASSIGN = "|="
    XOR_BITS_ASSIGN = "^="
    SHL_ASSIGN = "<<="
    SHR_ASSIGN = ">>="

    def __str__(self) -> str:
        """
        Return the operator's source spelling.
        """
        return self.value


# Token type -> operator, for every token that can appear between two operands.
INFIX_OPS = {
    'PLUS': Op.ADD,
    'MINUS': Op.SUB,
    'MUL': Op.MUL,
    'DIV': Op.DIV,
    'MOD': Op.MOD,
    'AMP': Op.AND_BITS,
    'PIPE': Op.OR_BITS,
    'CARET': Op.XOR_BITS,
    'LSHIFT': Op.SHL,
    'RSHIFT': Op.SHR,
    'EQ': Op.EQ,
    'NE': Op.NE,
    'GT': Op.GT,
    'LT': Op.LT,
    'GE': Op.GE,
    'LE': Op.LE,
    'AND': Op.AND,
    'OR': Op.OR,
}

PREFIX_OPS = {
    'NOT': Op.NOT,
    'MINUS': Op.SUB,
}

# Token type -> binding operator used by declare/assign statements.
ASSIGN_OPS = {
    'COLON_ASSIGN': Op.DECLARE,
    'ASSIGN': Op.ASSIGN,
    'ADD_ASSIGN': Op.ADD_ASSIGN,
    'SUB_ASSIGN': Op.SUB_ASSIGN,
    'MUL_ASSIGN': Op.MUL_ASSIGN,
    'DIV_ASSIGN': Op.DIV_ASSIGN,
    'MOD_ASSIGN': Op.MOD_ASSIGN,
    'AMP_ASSIGN': Op.AND_BITS_ASSIGN,
    'PIPE_ASSIGN': Op.OR_BITS_ASSIGN,
    'CARET_ASSIGN': Op.XOR_BITS_ASSIGN,
    'LSHIFT_ASSIGN': Op.SHL_ASSIGN,
    'RSHIFT_ASSIGN': Op.SHR_ASSIGN,
}

# Compound assignment -> the binary operator it applies.
COMPOUND_OPS = {
    Op.ADD_ASSIGN: Op.ADD,
    Op.SUB_ASSIGN: Op.SUB,
    Op.MUL_ASSIGN: Op.MUL,
    Op.DIV_ASSIGN: Op.DIV,
    Op.MOD_ASSIGN: Op.MOD,
    Op.AND_BITS_ASSIGN: Op.AND_BITS,
    Op.OR_BITS_ASSIGN: Op.OR_BITS,
    Op.XOR_BITS_ASSIGN: Op.XOR_BITS,
    Op.SHL_ASSIGN: Op.SHL,
    Op.SHR_ASSIGN: Op.SHR,
}


__all__ = ["Op", "INFIX_OPS", "PREFIX_OPS", "ASSIGN_OPS", "COMPOUND_OPS"]
