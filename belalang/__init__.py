"""
Belalang Language Interpreter

Workflow:
1. The Lexer turns source text into a stream of tokens.
2. The Parser builds a Program (the AST) from the token stream.
3. The Evaluator walks the Program, resolving names through chained
   Environments and the Builtins registry.


File: __init__.py
Version: 0.1.0
License: MIT
"""

import logging

from belalang.builtins import Builtins
from belalang.environment import Environment
from belalang.evaluator import Evaluator, evaluate
from belalang.lexer import Lexer, Token, tokenize
from belalang.parser import Parser, parse

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Builtins",
    "Environment",
    "Evaluator",
    "Lexer",
    "Parser",
    "Token",
    "evaluate",
    "parse",
    "tokenize",
]
