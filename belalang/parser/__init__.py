"""Parser package for Belalang.

This package splits the parser functionality into multiple modules to
keep the code organized. The :class:`Parser` class and the :func:`parse`
helper are exposed at the package level for convenience.


File: __init__.py
Version: 0.1.0
License: MIT
"""

from .parser import Parser, parse
from .expressions import Precedence

__all__ = ["Parser", "Precedence", "parse"]
