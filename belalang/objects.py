"""Runtime values.

Every value the evaluator produces is one of the classes below. All of them
except :class:`Function` are immutable value types compared structurally;
a function compares by identity and shares its captured environment with
every other holder of that environment.

:class:`ReturnValue` is not a value: it is the signal a ``return`` statement
hands upward until the nearest call boundary unwraps it.


File: objects.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Tuple

from belalang.ast import BlockStatement, Identifier, StringLiteral

if TYPE_CHECKING:
    from belalang.environment import Environment


INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1


class Object:
    """Base of every runtime value."""
    type_name: ClassVar[str] = 'Object'

    def inspect(self) -> str:
        """
        Source-like rendering used by the REPL and in error messages.
        """
        return str(self)


@dataclass(frozen=True)
class Integer(Object):
    value: int
    type_name: ClassVar[str] = 'Integer'

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Float(Object):
    value: float
    type_name: ClassVar[str] = 'Float'

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class String(Object):
    value: str
    type_name: ClassVar[str] = 'String'

    def __str__(self) -> str:
        return self.value

    def inspect(self) -> str:
        return str(StringLiteral(self.value))


@dataclass(frozen=True)
class Boolean(Object):
    value: bool
    type_name: ClassVar[str] = 'Boolean'

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(frozen=True)
class Null(Object):
    type_name: ClassVar[str] = 'Null'

    def __str__(self) -> str:
        return 'null'


NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


@dataclass(eq=False)
class Function(Object):
    """
    A closure: parameters and body plus the environment it was created in.
    """
    params: Tuple[Identifier, ...]
    body: BlockStatement
    env: 'Environment' = field(repr=False)
    type_name: ClassVar[str] = 'Function'

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.params)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True)
class Builtin(Object):
    name: str
    type_name: ClassVar[str] = 'Builtin'

    def __str__(self) -> str:
        return f"<builtin {self.name}>"


@dataclass(frozen=True)
class ReturnValue:
    """
    Result of a ``return`` statement travelling up to its call boundary.
    """
    value: Object


def native_bool(value: bool) -> Boolean:
    """
    Map a Python bool onto the shared Boolean instances.
    """
    return TRUE if value else FALSE
