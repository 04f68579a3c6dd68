"""Variable environments.

An :class:`Environment` is one scope: a mapping from names to values plus an
optional reference to the enclosing scope. Lookups walk outward through the
chain; writes always go to the innermost mapping. Closures keep the scope
they were created in alive simply by referencing it.


File: environment.py
Version: 0.1.0
License: MIT
"""

from typing import Optional

from belalang.objects import Object


class Environment:
    """One scope in the lookup chain."""

    def __init__(self, outer: Optional['Environment'] = None):
        self.store: dict[str, Object] = {}
        self.outer = outer

    def get(self, name: str) -> Optional[Object]:
        """
        Resolve `name` from this scope outward; None when unbound everywhere.
        """
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Object) -> None:
        """
        Bind `name` in this scope, shadowing any outer binding.
        """
        self.store[name] = value

    def has_here(self, name: str) -> bool:
        """
        True when `name` is bound in this scope itself, ignoring outer ones.
        """
        return name in self.store

    def capture(self) -> 'Environment':
        """
        New child scope of this one, as taken by a function literal.
        """
        return Environment(self)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __repr__(self) -> str:
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"Environment({sorted(self.store)}, depth={depth})"
