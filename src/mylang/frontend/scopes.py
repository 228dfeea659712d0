"""
Lexical scope stack for the semantic analyzer.

Each scope maps a name to its declared type (plus where it was declared,
for diagnostics). Declarations go into the innermost scope only; lookup
walks from the innermost scope outward and returns the first hit, which
gives inner blocks shadowing semantics.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from mylang.errors import SourceLocation
from mylang.frontend.types import TypeTag


@dataclass(frozen=True)
class Binding:
    """A declared name's type and declaration site."""
    type_tag: TypeTag
    location: Optional[SourceLocation] = None


class ScopeStack:
    """Ordered stack of name -> Binding mappings."""

    def __init__(self):
        self._scopes: list[dict[str, Binding]] = []

    @property
    def depth(self) -> int:
        """Number of open scopes."""
        return len(self._scopes)

    def push(self) -> None:
        """Open a new innermost scope."""
        self._scopes.append({})

    def pop(self) -> None:
        """Close the innermost scope, discarding its bindings."""
        if not self._scopes:
            raise IndexError("pop from empty scope stack")
        self._scopes.pop()

    @contextmanager
    def scope(self) -> Iterator[None]:
        """Push a scope for the duration of a with-block."""
        self.push()
        try:
            yield
        finally:
            self.pop()

    def declare(
        self,
        name: str,
        type_tag: TypeTag,
        location: Optional[SourceLocation] = None,
    ) -> bool:
        """
        Bind name in the innermost scope.

        Returns:
            False if the innermost scope already binds name (the existing
            binding is kept), True otherwise
        """
        if not self._scopes:
            raise IndexError("declare with no open scope")

        innermost = self._scopes[-1]
        if name in innermost:
            return False
        innermost[name] = Binding(type_tag, location)
        return True

    def lookup(self, name: str) -> Optional[TypeTag]:
        """Return the type of the innermost visible binding of name, or None."""
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name].type_tag
        return None

    def local_binding(self, name: str) -> Optional[Binding]:
        """Return name's binding in the innermost scope only, or None."""
        if not self._scopes:
            return None
        return self._scopes[-1].get(name)

    def visible_names(self) -> list[str]:
        """All names visible from the innermost scope, innermost first."""
        seen: dict[str, None] = {}
        for scope in reversed(self._scopes):
            for name in scope:
                seen.setdefault(name, None)
        return list(seen)
