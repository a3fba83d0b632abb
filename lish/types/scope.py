"""Runtime scopes for lish.

A Scope maps identifiers to evaluated values and falls back to its parent on
lookup, forming an explicit chain. Every scope also carries a reference to the
session's module scope, the one place `def` writes to no matter how deeply it
is nested.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from lish import LishValue


class Scope:
    """Chained mapping from names to lish values."""

    __slots__ = ("vars", "parent", "module")

    def __init__(self, parent: Optional[Scope] = None, module: Optional[Scope] = None):
        self.vars: dict[str, LishValue] = {}
        self.parent: Optional[Scope] = parent
        if module is None and parent is not None:
            module = parent.module
        self.module: Optional[Scope] = module

    @classmethod
    def module_scope(cls, parent: Optional[Scope] = None) -> Scope:
        """Create a self-referencing module scope chained to `parent`."""
        scope = cls(parent)
        scope.module = scope
        return scope

    def child(self) -> Scope:
        return Scope(parent=self)

    def define(self, name: str, value: LishValue) -> None:
        """Bind `name` in this frame, shadowing any outer binding."""
        self.vars[name] = value

    def update(self, mapping: dict[str, LishValue]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        self.vars.update(mapping)

    def find(self, name: str) -> Optional[Scope]:
        """Find the nearest scope in the chain that binds `name`."""
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.vars:
                return scope
            scope = scope.parent
        return None

    def lookup(self, name: str) -> LishValue:
        """Value bound to `name`, or None when nothing in the chain binds it."""
        scope = self.find(name)
        if scope is None:
            return None
        return scope.vars[name]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def delete(self, name: str) -> bool:
        """Remove the nearest binding of `name` between here and the module scope.

        Frames above the module scope (the core library) are left alone.
        Returns True when a binding was removed.
        """
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.vars:
                del scope.vars[name]
                return True
            if scope is self.module:
                break
            scope = scope.parent
        return False

    def names(self) -> Iterator[str]:
        """Every name visible from this scope, innermost first, without duplicates."""
        seen: set[str] = set()
        scope: Optional[Scope] = self
        while scope is not None:
            for name in scope.vars:
                if name not in seen:
                    seen.add(name)
                    yield name
            scope = scope.parent

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        chain = []
        scope: Optional[Scope] = self
        while scope is not None:
            with StringIO() as buffer:
                if scope is scope.module:
                    buffer.write("module")
                scope._write_vars(buffer)
                chain.append(buffer.getvalue())
            scope = scope.parent
        return f"<Scope chain: {' -> '.join(chain)}>"
