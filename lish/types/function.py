"""Callable values and their calling conventions.

Every callable the evaluator creates is one of a closed set of wrappers, each
tagged with a FunctionKind:

- Macro: receives unevaluated argument expressions, the calling scope, the
  evaluator and the call location. Used for special forms.
- Lib:   receives a list of evaluated arguments and the call location.
- User:  a closure built by `fn`, evaluated in a child of its defining scope.

Plain Python callables are interop functions. When one is pulled out of a map
by member lookup it is wrapped in a BoundMethod so the map is passed as the
receiver.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from lish import LishValue

if TYPE_CHECKING:
    from lish.evaluation.evaluator import Evaluator
    from lish.reader.expression import Expression
    from lish.reader.tokens import Location
    from lish.types.scope import Scope


class FunctionKind(Enum):
    MACRO = "macro"
    LIB = "lib"
    USER = "user"


MacroImpl = Callable[["list[Expression]", "Scope", "Evaluator", "Location"], LishValue]
LibImpl = Callable[[list[LishValue], "Location"], LishValue]


class Macro:
    kind = FunctionKind.MACRO
    __slots__ = ("name", "impl")

    def __init__(self, name: str, impl: MacroImpl):
        self.name = name
        self.impl = impl

    def __repr__(self) -> str:
        return f"<macro {self.name}>"


class Lib:
    kind = FunctionKind.LIB
    __slots__ = ("name", "impl")

    def __init__(self, name: str, impl: LibImpl):
        self.name = name
        self.impl = impl

    def __repr__(self) -> str:
        return f"<lib {self.name}>"


class UserFunction:
    """A first-class closure with parameter names, body and defining scope."""

    kind = FunctionKind.USER
    __slots__ = ("params", "body", "scope", "evaluator", "name")

    def __init__(
        self,
        params: list[str],
        body: Expression,
        scope: Scope,
        evaluator: Evaluator,
        name: Optional[str] = None,
    ):
        self.params: list[str] = params
        self.body: Expression = body
        # Lexical scope at the `fn` site, never the caller's.
        self.scope: Scope = scope
        self.evaluator: Evaluator = evaluator
        self.name: Optional[str] = name

    def __repr__(self) -> str:
        params = " ".join(f"${p}" for p in self.params)
        label = f"fn {self.name}" if self.name else "fn"
        return f"<{label} [{params}]>"


class BoundMethod:
    """An interop function paired with the container it was retrieved from."""

    __slots__ = ("receiver", "function")

    def __init__(self, receiver: LishValue, function: Callable[..., LishValue]):
        self.receiver = receiver
        self.function = function

    def __repr__(self) -> str:
        name = getattr(self.function, "__name__", "function")
        return f"<bound {name}>"


LISH_CALLABLES = (Macro, Lib, UserFunction, BoundMethod)


def function_kind(value: LishValue) -> Optional[FunctionKind]:
    """Calling convention tag of `value`, or None for interop and non-callables."""
    if isinstance(value, (Macro, Lib, UserFunction)):
        return value.kind
    return None


def is_callable(value: LishValue) -> bool:
    return isinstance(value, LISH_CALLABLES) or callable(value)


def is_interop(value: LishValue) -> bool:
    """Untagged Python callable."""
    return callable(value) and not isinstance(value, LISH_CALLABLES)
