"""Application engine for lish.

Centralizes how an already-evaluated argument list is applied to a callable,
for every calling convention:
- Lib: the implementation receives the argument list and the call location.
- User: arguments are bound positionally in a fresh child of the closure's
  defining scope and the body is evaluated there.
- BoundMethod / interop: plain Python call, receiver first for bound methods.
- Macro: rejected, macros only ever see unevaluated expressions.

Library helpers such as Array.map go through `apply` too, so user closures
behave the same whether the evaluator or Python code invokes them.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from lish import LishValue
from lish.assertions import assert_length_exact
from lish.errors import LishRuntimeError, LishTypeError
from lish.reader.tokens import Location
from lish.types.function import BoundMethod, Lib, Macro, UserFunction

HOST_ERRORS = (TypeError, ValueError, ArithmeticError, LookupError, AttributeError, OSError)


@contextmanager
def host_errors(loc: Location) -> Iterator[None]:
    """Re-raise Python exceptions from library or interop code as located lish errors."""
    try:
        yield
    except HOST_ERRORS as ex:
        raise LishRuntimeError(str(ex) or type(ex).__name__, loc) from ex


def apply_user(fn: UserFunction, args: list[LishValue], loc: Location) -> LishValue:
    """Bind `args` to `fn`'s parameters and evaluate its body."""
    assert_length_exact(fn.name or "fn", len(fn.params), loc, args)
    inner = fn.scope.child()
    for param, arg in zip(fn.params, args):
        inner.define(param, arg)
    return fn.evaluator.interpret(fn.body, inner)


def apply(fn: LishValue, args: list[LishValue], loc: Location) -> LishValue:
    """Apply `fn` to evaluated `args` according to its calling convention."""
    match fn:
        case Lib():
            with host_errors(loc):
                return fn.impl(args, loc)
        case UserFunction():
            return apply_user(fn, args, loc)
        case BoundMethod():
            with host_errors(loc):
                return fn.function(fn.receiver, *args)
        case Macro():
            loc.fail(f"Macro {fn.name} cannot be applied to evaluated arguments", LishTypeError)
        case _ if callable(fn):
            with host_errors(loc):
                return fn(*args)
        case _:
            loc.fail("Expected function", LishTypeError)
