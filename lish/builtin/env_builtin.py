"""Built-in functions for the lish core scope.

This module defines arithmetic, comparison, member access (`get`/`set`),
predicates, sequencing and working-directory helpers. Every function takes the
evaluated argument list and the call location, and is installed as a Lib.
"""
from __future__ import annotations

import inspect
from collections.abc import Mapping, MutableMapping
from functools import partial, reduce
from typing import Any

from lish import LishValue
from lish.assertions import (
    assert_iterable,
    assert_length_exact,
    assert_length_min,
    assert_length_range,
    assert_number,
    assert_string,
)
from lish.builtin.array_builtin import range_, to_array
from lish.context import Context
from lish.debug_utils.pprint import format_value
from lish.errors import LishTypeError
from lish.evaluation.apply import apply
from lish.reader.tokens import Location
from lish.types.function import BoundMethod, Lib, function_kind, is_interop
from lish.types.lazy import LazySeq
from lish.types.scope import Scope


# -------------------------------
# Arithmetic
# -------------------------------
def _fold(name: str, op, args: list[LishValue], loc: Location) -> LishValue:
    assert_length_min(name, 1, loc, args)
    return reduce(op, args)


def add(args: list[LishValue], loc: Location) -> LishValue:
    """Sum of all arguments; strings concatenate."""
    return _fold("+", lambda a, b: a + b, args, loc)


def sub(args: list[LishValue], loc: Location) -> LishValue:
    """Subtract subsequent arguments from the first; unary negation for one arg."""
    if len(args) == 1:
        assert_number(loc, args[0])
        return -args[0]
    return _fold("-", lambda a, b: a - b, args, loc)


def mul(args: list[LishValue], loc: Location) -> LishValue:
    return _fold("*", lambda a, b: a * b, args, loc)


def div(args: list[LishValue], loc: Location) -> LishValue:
    """Divide left to right. Division by zero is a located error."""
    return _fold("/", lambda a, b: a / b, args, loc)


def mod(args: list[LishValue], loc: Location) -> LishValue:
    return _fold("%", lambda a, b: a % b, args, loc)


def power(args: list[LishValue], loc: Location) -> LishValue:
    return _fold("^", lambda a, b: a ** b, args, loc)


# -------------------------------
# Comparison and logic
# -------------------------------
def equals(args: list[LishValue], loc: Location) -> bool:
    assert_length_exact("==", 2, loc, args)
    left, right = args
    return is_equal(left, right)


def not_equals(args: list[LishValue], loc: Location) -> bool:
    assert_length_exact("!=", 2, loc, args)
    left, right = args
    return not is_equal(left, right)


def is_equal(a, b) -> bool:
    """Equality that keeps booleans distinct from the numbers 0 and 1."""
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def _chain(name: str, op, args: list[LishValue], loc: Location) -> bool:
    assert_length_min(name, 2, loc, args)
    return all(op(a, b) for a, b in zip(args, args[1:]))


def lt(args: list[LishValue], loc: Location) -> bool:
    """Chainable less-than: true if a0 < a1 < a2 ... holds for all pairs."""
    return _chain("<", lambda a, b: a < b, args, loc)


def lte(args: list[LishValue], loc: Location) -> bool:
    return _chain("<=", lambda a, b: a <= b, args, loc)


def gt(args: list[LishValue], loc: Location) -> bool:
    return _chain(">", lambda a, b: a > b, args, loc)


def gte(args: list[LishValue], loc: Location) -> bool:
    return _chain(">=", lambda a, b: a >= b, args, loc)


def logical_not(args: list[LishValue], loc: Location) -> bool:
    assert_length_exact("not", 1, loc, args)
    return not args[0]


def logical_xor(args: list[LishValue], loc: Location) -> bool:
    assert_length_exact("xor", 2, loc, args)
    left, right = args
    return bool(left) != bool(right)


def is_nil(args: list[LishValue], loc: Location) -> bool:
    assert_length_exact("nil?", 1, loc, args)
    return args[0] is None


def type_of(args: list[LishValue], loc: Location) -> str:
    assert_length_exact("typeOf", 1, loc, args)
    value = args[0]
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, LazySeq):
        return "sequence"
    kind = function_kind(value)
    if kind is not None:
        return kind.value
    if callable(value) or isinstance(value, BoundMethod):
        return "function"
    return "object"


# -------------------------------
# Member access
# -------------------------------
def _index(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.lstrip("-").isdigit():
        return int(key)
    return None


def member(container: LishValue, key: LishValue) -> LishValue:
    """One step of a member path. Anything missing reads as null."""
    if container is None:
        return None
    if isinstance(container, Mapping):
        return container.get(key)
    if isinstance(container, (list, tuple, str)):
        index = _index(key)
        if index is None or not -len(container) <= index < len(container):
            return None
        return container[index]
    if isinstance(key, str) and not key.startswith("_"):
        return getattr(container, key, None)
    return None


def get(args: list[LishValue], loc: Location) -> LishValue:
    """(get $obj "a" "b") reads obj.a.b.

    A plain Python function found inside a map comes back bound to that map.
    """
    assert_length_min("get", 2, loc, args)
    current, *keys = args
    parent = None
    for key in keys:
        parent, current = current, member(current, key)
    if is_interop(current) and inspect.isfunction(current) and isinstance(parent, Mapping):
        return BoundMethod(parent, current)
    return current


def _assign(target: LishValue, key: LishValue, value: LishValue, loc: Location) -> None:
    if isinstance(target, MutableMapping):
        target[key] = value
    elif isinstance(target, list):
        index = _index(key)
        if index is None:
            loc.fail(f"Array index must be a number: found {format_value(key)}", LishTypeError)
        if index == len(target):
            target.append(value)
        else:
            target[index] = value
    elif target is not None and isinstance(key, str) and not key.startswith("_"):
        setattr(target, key, value)
    else:
        loc.fail(f"Cannot set {format_value(key)} on {format_value(target)}", LishTypeError)


def set_(args: list[LishValue], loc: Location) -> LishValue:
    """(set $obj "a" "b" value) writes obj.a.b = value and returns obj."""
    assert_length_min("set", 3, loc, args)
    root, *keys, value = args
    target = root
    for key in keys[:-1]:
        target = member(target, key)
    _assign(target, keys[-1], value, loc)
    return root


# -------------------------------
# Sequencing and output
# -------------------------------
def do(args: list[LishValue], loc: Location) -> LishValue:
    """Arguments are already evaluated in order; the last one is the result."""
    return args[-1] if args else None


def echo(args: list[LishValue], loc: Location) -> None:
    print(" ".join(format_value(a) for a in args))
    return None


# -------------------------------
# Working directory
# -------------------------------
def cd(context: Context, args: list[LishValue], loc: Location) -> str:
    assert_length_exact("cd", 1, loc, args)
    path = args[0]
    assert_string(loc, path)
    return context.change_directory(path)


def cwd(context: Context, args: list[LishValue], loc: Location) -> str:
    assert_length_exact("cwd", 0, loc, args)
    return context.cwd


def apply_builtin(args: list[LishValue], loc: Location) -> LishValue:
    """(apply $f [1 2]) calls $f with the elements of the array as arguments."""
    assert_length_range("apply", 1, 2, loc, args)
    fn, *rest = args
    if rest:
        assert_iterable(loc, rest[0])
    return apply(fn, list(rest[0]) if rest else [], loc)


CORE = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "%": mod,
    "modulus": mod,
    "^": power,
    "==": equals,
    "!=": not_equals,
    "<": lt,
    "<=": lte,
    ">": gt,
    ">=": gte,
    "not": logical_not,
    "xor": logical_xor,
    "nil?": is_nil,
    "typeOf": type_of,
    "get": get,
    "set": set_,
    "do": do,
    "echo": echo,
    "apply": apply_builtin,
    "range": range_,
    "toArray": to_array,
}


def register(scope: Scope, context: Context) -> None:
    """Register all core functions into the given scope."""
    scope.update({name: Lib(name, fn) for name, fn in CORE.items()})
    scope.define("cd", Lib("cd", partial(cd, context)))
    scope.define("cwd", Lib("cwd", partial(cwd, context)))
