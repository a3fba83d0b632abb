"""Centralized argument checks shared by the special forms and the library.

Every helper raises a located LishError subclass on mismatch so callers can
stay on the happy path.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Sequence

from lish.errors import LishArityError, LishTypeError
from lish.reader.expression import Expression, ExpressionKind
from lish.reader.tokens import Location
from lish.types.function import is_callable


def assert_length_exact(func: str, size: int, loc: Location, args: Sequence[Any]) -> None:
    if len(args) != size:
        loc.fail(f"{func} takes exactly {size} arguments: found {len(args)}", LishArityError)


def assert_length_range(func: str, low: int, high: int, loc: Location, args: Sequence[Any]) -> None:
    if len(args) < low or len(args) > high:
        loc.fail(
            f"{func} takes between {low} and {high} arguments: found {len(args)}",
            LishArityError,
        )


def assert_length_min(func: str, low: int, loc: Location, args: Sequence[Any]) -> None:
    if len(args) < low:
        loc.fail(f"{func} takes at least {low} arguments: found {len(args)}", LishArityError)


def assert_kind_variable(func: str, position: int, ex: Expression) -> None:
    if ex.kind is not ExpressionKind.VARIABLE:
        ex.loc.fail(
            f"Expected variable definition after {func} at position {position}: found {ex.kind.value}",
            LishTypeError,
        )


def assert_kind_array(func: str, position: int, ex: Expression) -> None:
    if ex.kind is not ExpressionKind.ARRAY:
        ex.loc.fail(
            f"Expected array definition after {func} at position {position}: found {ex.kind.value}",
            LishTypeError,
        )


def assert_keyword(expected: str, actual: Expression) -> None:
    if not actual.is_bare_word():
        actual.loc.fail(f"Expected keyword {expected}: found {actual.kind.value}", LishTypeError)
    if actual.value != expected:
        actual.loc.fail(f"Expected keyword {expected}: found {actual.value}", LishTypeError)


def assert_iterable(loc: Location, actual: Any) -> None:
    if not isinstance(actual, Iterable):
        loc.fail("Expected iterable", LishTypeError)


def assert_map(loc: Location, actual: Any) -> None:
    if not isinstance(actual, Mapping):
        loc.fail("Expected map", LishTypeError)


def assert_function(loc: Location, actual: Any) -> None:
    if not is_callable(actual):
        loc.fail("Expected function", LishTypeError)


def assert_number(loc: Location, actual: Any) -> None:
    # bool is an int subclass in Python, but not a number here.
    if isinstance(actual, bool) or not isinstance(actual, (int, float)):
        loc.fail("Expected number", LishTypeError)


def assert_string(loc: Location, actual: Any) -> None:
    if not isinstance(actual, str):
        loc.fail("Expected string", LishTypeError)


def assert_not_empty_string(loc: Location, actual: Any) -> None:
    if not (isinstance(actual, str) and actual):
        loc.fail("Expected non-empty string", LishTypeError)


def assert_not_empty(loc: Location, actual: Sequence[Any]) -> None:
    if len(actual) == 0:
        loc.fail("Expected non-empty array", LishTypeError)
