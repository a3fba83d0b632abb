"""Member access rewriting.

    (.field $obj)          =>  (get $obj "field")
    (.a.b $obj "value")    =>  (set $obj "a" "b" "value")
    Array.map              =>  (get $Array "map")
    $obj.name              =>  (get $obj "name")

Commands that look like program names (`./run.sh`, `python3.11`) are left
untouched.
"""

from __future__ import annotations

from lish.assertions import assert_length_range, assert_not_empty_string
from lish.reader.expression import Expression, ExpressionKind, Visitor
from lish.reader.tokens import Location


GET = "get"
SET = "set"


def _is_path(name: str) -> bool:
    return "/" in name or "\\" in name


def _is_program(name: str) -> bool:
    """`./run.sh` or `python3.11` name a program, not a member path."""
    _, *parts = name.split(".")
    return _is_path(name) or any(part[:1].isdigit() for part in parts)


def _keys(parts: list[str], loc: Location) -> list[Expression]:
    for part in parts:
        assert_not_empty_string(loc, part)
    return [Expression.literal(part, quoted=True, loc=loc) for part in parts]


def _member_lookup(ex: Expression) -> None:
    head, *parts = ex.name.split(".")
    assert_not_empty_string(ex.loc, head)
    keys = _keys(parts, ex.loc)
    ex.become_call([
        Expression.command(GET, ex.loc),
        Expression.variable(head, ex.loc),
        *keys,
    ])


class DotAccessRewriter(Visitor):
    def call(self, ex: Expression) -> None:
        first = ex.head()
        if first is None or first.kind is not ExpressionKind.COMMAND:
            return
        name = first.name
        if not name.startswith(".") or _is_path(name):
            return

        assert_length_range(". access", 2, 3, ex.loc, ex.body)
        keys = _keys(name[1:].split("."), first.loc)
        obj = ex.body[1]
        if len(ex.body) == 2:
            ex.body = [Expression.command(GET, ex.loc), obj, *keys]
        else:
            ex.body = [Expression.command(SET, ex.loc), obj, *keys, ex.body[2]]

    def command(self, ex: Expression) -> None:
        if "." in ex.name and not _is_program(ex.name):
            _member_lookup(ex)

    def variable(self, ex: Expression) -> None:
        if "." in ex.name:
            _member_lookup(ex)
