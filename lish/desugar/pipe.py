"""Pipe operator rewriting.

    a b c | f x    =>  (f (a b c) x)
    a b c |> f x   =>  (f x (a b c))
    a ; b          =>  (do (a) (b))

Only the direct children of a call form are scanned. The form is split at its
rightmost operator of any of the three kinds. The left-hand group becomes a
child node that the walk visits afterwards, so operators to its left are
rewritten in turn: `a | f | g` reads as `(g (f (a)))` and `a ; b | f` as
`(f (do (a) (b)))`. Separate lines are split by the parser, not here.
"""

from __future__ import annotations

from typing import Optional

from lish.errors import LishSyntaxError
from lish.desugar.command import classify_head
from lish.reader.expression import Expression, Visitor
from lish.reader.tokens import Location


PIPE = "|"
PIPE_LAST = "|>"
SEQUENCE = ";"
DO = "do"
OPERATORS = (PIPE, PIPE_LAST, SEQUENCE)


def find_operator(body: list[Expression]) -> int:
    """Index of the rightmost operator among the direct children, or -1."""
    for i in range(len(body) - 1, -1, -1):
        ex = body[i]
        if ex.is_bare_word() and ex.value in OPERATORS:
            return i
    return -1


def group(items: list[Expression], loc: Location) -> Expression:
    """One side of an operator as a single expression."""
    if len(items) == 1 and not items[0].is_bare_word():
        return items[0]
    node = Expression.call(items, items[0].loc if items else loc)
    classify_head(node)
    return node


def rewrite(ex: Expression) -> Optional[str]:
    """Rewrite one operator in call form `ex`. Returns the operator, if any."""
    index = find_operator(ex.body)
    if index == -1:
        return None

    operator = ex.body[index]
    loc = operator.loc
    left = ex.body[:index]
    right = ex.body[index + 1:]

    if not left:
        loc.fail(f"Pipe operator '{operator.value}' requires a left-hand side", LishSyntaxError)
    if not right:
        loc.fail(f"Pipe operator '{operator.value}' requires a right-hand side", LishSyntaxError)

    if operator.value == SEQUENCE:
        ex.body = [Expression.command(DO, loc), group(left, loc), group(right, loc)]
    elif operator.value == PIPE:
        fn, *rest = right
        ex.body = [fn, group(left, loc), *rest]
    else:
        fn, *rest = right
        ex.body = [fn, *rest, group(left, loc)]

    classify_head(ex)
    return operator.value


class PipeRewriter(Visitor):
    def call(self, ex: Expression) -> None:
        rewrite(ex)
