from __future__ import annotations

from lish.reader.expression import Expression, ExpressionKind, Visitor

DO = "do"


def is_do(ex: Expression) -> bool:
    first = ex.head()
    return first is not None and first.kind is ExpressionKind.COMMAND and first.value == DO


def _spliced(body: list[Expression]) -> list[Expression]:
    out: list[Expression] = []
    for child in body:
        if is_do(child):
            out.extend(_spliced(child.body[1:]))
        else:
            out.append(child)
    return out


class SequenceFlattener(Visitor):
    """(do (do a b) c) => (do a b c), so long `;` chains stay one level deep."""

    def call(self, ex: Expression) -> None:
        if is_do(ex) and any(is_do(child) for child in ex.body[1:]):
            ex.body = [ex.body[0], *_spliced(ex.body[1:])]
