"""Expression tree for lish.

Nodes are mutable on purpose: the desugaring passes reclassify a node's kind and
replace its body in place, so untouched subtrees keep their identity.
"""

from __future__ import annotations

from enum import Enum
from io import StringIO
from typing import Optional

from lish import LishValue
from lish.reader.tokens import Location, NOWHERE


class ExpressionKind(Enum):
    CALL = "call"
    ARRAY = "array"
    MAP = "map"
    VALUE = "value"
    COMMAND = "command"
    VARIABLE = "variable"


CONTAINER_KINDS = (ExpressionKind.CALL, ExpressionKind.ARRAY, ExpressionKind.MAP)


class Expression:
    """A single node: a container (call/array/map) or a leaf (value/command/variable)."""

    __slots__ = ("kind", "body", "value", "quoted", "loc", "raw")

    def __init__(
        self,
        kind: ExpressionKind,
        loc: Location = NOWHERE,
        body: Optional[list[Expression]] = None,
        value: LishValue = None,
        quoted: bool = False,
        raw: Optional[str] = None,
    ):
        self.kind: ExpressionKind = kind
        self.loc: Location = loc
        self.body: list[Expression] = body if body is not None else []
        # Leaf payload: literal value, command text or variable name.
        self.value: LishValue = value
        self.quoted: bool = quoted
        # Source spelling of a number literal; external commands receive it verbatim.
        self.raw: Optional[str] = raw

    # --- Constructors ---
    @classmethod
    def call(cls, body: list[Expression], loc: Location = NOWHERE) -> Expression:
        return cls(ExpressionKind.CALL, loc, body=body)

    @classmethod
    def array(cls, body: list[Expression], loc: Location = NOWHERE) -> Expression:
        return cls(ExpressionKind.ARRAY, loc, body=body)

    @classmethod
    def map(cls, body: list[Expression], loc: Location = NOWHERE) -> Expression:
        return cls(ExpressionKind.MAP, loc, body=body)

    @classmethod
    def literal(
        cls,
        value: LishValue,
        quoted: bool = False,
        loc: Location = NOWHERE,
        raw: Optional[str] = None,
    ) -> Expression:
        return cls(ExpressionKind.VALUE, loc, value=value, quoted=quoted, raw=raw)

    @classmethod
    def command(cls, name: str, loc: Location = NOWHERE) -> Expression:
        return cls(ExpressionKind.COMMAND, loc, value=name)

    @classmethod
    def variable(cls, name: str, loc: Location = NOWHERE) -> Expression:
        return cls(ExpressionKind.VARIABLE, loc, value=name)

    # --- Predicates ---
    @property
    def name(self) -> str:
        """Text of a command or variable leaf."""
        return self.value

    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    def is_bare_word(self) -> bool:
        """An unquoted string leaf, or one already classified as a command."""
        if self.kind is ExpressionKind.COMMAND:
            return True
        return (
            self.kind is ExpressionKind.VALUE
            and not self.quoted
            and isinstance(self.value, str)
        )

    def head(self) -> Optional[Expression]:
        return self.body[0] if self.kind is ExpressionKind.CALL and self.body else None

    # --- In-place rewrites ---
    def become_call(self, body: list[Expression]) -> None:
        self.kind = ExpressionKind.CALL
        self.body = body
        self.value = None
        self.quoted = False
        self.raw = None

    def become_command(self) -> None:
        self.kind = ExpressionKind.COMMAND
        self.quoted = False

    # --- Structural equality (locations are ignored) ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        if self.is_container():
            return self.body == other.body
        return (
            type(self.value) is type(other.value)
            and self.value == other.value
            and self.quoted == other.quoted
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Expression {self.kind.value} {self}>"

    def _write(self, buffer: StringIO) -> None:
        from lish.debug_utils.pprint import format_value

        if self.is_container():
            open_, close = {
                ExpressionKind.CALL: ("(", ")"),
                ExpressionKind.ARRAY: ("[", "]"),
                ExpressionKind.MAP: ("{", "}"),
            }[self.kind]
            buffer.write(open_)
            for i, child in enumerate(self.body):
                if i:
                    buffer.write(" ")
                child._write(buffer)
            buffer.write(close)
        elif self.kind is ExpressionKind.VARIABLE:
            buffer.write(f"${self.value}")
        elif self.kind is ExpressionKind.COMMAND:
            buffer.write(self.value)
        elif self.raw is not None:
            buffer.write(self.raw)
        else:
            buffer.write(format_value(self.value, quote_strings=self.quoted))


class Visitor:
    """Pre-order visitor. Subclasses implement any of the per-kind hooks."""

    def call(self, ex: Expression) -> None: ...
    def array(self, ex: Expression) -> None: ...
    def map(self, ex: Expression) -> None: ...
    def value(self, ex: Expression) -> None: ...
    def command(self, ex: Expression) -> None: ...
    def variable(self, ex: Expression) -> None: ...


def walk(visitor: Visitor, ex: Expression) -> None:
    """Visit `ex` then its children. A hook may rewrite `ex` in place; the walk
    then descends into whatever body the node has after the rewrite."""
    getattr(visitor, ex.kind.value)(ex)
    if ex.is_container():
        for child in list(ex.body):
            walk(visitor, child)
