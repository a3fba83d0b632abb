"""Source locations and the flat token stream produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NoReturn

from lish import LishValue
from lish.errors import LishError


@dataclass(frozen=True, slots=True)
class Location:
    line: int
    col: int

    def fail(self, message: str, error: type[LishError] = LishError) -> NoReturn:
        raise error(message, self)

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


# Used for nodes synthesized by the desugaring passes and the REPL.
NOWHERE = Location(0, 0)


class TokenKind(Enum):
    STRING = "string"
    VARIABLE = "variable"
    NUMBER = "number"
    LITERAL = "literal"
    SYMBOL = "symbol"
    NEWLINE = "newline"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    value: LishValue
    loc: Location
    quoted: bool = False
    # Source spelling of a NUMBER token, e.g. "007" for the value 7.
    raw: str | None = None

    def is_symbol(self, value: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.value == value
