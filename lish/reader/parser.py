"""
  lish Parser

Recursive descent over the token list produced by lish.reader.lexer:

    ( ... )  -> call form
    [ ... ]  -> array literal
    { ... }  -> map literal (flat key/value pairs, even length)
    tokens   -> value / variable leaves

Each line of a program is one statement. A statement holding more than one
expression, or a single bare word, is wrapped into one call form so that
`ls -la` and `ls` both run as commands. Several statements are joined into
one `(do ...)` form, so a `|` on one line never reaches into the previous one.
"""

from __future__ import annotations

from typing import Optional, Sequence

from lish.errors import LishSyntaxError
from lish.reader.expression import Expression
from lish.reader.tokens import Location, NOWHERE, Token, TokenKind


DO = "do"


def statement(body: list[Expression]) -> Expression:
    """One line of a program as a single expression."""
    if len(body) == 1 and not body[0].is_bare_word():
        return body[0]
    return Expression.call(body, body[0].loc)


class TokenStream:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens: list[Token] = list(tokens)
        self.index = 0

    def peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def advance(self) -> Optional[Token]:
        tok = self.peek()
        if tok is not None:
            self.index += 1
        return tok

    def end(self) -> Location:
        """Location used for errors that hit end of input."""
        return self.tokens[-1].loc if self.tokens else NOWHERE

    def parse_all(self) -> Optional[Expression]:
        statements: list[list[Expression]] = [[]]
        while (tok := self.peek()) is not None:
            if tok.kind is TokenKind.NEWLINE:
                self.advance()
                statements.append([])
                continue
            statements[-1].append(self.parse_expr())

        forms = [statement(body) for body in statements if body]
        if not forms:
            return None
        if len(forms) == 1:
            return forms[0]
        return Expression.call([Expression.command(DO), *forms], forms[0].loc)

    def parse_expr(self) -> Expression:
        tok = self.advance()
        if tok is None:
            self.end().fail("Unterminated expression", LishSyntaxError)

        if tok.kind is TokenKind.SYMBOL:
            if tok.value == "(":
                body = self._parse_until(")")
                if not body:
                    tok.loc.fail("Empty call form", LishSyntaxError)
                return Expression.call(body, tok.loc)
            if tok.value == "[":
                return Expression.array(self._parse_until("]"), tok.loc)
            if tok.value == "{":
                body = self._parse_until("}")
                if len(body) % 2 == 1:
                    tok.loc.fail(
                        "Map literal must have an even number of values to form key -> value pairs",
                        LishSyntaxError,
                    )
                return Expression.map(body, tok.loc)
            tok.loc.fail(f"Unexpected '{tok.value}'", LishSyntaxError)

        if tok.kind is TokenKind.STRING:
            return Expression.literal(tok.value, quoted=tok.quoted, loc=tok.loc)
        if tok.kind in (TokenKind.NUMBER, TokenKind.LITERAL):
            return Expression.literal(tok.value, loc=tok.loc, raw=tok.raw)
        if tok.kind is TokenKind.VARIABLE:
            return Expression.variable(tok.value, tok.loc)

        tok.loc.fail(f"Unknown token type {tok.kind.value}", LishSyntaxError)

    def _parse_until(self, closer: str) -> list[Expression]:
        body: list[Expression] = []
        while True:
            tok = self.peek()
            if tok is None:
                self.end().fail(f"Unterminated form, expected '{closer}'", LishSyntaxError)
            if tok.is_symbol(closer):
                self.advance()
                return body
            body.append(self.parse_expr())


def parse(tokens: Sequence[Token]) -> Optional[Expression]:
    """Parse a whole program. Returns None for an empty program."""
    return TokenStream(tokens).parse_all()
