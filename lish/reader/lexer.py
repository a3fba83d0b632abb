"""
  lish Lexer

- Turns raw source text into a flat list of located Tokens.
- Unquoted words stay ambiguous: the parser and the desugaring passes decide
  later whether a word is a command, an identifier or a plain string argument.

    - "..." / '...'   -> STRING (quoted=True)
    - $name           -> VARIABLE
    - 12, -3.5, 1e3   -> NUMBER (int or float)
    - true/false/null -> LITERAL (True, False, None)
    - ( ) [ ] { }     -> SYMBOL
    - | |> ;          -> STRING (quoted=False), pipe operators
    - newline         -> NEWLINE, only outside of any bracket
    - anything else   -> STRING (quoted=False)

A newline outside of any bracket ends a statement, so scripts may hold one
command per line. A newline right after an operator continues the statement:

    ls |
      wc -l
"""

from __future__ import annotations

import re
from typing import Iterator

from lish.errors import LishSyntaxError
from lish.reader.tokens import Location, Token, TokenKind


NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
INT_RE = re.compile(r"[-+]?\d+")

OPEN_BRACKETS = "([{"
CLOSE_BRACKETS = ")]}"
OPERATORS = ("|>", "|", ";")
NEWLINE = "\n"

LITERALS = {
    "true": True,
    "false": False,
    "null": None,
}

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

# Characters that end an unquoted word.
WORD_BREAK = set(" \t\r\n\"'|;") | set(OPEN_BRACKETS) | set(CLOSE_BRACKETS)


def classify_word(word: str, loc: Location) -> Token:
    """Build the token for an unquoted word."""
    if word.startswith("$") and len(word) > 1:
        return Token(TokenKind.VARIABLE, word[1:], loc)
    if NUMBER_RE.fullmatch(word):
        if INT_RE.fullmatch(word):
            return Token(TokenKind.NUMBER, int(word), loc, raw=word)
        return Token(TokenKind.NUMBER, float(word), loc, raw=word)
    if word in LITERALS:
        return Token(TokenKind.LITERAL, LITERALS[word], loc)
    return Token(TokenKind.STRING, word, loc, quoted=False)


def _scan(source: str) -> Iterator[Token]:
    """Token generator. Newlines at depth 0 are yielded as NEWLINE tokens."""
    pos = 0
    line = 1
    col = 1
    depth = 0
    n = len(source)

    def advance(count: int = 1) -> None:
        nonlocal pos, line, col
        for _ in range(count):
            if source[pos] == "\n":
                line += 1
                col = 1
            else:
                col += 1
            pos += 1

    def read_quoted(quote: str, loc: Location) -> str:
        advance()  # opening quote
        chars: list[str] = []
        while True:
            if pos >= n:
                loc.fail("Unterminated string", LishSyntaxError)
            ch = source[pos]
            if ch == quote:
                advance()
                return "".join(chars)
            if ch == "\\" and quote == '"' and pos + 1 < n:
                nxt = source[pos + 1]
                chars.append(ESCAPES.get(nxt, "\\" + nxt))
                advance(2)
                continue
            chars.append(ch)
            advance()

    while pos < n:
        ch = source[pos]
        loc = Location(line, col)

        if ch == "\n":
            if depth == 0:
                yield Token(TokenKind.NEWLINE, NEWLINE, loc)
            advance()
            continue

        if ch.isspace():
            advance()
            continue

        if ch == "#":
            while pos < n and source[pos] != "\n":
                advance()
            continue

        if ch in OPEN_BRACKETS:
            depth += 1
            advance()
            yield Token(TokenKind.SYMBOL, ch, loc)
            continue

        if ch in CLOSE_BRACKETS:
            depth = max(depth - 1, 0)
            advance()
            yield Token(TokenKind.SYMBOL, ch, loc)
            continue

        if ch in "\"'":
            yield Token(TokenKind.STRING, read_quoted(ch, loc), loc, quoted=True)
            continue

        operator = next((op for op in OPERATORS if source.startswith(op, pos)), None)
        if operator is not None:
            advance(len(operator))
            yield Token(TokenKind.STRING, operator, loc, quoted=False)
            continue

        start = pos
        while pos < n and source[pos] not in WORD_BREAK:
            advance()
        yield classify_word(source[start:pos], loc)


def _is_operator(token: Token) -> bool:
    return token.kind is TokenKind.STRING and not token.quoted and token.value in OPERATORS


def lex(source: str) -> list[Token]:
    """Lex `source` into tokens.

    Blank lines collapse into one NEWLINE, leading and trailing newlines are
    dropped, and a newline that follows an operator is a line continuation.
    """
    tokens: list[Token] = []
    for token in _scan(source):
        if token.kind is TokenKind.NEWLINE and (
            not tokens or tokens[-1].kind is TokenKind.NEWLINE or _is_operator(tokens[-1])
        ):
            continue
        tokens.append(token)
    while tokens and tokens[-1].kind is TokenKind.NEWLINE:
        tokens.pop()
    return tokens
