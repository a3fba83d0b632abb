from __future__ import annotations

"""
Static indexer for lish documents.

The buffer is never evaluated. We run the real lexer over it and pick out
`(def $name ...)` and `(defn $name [$params] ...)` forms, which is enough to
drive document symbols, hover and completion. An unterminated string only
hides what comes after it: everything lexed before the error is still indexed.

Positions stored here are 0-based, as the language server protocol wants them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lish.builtin.array_builtin import ARRAY
from lish.builtin.env_builtin import CORE
from lish.builtin.io_builtin import FILE, IO
from lish.builtin.string_builtin import PARSE, STRING
from lish.errors import LishError, LishSyntaxError
from lish.evaluation.evaluator import read
from lish.evaluation.special_forms import SPECIAL_FORMS
from lish.reader.lexer import lex
from lish.reader.tokens import Location, Token, TokenKind

DEFINING_FORMS = {"def": "var", "defn": "function"}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: List[str] = field(default_factory=list)

    @property
    def signature(self) -> str:
        if self.kind != "function":
            return f"${self.name}"
        return "(" + " ".join([self.name, *(f"${p}" for p in self.params)]) + ")"


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    error: Optional[LishError] = None


def _position(loc: Optional[Location]) -> tuple[int, int]:
    """0-based (line, col) for a 1-based Location; synthesized nodes map to the start."""
    if loc is None or loc.line == 0:
        return 0, 0
    return loc.line - 1, loc.col - 1


def _offset(text: str, loc: Location) -> int:
    line, col = _position(loc)
    start = 0
    for _ in range(line):
        nl = text.find("\n", start)
        if nl == -1:
            return len(text)
        start = nl + 1
    return start + col


def tolerant_lex(text: str) -> List[Token]:
    """Tokens of `text`, or of its prefix up to the first lexing error."""
    try:
        return lex(text)
    except LishSyntaxError as ex:
        if ex.loc is None:
            return []
        return lex(text[: _offset(text, ex.loc)])


def _is_word(token: Token, value: str) -> bool:
    return token.kind is TokenKind.STRING and not token.quoted and token.value == value


def _params(tokens: List[Token], i: int) -> List[str]:
    if i >= len(tokens) or not tokens[i].is_symbol("["):
        return []
    params = []
    for token in tokens[i + 1:]:
        if token.kind is not TokenKind.VARIABLE:
            break
        params.append(token.value)
    return params


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = tolerant_lex(text)
    for i, token in enumerate(tokens[:-2]):
        if not token.is_symbol("("):
            continue
        head, name = tokens[i + 1], tokens[i + 2]
        kind = next((k for form, k in DEFINING_FORMS.items() if _is_word(head, form)), None)
        if kind is None or name.kind is not TokenKind.VARIABLE:
            continue
        line, col = _position(name.loc)
        params = _params(tokens, i + 3) if kind == "function" else []
        idx.symbols[name.value] = SymbolDef(name.value, kind, line, col, params)

    try:
        read(text)
    except LishError as ex:
        idx.error = ex
    return idx


def _summary(fn) -> str:
    doc = (getattr(fn, "__doc__", None) or "").strip()
    return doc.splitlines()[0] if doc else ""


def library_docs() -> Dict[str, str]:
    """Every name the standard session installs, mapped to a one-line summary."""
    docs: Dict[str, str] = {}
    for name, form in SPECIAL_FORMS.items():
        docs[name] = _summary(form) or f"special form {name}"
    for name, fn in CORE.items():
        docs[name] = _summary(fn) or f"builtin {name}"
    docs["cd"] = "(cd path) changes the session working directory"
    docs["cwd"] = "(cwd) the session working directory"
    namespaces = {"Array": ARRAY, "String": STRING, "Parse": PARSE, "IO": IO, "File": FILE}
    for prefix, members in namespaces.items():
        for name, fn in members.items():
            docs[f"{prefix}.{name}"] = _summary(fn) or f"{prefix}.{name}"
    return docs


LIBRARY_DOCS: Dict[str, str] = library_docs()
