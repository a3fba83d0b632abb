from __future__ import annotations

"""
A pygls Language Server for lish.

Features:
- Text synchronization and document store
- Diagnostics: the first lex, parse or desugar error, at its real location
- Hover: library summaries and `def`/`defn` symbols
- Completion: library names and document symbols
- Document Symbols: from the indexer

Buffers are never evaluated.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from lish_lsp.indexer import LIBRARY_DOCS, DocumentIndex, build_index

SOURCE = "lish-ls"
WORD_BREAK = set(" \t\r\n()[]{}\"'|;")


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class LishLanguageServer(LanguageServer):
    CMD_NAME = "lish-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1")
        self.documents: Dict[str, DocumentState] = {}

    def update(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        self.publish_diagnostics(uri, diagnostics(state))
        return state


ls = LishLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    ls.update(params.text_document.uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    ls.update(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def diagnostics(state: DocumentState) -> List[Diagnostic]:
    error = state.index.error
    if error is None:
        return []
    line, col = 0, 0
    if error.loc is not None and error.loc.line > 0:
        line, col = error.loc.line - 1, error.loc.col - 1
    return [
        Diagnostic(
            range=Range(start=Position(line=line, character=col), end=Position(line=line, character=col + 1)),
            message=error.message,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
        )
    ]


# --- Hover ---
def word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines()
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAK:
        start -= 1
    while end < len(line) and line[end] not in WORD_BREAK:
        end += 1
    return line[start:end] or None


def hover_text(state: DocumentState, pos: Position) -> Optional[str]:
    word = word_at(state.text, pos)
    if not word:
        return None
    if word in LIBRARY_DOCS:
        return f"{word}: {LIBRARY_DOCS[word]}"
    sdef = state.index.symbols.get(word.lstrip("$"))
    if sdef is not None:
        return f"{sdef.signature}: {sdef.kind} defined at {sdef.line + 1}:{sdef.col + 1}"
    return None


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    contents = hover_text(state, params.position)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(state: Optional[DocumentState]) -> List[CompletionItem]:
    items = [
        CompletionItem(label=name, kind=CompletionItemKind.Function, detail=doc)
        for name, doc in LIBRARY_DOCS.items()
    ]
    if state is not None:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind, detail=sdef.signature))
    return items


@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(state))


# --- Document Symbols ---
def document_symbols(state: DocumentState) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name) + 1),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.signature,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state)


if __name__ == "__main__":
    ls.start_io()
