"""lish language server and network REPL.

- `server`: pygls Language Server with diagnostics, hover, completion and
  document symbols.
- `indexer`: static scan of `def`/`defn` forms, no evaluation.
- `repl_server`: TCP JSON-per-line REPL over one persistent session.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
