"""Desugaring passes applied to the whole tree before evaluation.

Each pass is a pre-order Visitor that rewrites matching nodes in place. The
order matters: commands are classified first so the later passes can rely on
head positions being marked.
"""

from __future__ import annotations

from typing import Optional

from lish.desugar.command import CommandClassifier
from lish.desugar.dot_access import DotAccessRewriter
from lish.desugar.flatten import SequenceFlattener
from lish.desugar.pipe import PipeRewriter
from lish.reader.expression import Expression, Visitor, walk

PASSES: tuple[type[Visitor], ...] = (
    CommandClassifier,
    PipeRewriter,
    DotAccessRewriter,
    SequenceFlattener,
)


def desugar(ex: Optional[Expression]) -> Optional[Expression]:
    """Run every pass over `ex`, mutating it. Returns the same node."""
    if ex is None:
        return None
    for visitor in PASSES:
        walk(visitor(), ex)
    return ex
