"""Core tree-walking evaluator for lish.

`eval` runs the whole front end (lex, parse, desugar) and then `interpret`
walks the resulting tree. Call forms go through dual dispatch: a call head
that resolves to a callable is invoked according to its calling convention,
while a head that resolves to a plain string runs an external program.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from lish import LishValue
from lish.debug_utils.pprint import format_value
from lish.desugar import desugar
from lish.errors import LishDispatchError, LishProcessError, LishRuntimeError, LishTypeError
from lish.evaluation.apply import apply
from lish.reader.expression import Expression, ExpressionKind
from lish.reader.lexer import lex
from lish.reader.parser import parse
from lish.reader.tokens import Location
from lish.shell import ShellError
from lish.types.function import Macro, is_callable
from lish.types.lazy import LazySeq
from lish.types.scope import Scope

if TYPE_CHECKING:
    from lish.context import Context

logger = logging.getLogger(__name__)

SPREAD_TYPES = (list, tuple, LazySeq)


def read(raw: str) -> Optional[Expression]:
    """Lex, parse and desugar `raw` into an evaluable tree."""
    return desugar(parse(lex(raw)))


class Evaluator:
    """Stateless between calls; all state lives in scopes and the context."""

    def __init__(self, context: Context):
        self.context = context

    def eval(self, raw: str, scope: Scope) -> LishValue:
        tree: Optional[Expression] = None
        try:
            tree = read(raw)
            if tree is None:
                return None
            return self.interpret(tree, scope)
        except RecursionError as ex:
            loc = tree.loc if tree is not None else None
            raise LishRuntimeError("maximum recursion depth exceeded", loc) from ex

    def interpret(self, ex: Expression, scope: Scope) -> LishValue:
        match ex.kind:
            case ExpressionKind.VALUE | ExpressionKind.COMMAND:
                return ex.value
            case ExpressionKind.VARIABLE:
                return scope.lookup(ex.name)
            case ExpressionKind.ARRAY:
                return [self.interpret(item, scope) for item in ex.body]
            case ExpressionKind.MAP:
                return self._interpret_map(ex, scope)
            case ExpressionKind.CALL:
                return self._interpret_call(ex, scope)

    def _interpret_map(self, ex: Expression, scope: Scope) -> dict:
        out: dict = {}
        for i in range(0, len(ex.body), 2):
            key = self.interpret(ex.body[i], scope)
            value = self.interpret(ex.body[i + 1], scope)
            try:
                out[key] = value
            except TypeError:
                ex.body[i].loc.fail(f"Map key {format_value(key)} is not hashable", LishTypeError)
        return out

    def _interpret_call(self, ex: Expression, scope: Scope) -> LishValue:
        first, body = ex.body[0], ex.body[1:]

        # Identifier lookup wins over treating the head as a literal command name.
        if first.kind is ExpressionKind.COMMAND:
            fn = scope.lookup(first.name)
            if is_callable(fn):
                return self.call(fn, body, scope, ex.loc)

        value = self.interpret(first, scope)

        if is_callable(value):
            return self.call(value, body, scope, ex.loc)
        if isinstance(value, str):
            return self.execute(value, body, scope, ex.loc)
        return ex.loc.fail("call target is neither a function nor a command", LishDispatchError)

    def call(self, fn: LishValue, body: list[Expression], scope: Scope, loc: Location) -> LishValue:
        """Invoke `fn` with the unevaluated argument expressions `body`."""
        if isinstance(fn, Macro):
            return fn.impl(body, scope, self, loc)
        args = [self.interpret(arg, scope) for arg in body]
        return apply(fn, args, loc)

    def execute(self, command: str, body: list[Expression], scope: Scope, loc: Location) -> str:
        """Run `command` as an external program; the result is its standard output."""
        args: list[str] = []
        for arg in body:
            if arg.raw is not None:
                args.append(arg.raw)
                continue
            value = self.interpret(arg, scope)
            if isinstance(value, SPREAD_TYPES):
                args.extend(format_value(item) for item in value)
            else:
                args.append(format_value(value))
        logger.debug("%s resolved to an external command at %s", command, loc)
        try:
            return self.context.execute(command, args)
        except ShellError as ex:
            raise LishProcessError(str(ex), loc) from ex
