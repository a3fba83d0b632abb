"""A lish session: one context, one core library scope, one module scope."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from lish import LishValue
from lish.builtin import array_builtin, io_builtin, string_builtin
from lish.builtin.env_builtin import register
from lish.builtin.macro_builtin import register as register_macros
from lish.context import Context
from lish.evaluation.evaluator import Evaluator
from lish.types.scope import Scope


def core_scope(context: Context) -> Scope:
    """Root scope holding the special forms and the standard library."""
    core = Scope()
    register_macros(core)
    register(core, context)
    core.update({
        "Array": array_builtin.namespace(),
        "String": string_builtin.string_namespace(),
        "Parse": string_builtin.parse_namespace(),
        "IO": io_builtin.io_namespace(),
        "File": io_builtin.file_namespace(context),
    })
    return core


class Interpreter:
    """
    Evaluates lish source against a persistent module scope.
    Definitions made with `def` survive between calls to `eval`.
    """

    def __init__(self, context: Optional[Context] = None, prelude: Optional[str] = None):
        self.context = context if context is not None else Context()
        self.core = core_scope(self.context)
        self.module = Scope.module_scope(self.core)
        self.evaluator = Evaluator(self.context)
        if prelude:
            self.eval(prelude)

    def eval(self, code: str) -> LishValue:
        return self.evaluator.eval(code, self.module)

    def eval_file(self, path: str | Path) -> LishValue:
        return self.eval(Path(path).read_text())

    def define(self, name: str, value: LishValue) -> None:
        """Bind a host value in the module scope, e.g. a Python callable for interop."""
        self.module.define(name, value)

    def clear(self) -> None:
        """Drop every module-level definition; the library stays installed."""
        self.module = Scope.module_scope(self.core)
