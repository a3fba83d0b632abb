"""Interactive read-eval-print loop.

Each non-null, non-empty result is kept in the module scope as `result<N>`
so later lines can refer to it as `$result0`, `$result1` and so on. The REPL
also installs a few session commands into the module scope:

- exit          leave the loop
- clearResults  forget every `result<N>` binding
- clearDefs     start over with an empty module scope
- listDefs      print the names defined in the module scope
"""

from __future__ import annotations

import logging
import readline
from pathlib import Path
from typing import Callable, Optional

from lish import LishValue
from lish.assertions import assert_length_exact
from lish.debug_utils.pprint import DEFAULT_OPTIONS, pformat
from lish.errors import LishError
from lish.interpreter import Interpreter
from lish.reader.tokens import Location
from lish.types.function import Lib

logger = logging.getLogger(__name__)

RESULT_PREFIX = "result"
SESSION_COMMANDS = ("exit", "clearResults", "clearDefs", "listDefs")


class Repl:
    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        options: dict = DEFAULT_OPTIONS,
        history_file: Optional[Path] = None,
    ):
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.input_fn = input_fn
        self.output = output
        self.options = options
        self.history_file = history_file
        self.result_index = 0
        self.running = False
        self._install_commands()

    # ----------------- session commands -----------------
    def _install_commands(self) -> None:
        commands = {
            "exit": self._exit,
            "clearResults": self._clear_results,
            "clearDefs": self._clear_defs,
            "listDefs": self._list_defs,
        }
        for name, impl in commands.items():
            self.interpreter.define(name, Lib(name, impl))

    def _exit(self, args: list[LishValue], loc: Location) -> None:
        self.running = False

    def _clear_results(self, args: list[LishValue], loc: Location) -> None:
        assert_length_exact("clearResults", 0, loc, args)
        for i in range(self.result_index):
            self.interpreter.module.vars.pop(f"{RESULT_PREFIX}{i}", None)
        self.result_index = 0

    def _clear_defs(self, args: list[LishValue], loc: Location) -> None:
        assert_length_exact("clearDefs", 0, loc, args)
        self.interpreter.clear()
        self.result_index = 0
        self._install_commands()

    def _list_defs(self, args: list[LishValue], loc: Location) -> None:
        assert_length_exact("listDefs", 0, loc, args)
        for name in self.definitions():
            self.output(name)

    def definitions(self) -> list[str]:
        """User definitions in the module scope, without results or session commands."""
        return [
            name for name in self.interpreter.module.vars
            if not name.startswith(RESULT_PREFIX) and name not in SESSION_COMMANDS
        ]

    # ----------------- loop -----------------
    @property
    def prompt(self) -> str:
        return f"{self.interpreter.context.cwd}$ "

    def handle(self, line: str) -> Optional[str]:
        """Evaluate one line and return what the REPL prints for it, if anything."""
        try:
            result = self.interpreter.eval(line)
        except LishError as ex:
            logger.debug("evaluation failed: %r", line, exc_info=True)
            return str(ex)
        if result is None or result == "":
            return None
        name = f"{RESULT_PREFIX}{self.result_index}"
        self.result_index += 1
        self.interpreter.define(name, result)
        return f"${name}: {pformat(result, self.options)}"

    def run(self) -> None:
        self._load_history()
        self.running = True
        try:
            while self.running:
                try:
                    line = self.input_fn(self.prompt)
                except EOFError:
                    break
                except KeyboardInterrupt:
                    self.output("")
                    continue
                if not line.strip():
                    continue
                printed = self.handle(line)
                if printed is not None:
                    self.output(printed)
        finally:
            self.running = False
            self._save_history()

    def _load_history(self) -> None:
        if self.history_file is None:
            return
        try:
            readline.read_history_file(self.history_file)
        except OSError:
            logger.debug("no history at %s", self.history_file)

    def _save_history(self) -> None:
        if self.history_file is None:
            return
        try:
            readline.write_history_file(self.history_file)
        except OSError as ex:
            logger.warning("could not save history to %s: %s", self.history_file, ex)
