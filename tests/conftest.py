import pytest

from lish.context import Context
from lish.interpreter import Interpreter
from lish.shell import ShellError


class FakeShell:
    """Records every external command instead of spawning it.

    `outputs` maps a command name to its canned stdout; `failures` maps a
    command name to the exit status it should fail with.
    """

    def __init__(self):
        self.calls: list[tuple[str, list[str], str]] = []
        self.outputs: dict[str, str] = {}
        self.failures: dict[str, int] = {}

    def execute(self, command, args, cwd, on_stderr=None):
        self.calls.append((command, list(args), cwd))
        if command in self.failures:
            status = self.failures[command]
            raise ShellError(f"{command} exited with status {status}", command, returncode=status)
        return self.outputs.get(command, "")


@pytest.fixture
def shell():
    return FakeShell()


@pytest.fixture
def context(shell, tmp_path):
    return Context(shell=shell, cwd=str(tmp_path))


@pytest.fixture
def interp(context):
    return Interpreter(context)
