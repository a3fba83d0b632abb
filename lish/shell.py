"""External process execution.

The evaluator hands every call whose head resolves to a plain string to
`Shell.execute`. The call blocks until the child exits; its standard output
becomes the value of the call. Standard error never fails a call on its own,
it is passed to a logging sink instead.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Optional

logger = logging.getLogger(__name__)

StderrSink = Callable[[str], None]


class ShellError(Exception):
    """Raised when a command cannot be launched or exits with a non-zero status."""

    def __init__(self, message: str, command: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


def _default_sink(text: str) -> None:
    logger.warning("%s", text.rstrip("\n"))


class Shell:
    def execute(
        self,
        command: str,
        args: list[str],
        cwd: str,
        on_stderr: Optional[StderrSink] = None,
    ) -> str:
        sink = on_stderr or _default_sink
        logger.debug("exec %s %s (cwd=%s)", command, args, cwd)
        try:
            completed = subprocess.run(
                [command, *args],
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as ex:
            # FileNotFoundError for unknown commands, PermissionError, NotADirectoryError...
            raise ShellError(f"Failed to run {command}: {ex.strerror or ex}", command) from ex

        if completed.stderr:
            sink(completed.stderr)

        if completed.returncode != 0:
            raise ShellError(
                f"{command} exited with status {completed.returncode}",
                command,
                returncode=completed.returncode,
                stderr=completed.stderr,
            )
        return completed.stdout
