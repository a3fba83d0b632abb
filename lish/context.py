"""Per-session runtime context: working directory, shell and stderr sink."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from lish.shell import Shell, StderrSink


class Context:
    def __init__(
        self,
        shell: Optional[Shell] = None,
        cwd: Optional[str] = None,
        on_stderr: Optional[StderrSink] = None,
    ):
        self.shell: Shell = shell if shell is not None else Shell()
        self.cwd: str = str(Path(cwd or os.getcwd()).resolve())
        self.on_stderr: Optional[StderrSink] = on_stderr

    def execute(self, command: str, args: list[str]) -> str:
        return self.shell.execute(command, args, self.cwd, self.on_stderr)

    def resolve(self, path: str) -> Path:
        """`path` resolved against the session working directory."""
        return (Path(self.cwd) / Path(path).expanduser()).resolve()

    def change_directory(self, path: str) -> str:
        target = self.resolve(path)
        if not target.exists():
            raise FileNotFoundError(f"No such directory {target} exists")
        if not target.is_dir():
            raise NotADirectoryError(f"Path {target} is a file, not a directory")
        self.cwd = str(target)
        return self.cwd
