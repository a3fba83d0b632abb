"""Console output (`IO.*`) and filesystem access (`File.*`).

File paths are resolved against the session working directory, so `cd`
affects `(File.read "notes.txt")` the same way it affects external commands.
"""
from __future__ import annotations

import logging
import shutil
import sys
from functools import partial

from lish import LishValue
from lish.assertions import (
    assert_length_exact,
    assert_length_range,
    assert_not_empty_string,
    assert_string,
)
from lish.context import Context
from lish.debug_utils.pprint import format_value
from lish.reader.tokens import Location
from lish.types.function import Lib

logger = logging.getLogger("lish")


# -------------------------------
# IO.*
# -------------------------------
def io_print(args: list[LishValue], loc: Location) -> None:
    print(" ".join(format_value(a) for a in args))
    return None


def io_error(args: list[LishValue], loc: Location) -> None:
    message = " ".join(format_value(a) for a in args)
    logger.error("%s (at %s)", message, loc)
    print(message, file=sys.stderr)
    return None


IO = {
    "print": io_print,
    "error": io_error,
}


# -------------------------------
# File.*
# -------------------------------
def _path(context: Context, name: str, size: int, args: list[LishValue], loc: Location):
    assert_length_exact(name, size, loc, args)
    assert_not_empty_string(loc, args[0])
    return context.resolve(args[0])


def read(context: Context, args: list[LishValue], loc: Location) -> str:
    return _path(context, "read", 1, args, loc).read_text()


def write(context: Context, args: list[LishValue], loc: Location) -> str:
    """(File.write path text) replaces the file contents and returns the resolved path."""
    target = _path(context, "write", 2, args, loc)
    assert_string(loc, args[1])
    target.write_text(args[1])
    return str(target)


def append(context: Context, args: list[LishValue], loc: Location) -> str:
    target = _path(context, "append", 2, args, loc)
    assert_string(loc, args[1])
    with target.open("a") as f:
        f.write(args[1])
    return str(target)


def exists(context: Context, args: list[LishValue], loc: Location) -> bool:
    return _path(context, "exists", 1, args, loc).exists()


def is_directory(context: Context, args: list[LishValue], loc: Location) -> bool:
    return _path(context, "isDirectory", 1, args, loc).is_dir()


def list_dir(context: Context, args: list[LishValue], loc: Location) -> list[str]:
    """Sorted entry names of a directory, the working directory when no path is given."""
    assert_length_range("list", 0, 1, loc, args)
    target = _path(context, "list", 1, args, loc) if args else context.resolve(".")
    return sorted(entry.name for entry in target.iterdir())


def remove(context: Context, args: list[LishValue], loc: Location) -> bool:
    """Deletes a file or a directory tree. Returns false when nothing was there."""
    target = _path(context, "remove", 1, args, loc)
    if not target.exists():
        return False
    if target.is_dir():
        shutil.rmtree(target)
    else:
        target.unlink()
    return True


FILE = {
    "read": read,
    "write": write,
    "append": append,
    "exists": exists,
    "isDirectory": is_directory,
    "list": list_dir,
    "remove": remove,
}


def io_namespace() -> dict[str, Lib]:
    return {name: Lib(f"IO.{name}", fn) for name, fn in IO.items()}


def file_namespace(context: Context) -> dict[str, Lib]:
    return {name: Lib(f"File.{name}", partial(fn, context)) for name, fn in FILE.items()}
