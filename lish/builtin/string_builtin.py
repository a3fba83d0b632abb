"""String manipulation (`String.*`) and text parsing (`Parse.*`) helpers.

Parse functions turn the text that external commands print into lish data:

    (Parse.table [name age] "Dave 26\\nSara 32")
    => [{"name" "Dave" "age" "26"} {"name" "Sara" "age" "32"}]
"""
from __future__ import annotations

import json
import re

from lish import LishValue
from lish.assertions import (
    assert_iterable,
    assert_length_exact,
    assert_length_range,
    assert_string,
)
from lish.debug_utils.pprint import format_value, to_json as json_text
from lish.errors import LishTypeError
from lish.reader.lexer import INT_RE, NUMBER_RE
from lish.reader.tokens import Location
from lish.types.function import Lib

WHITESPACE = re.compile(r"\s+")


def _text(name: str, args: list[LishValue], loc: Location) -> str:
    assert_length_exact(name, 1, loc, args)
    assert_string(loc, args[0])
    return args[0]


def _text_and_part(name: str, args: list[LishValue], loc: Location) -> tuple[str, str]:
    assert_length_exact(name, 2, loc, args)
    text, part = args
    assert_string(loc, text)
    assert_string(loc, part)
    return text, part


# -------------------------------
# String.*
# -------------------------------
def length(args: list[LishValue], loc: Location) -> int:
    return len(_text("length", args, loc))


def split(args: list[LishValue], loc: Location) -> list[str]:
    """(String.split "a,b" ","). Without a separator splits on runs of whitespace."""
    assert_length_range("split", 1, 2, loc, args)
    text = args[0]
    assert_string(loc, text)
    if len(args) == 1:
        return text.split()
    separator = args[1]
    assert_string(loc, separator)
    if not separator:
        return list(text)
    return text.split(separator)


def trim(args: list[LishValue], loc: Location) -> str:
    return _text("trim", args, loc).strip()


def upper(args: list[LishValue], loc: Location) -> str:
    return _text("upper", args, loc).upper()


def lower(args: list[LishValue], loc: Location) -> str:
    return _text("lower", args, loc).lower()


def replace(args: list[LishValue], loc: Location) -> str:
    """(String.replace text old new) replaces every occurrence."""
    assert_length_exact("replace", 3, loc, args)
    for arg in args:
        assert_string(loc, arg)
    text, old, new = args
    return text.replace(old, new)


def starts_with(args: list[LishValue], loc: Location) -> bool:
    text, prefix = _text_and_part("startsWith", args, loc)
    return text.startswith(prefix)


def ends_with(args: list[LishValue], loc: Location) -> bool:
    text, suffix = _text_and_part("endsWith", args, loc)
    return text.endswith(suffix)


def contains(args: list[LishValue], loc: Location) -> bool:
    text, part = _text_and_part("contains", args, loc)
    return part in text


def concat(args: list[LishValue], loc: Location) -> str:
    """Joins the printed form of every argument with no separator."""
    return "".join(format_value(a) for a in args)


def to_json(args: list[LishValue], loc: Location) -> str:
    assert_length_range("toJson", 1, 2, loc, args)
    indent = args[1] if len(args) == 2 else None
    return json_text(args[0], indent)


STRING = {
    "length": length,
    "split": split,
    "trim": trim,
    "upper": upper,
    "lower": lower,
    "replace": replace,
    "startsWith": starts_with,
    "endsWith": ends_with,
    "contains": contains,
    "concat": concat,
    "toJson": to_json,
}


# -------------------------------
# Parse.*
# -------------------------------
def words(args: list[LishValue], loc: Location) -> list[str]:
    return _text("words", args, loc).split()


def lines(args: list[LishValue], loc: Location) -> list[str]:
    """Lines of text without their terminators. A trailing newline adds no empty line."""
    return _text("lines", args, loc).splitlines()


def table(args: list[LishValue], loc: Location) -> list[dict]:
    """(Parse.table [keys] text) or (Parse.table delimiter [keys] text).

    Blank lines are skipped. Missing columns read as null; extra columns are dropped.
    """
    assert_length_range("table", 2, 3, loc, args)
    if len(args) == 3:
        delimiter, keys, text = args
        assert_string(loc, delimiter)
    else:
        delimiter = None
        keys, text = args
    assert_iterable(loc, keys)
    assert_string(loc, text)
    keys = list(keys)
    rows = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        values = line.split(delimiter) if delimiter else WHITESPACE.split(line)
        rows.append({key: values[i] if i < len(values) else None for i, key in enumerate(keys)})
    return rows


def parse_json(args: list[LishValue], loc: Location) -> LishValue:
    text = _text("json", args, loc)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        loc.fail(f"Invalid JSON: {e.msg} at line {e.lineno} column {e.colno}", LishTypeError)


def number(args: list[LishValue], loc: Location) -> int | float:
    text = _text("number", args, loc).strip()
    if not NUMBER_RE.fullmatch(text):
        loc.fail(f"Not a number: {format_value(text, True)}", LishTypeError)
    return int(text) if INT_RE.fullmatch(text) else float(text)


PARSE = {
    "words": words,
    "lines": lines,
    "table": table,
    "json": parse_json,
    "number": number,
}


def string_namespace() -> dict[str, Lib]:
    return {name: Lib(f"String.{name}", fn) for name, fn in STRING.items()}


def parse_namespace() -> dict[str, Lib]:
    return {name: Lib(f"Parse.{name}", fn) for name, fn in PARSE.items()}
