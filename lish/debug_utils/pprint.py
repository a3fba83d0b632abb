from __future__ import annotations

import json
from typing import TYPE_CHECKING, Optional

from lish import LishValue
from lish.types.function import BoundMethod, Lib, Macro, UserFunction
from lish.types.lazy import LazySeq

if TYPE_CHECKING:
    from lish.reader.expression import Expression

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_COMMAND = "\033[94m"
COLOR_VARIABLE = "\033[93m"
COLOR_STRING = "\033[92m"
COLOR_NUMBER = "\033[96m"
COLOR_LITERAL = "\033[95m"
COLOR_FUNCTION = "\033[92m"
COLOR_SPECIAL_FORM = "\033[90m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "max_depth": 8,
    "display_legend": False,
    "color": True,
}

SPECIAL_FORMS = {"def", "defn", "fn", "if", "for", "let", "delete", "and", "or", "eval", "do"}

ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def quote_string(text: str) -> str:
    """Double-quoted source form of `text`; the lexer reads it back unchanged."""
    return '"' + "".join(ESCAPES.get(ch, ch) for ch in text) + '"'


def format_value(value: LishValue, quote_strings: bool = False) -> str:
    """Render a runtime value the way lish source would spell it.

    Top-level strings are returned verbatim unless `quote_strings` is set;
    strings nested in arrays and maps are always quoted.
    """
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return quote_string(value) if quote_strings else value
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(format_value(v, True) for v in value) + "]"
    if isinstance(value, dict):
        pairs = (f"{format_value(k, True)} {format_value(v, True)}" for k, v in value.items())
        return "{" + " ".join(pairs) + "}"
    if isinstance(value, (Macro, Lib, UserFunction, BoundMethod, LazySeq)):
        return repr(value)
    if callable(value):
        return f"<function {getattr(value, '__name__', type(value).__name__)}>"
    return str(value)


def to_json(value: LishValue, indent: Optional[int] = None) -> str:
    """JSON text for plain data; lazy sequences are materialized first."""
    def default(obj):
        if isinstance(obj, (LazySeq, tuple)):
            return list(obj)
        return format_value(obj)
    return json.dumps(value, indent=indent, default=default)


# ----------------- Colorize utility -----------------
def colorize(value: LishValue, options: dict = DEFAULT_OPTIONS) -> str:
    if not options.get("color", True):
        return format_value(value, True)
    if value is None or isinstance(value, bool):
        return f"{COLOR_LITERAL}{format_value(value)}{RESET}"
    if isinstance(value, (int, float)):
        return f"{COLOR_NUMBER}{format_value(value)}{RESET}"
    if isinstance(value, str):
        return f"{COLOR_STRING}{quote_string(value)}{RESET}"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(colorize(v, options) for v in value) + "]"
    if isinstance(value, dict):
        pairs = (f"{colorize(k, options)} {colorize(v, options)}" for k, v in value.items())
        return "{" + " ".join(pairs) + "}"
    if isinstance(value, Macro):
        return f"{COLOR_SPECIAL_FORM}{format_value(value)}{RESET}"
    if isinstance(value, (Lib, UserFunction, BoundMethod)) or callable(value):
        return f"{COLOR_FUNCTION}{format_value(value)}{RESET}"
    return format_value(value, True)


def pformat(value: LishValue, options: dict = DEFAULT_OPTIONS) -> str:
    """REPL rendering: multi-line strings print raw, everything else colorized."""
    if isinstance(value, str) and "\n" in value:
        return "\n" + value
    return colorize(value, options)


# ----------------- Tree printer -----------------
def _leaf(expr: Expression, options: dict) -> str:
    from lish.reader.expression import ExpressionKind

    text = str(expr)
    if not options.get("color", True):
        return text
    if expr.kind is ExpressionKind.COMMAND:
        color = COLOR_SPECIAL_FORM if expr.value in SPECIAL_FORMS else COLOR_COMMAND
        return f"{color}{text}{RESET}"
    if expr.kind is ExpressionKind.VARIABLE:
        return f"{COLOR_VARIABLE}{text}{RESET}"
    if isinstance(expr.value, str):
        return f"{COLOR_STRING}{text}{RESET}"
    if isinstance(expr.value, (int, float)) and not isinstance(expr.value, bool):
        return f"{COLOR_NUMBER}{text}{RESET}"
    return f"{COLOR_LITERAL}{text}{RESET}"


def pprint_expr(
    expr: Expression,
    indent: int = 0,
    options: dict = DEFAULT_OPTIONS,
    _current_depth: int = 0,
) -> str:
    """Pretty-print an expression tree, breaking long forms across lines."""
    from lish.reader.expression import ExpressionKind

    pad = "  " * indent
    legend_str = ""
    if options.get("display_legend", False) and indent == 0 and options.get("color", True):
        legend_items = [
            f"{COLOR_COMMAND}command{RESET}",
            f"{COLOR_SPECIAL_FORM}special form{RESET}",
            f"{COLOR_VARIABLE}$variable{RESET}",
            f"{COLOR_STRING}string{RESET}",
            f"{COLOR_NUMBER}number{RESET}",
            f"{COLOR_LITERAL}literal{RESET}",
        ]
        legend_str = "Color Key: " + " | ".join(legend_items) + "\n"

    if _current_depth >= options.get("max_depth", 8):
        return legend_str + "…"

    if not expr.is_container():
        return legend_str + _leaf(expr, options)

    open_, close = {
        ExpressionKind.CALL: ("(", ")"),
        ExpressionKind.ARRAY: ("[", "]"),
        ExpressionKind.MAP: ("{", "}"),
    }[expr.kind]

    if not expr.body:
        return legend_str + open_ + close

    parts = [pprint_expr(e, indent + 1, options, _current_depth + 1) for e in expr.body]

    single_line = open_ + " ".join(parts) + close
    if len(str(expr)) + indent * 2 <= options.get("max_line_length", 80):
        return legend_str + single_line

    aligned_lines = [open_ + parts[0]]
    for part in parts[1:]:
        aligned_lines.append(pad + "  " + part)
    aligned_lines[-1] += close
    return legend_str + "\n".join(aligned_lines)


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError:
        return DEFAULT_OPTIONS
    return {**DEFAULT_OPTIONS, **user_opts}
