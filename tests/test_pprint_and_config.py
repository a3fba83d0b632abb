import logging
from pathlib import Path

import pytest

from lish import config
from lish.debug_utils.pprint import (
    COLOR_NUMBER,
    DEFAULT_OPTIONS,
    RESET,
    colorize,
    format_value,
    load_options_from_json,
    pformat,
    pprint_expr,
    to_json,
)
from lish.evaluation.evaluator import read
from lish.types.lazy import LazySeq

PLAIN = {"color": False}


# -----------------------------------------------------
# Values
# -----------------------------------------------------

@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "null"),
        (True, "true"),
        (3, "3"),
        (2.5, "2.5"),
        ("plain", "plain"),
        (["a", 1, None], '["a" 1 null]'),
        ({"k": [True]}, '{"k" [true]}'),
        (("x",), '["x"]'),
    ]
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_format_value_quotes_on_request():
    assert format_value('say "hi"\n', quote_strings=True) == '"say \\"hi\\"\\n"'


def test_colorize():
    assert colorize(1) == f"{COLOR_NUMBER}1{RESET}"
    assert colorize(["a", 1], PLAIN) == '["a" 1]'
    assert pformat("a\nb", PLAIN) == "\na\nb"
    assert pformat("ab", PLAIN) == '"ab"'


def test_to_json_materializes_sequences():
    assert to_json({"xs": LazySeq(iter([1, 2]))}) == '{"xs": [1, 2]}'
    assert to_json([1], indent=2) == "[\n  1\n]"


def test_pprint_expr():
    tree = read("ls -la | grep $pattern")
    assert pprint_expr(tree, options=PLAIN) == "(grep (ls -la) $pattern)"
    colored = pprint_expr(tree)
    assert "\033[" in colored


def test_pprint_expr_breaks_long_forms():
    tree = read("(echo " + " ".join(["argument"] * 12) + ")")
    printed = pprint_expr(tree, options={**PLAIN, "max_line_length": 40})
    lines = printed.splitlines()
    assert lines[0] == "(echo"
    assert all(line == "  argument" for line in lines[1:-1])
    assert lines[-1] == "  argument)"


def test_pprint_expr_limits_depth():
    tree = read("(a (b (c d)))")
    assert pprint_expr(tree, options={**PLAIN, "max_depth": 2}) == "(a (… …))"


def test_load_options_from_json():
    assert load_options_from_json('{"color": false}') == {**DEFAULT_OPTIONS, "color": False}
    assert load_options_from_json("not json") == DEFAULT_OPTIONS


# -----------------------------------------------------
# Config
# -----------------------------------------------------

def test_default_paths(monkeypatch):
    monkeypatch.delenv("LISH_PRELUDE_PATH", raising=False)
    monkeypatch.delenv("LISH_HISTORY_FILE", raising=False)
    assert config.get_prelude_path() == Path("~/.lishrc").expanduser()
    assert config.get_history_file() == Path("~/.lish_history").expanduser()


def test_paths_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LISH_PRELUDE_PATH", str(tmp_path / "rc.lish"))
    monkeypatch.setenv("LISH_HISTORY_FILE", "  ")
    assert config.get_prelude_path() == tmp_path / "rc.lish"
    assert config.get_history_file() == Path("~/.lish_history").expanduser()


def test_read_prelude(monkeypatch, tmp_path):
    rc = tmp_path / "rc.lish"
    monkeypatch.setenv("LISH_PRELUDE_PATH", str(rc))
    assert config.read_prelude() is None
    rc.write_text("(def $greeting \"hi\")")
    assert config.read_prelude() == '(def $greeting "hi")'


def test_prelude_runs_in_the_module_scope(context):
    from lish.interpreter import Interpreter

    interp = Interpreter(context, prelude='(defn $hello [] "hi")')
    assert interp.eval("(hello)") == "hi"


@pytest.mark.parametrize(
    "override,env,expected",
    [
        (None, None, logging.WARNING),
        ("debug", None, logging.DEBUG),
        (None, "INFO", logging.INFO),
        ("error", "INFO", logging.ERROR),
        ("loud", None, logging.WARNING),
    ]
)
def test_log_level(monkeypatch, override, env, expected):
    if env is None:
        monkeypatch.delenv("LISH_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("LISH_LOG_LEVEL", env)
    assert config.get_log_level(override) == expected


def test_pprint_options_from_environment(monkeypatch):
    monkeypatch.delenv("LISH_PPRINT_OPTIONS", raising=False)
    assert config.get_pprint_options() == DEFAULT_OPTIONS
    monkeypatch.setenv("LISH_PPRINT_OPTIONS", '{"max_depth": 3}')
    assert config.get_pprint_options()["max_depth"] == 3
