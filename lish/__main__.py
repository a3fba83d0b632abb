from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser
from typing import Optional

from lish import __version__, config
from lish.debug_utils.pprint import format_value, pprint_expr
from lish.errors import LishError
from lish.evaluation.evaluator import read
from lish.interpreter import Interpreter
from lish.repl import Repl


def _parser() -> ArgumentParser:
    parser = ArgumentParser(prog="lish", description="A Lisp-flavoured shell")
    parser.add_argument("file", type=str, nargs="?", default=None, help="script to run")
    parser.add_argument("-c", dest="code", default=None, help="evaluate CODE and exit")
    parser.add_argument("--ast", action="store_true", help="print the desugared tree instead of evaluating")
    parser.add_argument("--log-level", default=None, help="logging level (default: $LISH_LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"lish {__version__}")
    return parser


def run_source(source: str, show_ast: bool = False, argv: Optional[list[str]] = None) -> int:
    """Evaluate a whole program, printing its result. Returns the process exit status."""
    try:
        if show_ast:
            tree = read(source)
            if tree is not None:
                print(pprint_expr(tree, options={"color": sys.stdout.isatty()}))
            return 0
        interp = Interpreter()
        interp.define("argv", list(argv or []))
        result = interp.eval(source)
    except LishError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1
    if result is not None:
        print(format_value(result))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args, rest = _parser().parse_known_args(argv)
    logging.basicConfig(
        level=config.get_log_level(args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.code is not None:
        extra = [args.file, *rest] if args.file is not None else rest
        return run_source(args.code, args.ast, extra)
    if args.file is not None:
        try:
            with open(args.file) as f:
                source = f.read()
        except OSError as ex:
            print(f"error: {ex}", file=sys.stderr)
            return 1
        return run_source(source, args.ast, [args.file, *rest])

    try:
        interp = Interpreter(prelude=config.read_prelude())
    except LishError as ex:
        print(f"error in {config.get_prelude_path()}: {ex}", file=sys.stderr)
        interp = Interpreter()
    Repl(interp, options=config.get_pprint_options(), history_file=config.get_history_file()).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
