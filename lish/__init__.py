# Core type aliases for the lish data model.
# Runtime values are plain Python types (int, float, str, bool, None, list, dict)
# plus the callable wrappers in lish.types.function and lazy sequences in
# lish.types.lazy. Code is an explicit Expression tree (lish.reader.expression).
#
# Naming guidance:
# - LishValue:   use in evaluator/runtime code to denote evaluated values.
# - EvaluatorFn: signature of the `interpret` entry point handed to macros.

from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
LishValue = Any

# Evaluator function type: Python evaluator used inside special forms
EvaluatorFn = Callable[..., LishValue]
