from lish import LishValue
from lish.assertions import assert_length_exact, assert_string
from lish.evaluation.evaluator import Evaluator
from lish.reader.expression import Expression
from lish.reader.tokens import Location
from lish.types.scope import Scope


def eval_form(
    args: list[Expression],
    scope: Scope,
    evaluator: Evaluator,
    loc: Location,
) -> LishValue:
    """(eval "(+ 1 2)") evaluates lish source text in the calling scope."""
    assert_length_exact("eval", 1, loc, args)
    raw = evaluator.interpret(args[0], scope)
    assert_string(loc, raw)
    return evaluator.eval(raw, scope)
