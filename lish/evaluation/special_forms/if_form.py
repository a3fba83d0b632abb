from lish import LishValue
from lish.assertions import assert_length_range
from lish.evaluation.evaluator import Evaluator
from lish.reader.expression import Expression
from lish.reader.tokens import Location
from lish.types.scope import Scope


def if_form(
    args: list[Expression],
    scope: Scope,
    evaluator: Evaluator,
    loc: Location,
) -> LishValue:
    assert_length_range("if", 2, 3, loc, args)

    condition = evaluator.interpret(args[0], scope)

    if condition:
        return evaluator.interpret(args[1], scope)
    elif len(args) > 2:
        return evaluator.interpret(args[2], scope)
    else:
        return None  # no else branch
