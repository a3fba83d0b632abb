from lish import LishValue
from lish.evaluation.evaluator import Evaluator
from lish.reader.expression import Expression
from lish.reader.tokens import Location
from lish.types.scope import Scope


def and_form(args: list[Expression], scope: Scope, evaluator: Evaluator, loc: Location) -> LishValue:
    """Short-circuiting logical AND.

    (and a b c ...) evaluates operands left to right and returns the first falsy
    one without evaluating the rest. Otherwise returns the last operand's value.
    With zero operands, returns true.
    """
    result: LishValue = True
    for ex in args:
        result = evaluator.interpret(ex, scope)
        if not result:
            return result
    return result


def or_form(args: list[Expression], scope: Scope, evaluator: Evaluator, loc: Location) -> LishValue:
    """Short-circuiting logical OR.

    (or a b c ...) returns the first truthy operand, or the last operand's value
    when none is truthy. With zero operands, returns false.
    """
    result: LishValue = False
    for ex in args:
        result = evaluator.interpret(ex, scope)
        if result:
            return result
    return result
