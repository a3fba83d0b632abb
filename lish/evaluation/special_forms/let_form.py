from lish import LishValue
from lish.assertions import (
    assert_kind_array,
    assert_kind_variable,
    assert_length_exact,
    assert_not_empty,
)
from lish.evaluation.evaluator import Evaluator
from lish.reader.expression import Expression, ExpressionKind
from lish.reader.tokens import Location
from lish.types.scope import Scope


def let_form(
    args: list[Expression],
    scope: Scope,
    evaluator: Evaluator,
    loc: Location,
) -> LishValue:
    """
    (let [$x 2] (+ $x 1))
    (let [[$x 2] [$y $x]] (+ $x $y))

    All pairs share one child scope, bound in order, so later values can see
    earlier names. The body is evaluated in that scope.
    """
    assert_length_exact("let", 2, loc, args)
    params, body = args
    assert_kind_array("let", 1, params)
    assert_not_empty(loc, params.body)

    if params.body[0].kind is ExpressionKind.ARRAY:
        pairs = []
        for pair in params.body:
            assert_kind_array("let", 1, pair)
            pairs.append(pair.body)
    else:
        pairs = [params.body]

    inner = scope.child()
    for pair in pairs:
        assert_length_exact("let", 2, loc, pair)
        name, value_ex = pair
        assert_kind_variable("let", 2, name)
        inner.define(name.name, evaluator.interpret(value_ex, inner))

    return evaluator.interpret(body, inner)
