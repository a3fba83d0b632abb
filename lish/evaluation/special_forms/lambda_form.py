from lish import LishValue
from lish.assertions import assert_kind_array, assert_kind_variable, assert_length_exact
from lish.evaluation.evaluator import Evaluator
from lish.evaluation.special_forms.define_form import define_form
from lish.reader.expression import Expression
from lish.reader.tokens import Location
from lish.types.function import UserFunction
from lish.types.scope import Scope


def lambda_form(
    args: list[Expression],
    scope: Scope,
    evaluator: Evaluator,
    loc: Location,
) -> LishValue:
    """(fn [$x $y] (+ $x $y)) closes over the scope active at this form."""
    assert_length_exact("fn", 2, loc, args)
    raw_params, body = args
    assert_kind_array("fn", 1, raw_params)

    params: list[str] = []
    for position, param in enumerate(raw_params.body):
        assert_kind_variable("fn", position, param)
        params.append(param.name)

    return UserFunction(params, body, scope, evaluator)


def defn_form(
    args: list[Expression],
    scope: Scope,
    evaluator: Evaluator,
    loc: Location,
) -> LishValue:
    """(defn $add [$x $y] (+ $x $y)) => (def $add (fn [$x $y] (+ $x $y)))"""
    assert_length_exact("defn", 3, loc, args)
    name, params, body = args
    assert_kind_variable("defn", 1, name)

    fn = lambda_form([params, body], scope, evaluator, loc)
    fn.name = name.name
    return define_form([name, Expression.literal(fn, loc=loc)], scope, evaluator, loc)
