from lish import LishValue
from lish.assertions import assert_kind_variable, assert_length_exact
from lish.evaluation.evaluator import Evaluator
from lish.reader.expression import Expression
from lish.reader.tokens import Location
from lish.types.function import UserFunction
from lish.types.scope import Scope


def define_form(
    args: list[Expression],
    scope: Scope,
    evaluator: Evaluator,
    loc: Location,
) -> LishValue:
    """
    (def $name value)
    Binds in the module scope regardless of how deeply the form is nested.
    """
    assert_length_exact("def", 2, loc, args)
    name_ex, value_ex = args
    assert_kind_variable("def", 1, name_ex)

    if scope.module is None:
        loc.fail("def requires a module scope")

    value = evaluator.interpret(value_ex, scope)
    if isinstance(value, UserFunction) and value.name is None:
        value.name = name_ex.name
    scope.module.define(name_ex.name, value)
    return None


def delete_form(
    args: list[Expression],
    scope: Scope,
    evaluator: Evaluator,
    loc: Location,
) -> LishValue:
    """(delete $a $b ...) removes each binding; unbound names are ignored."""
    for position, arg in enumerate(args, start=1):
        assert_kind_variable("delete", position, arg)
        scope.delete(arg.name)
    return None
