from lish import LishValue
from lish.assertions import (
    assert_iterable,
    assert_keyword,
    assert_kind_variable,
    assert_length_exact,
)
from lish.evaluation.evaluator import Evaluator
from lish.reader.expression import Expression
from lish.reader.tokens import Location
from lish.types.scope import Scope


def for_form(
    args: list[Expression],
    scope: Scope,
    evaluator: Evaluator,
    loc: Location,
) -> LishValue:
    """(for $i in (Array.range 0 3) (* $i $i)) => [0 1 4]

    Each iteration gets its own child scope; the results are collected in order.
    Maps iterate as [key value] pairs.
    """
    assert_length_exact("for", 4, loc, args)
    name, in_word, range_ex, body = args
    assert_kind_variable("for", 1, name)
    assert_keyword("in", in_word)

    items = evaluator.interpret(range_ex, scope)
    assert_iterable(range_ex.loc, items)
    if isinstance(items, dict):
        items = ([k, v] for k, v in items.items())

    result = []
    for item in items:
        inner = scope.child()
        inner.define(name.name, item)
        result.append(evaluator.interpret(body, inner))
    return result
