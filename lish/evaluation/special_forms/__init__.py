"""Registry of special forms for the lish evaluator.

Maps names to handlers that implement non-standard evaluation rules. Each
handler is installed in the core scope as a Macro, so it receives unevaluated
argument expressions, the calling scope, the evaluator and the call location.
"""

from lish.evaluation.special_forms.define_form import define_form, delete_form
from lish.evaluation.special_forms.eval_form import eval_form
from lish.evaluation.special_forms.if_form import if_form
from lish.evaluation.special_forms.lambda_form import defn_form, lambda_form
from lish.evaluation.special_forms.let_form import let_form
from lish.evaluation.special_forms.logic_forms import and_form, or_form
from lish.evaluation.special_forms.loop_forms import for_form

SPECIAL_FORMS = {
    "def": define_form,
    "defn": defn_form,
    "fn": lambda_form,
    "if": if_form,
    "for": for_form,
    "let": let_form,
    "delete": delete_form,
    "and": and_form,
    "or": or_form,
    "eval": eval_form,
}
