"""Installs the special forms into a scope as Macro values."""

from lish.evaluation.special_forms import SPECIAL_FORMS
from lish.types.function import Macro
from lish.types.scope import Scope


def register(scope: Scope) -> None:
    """Register every special form in the provided scope."""
    scope.update({name: Macro(name, form) for name, form in SPECIAL_FORMS.items()})
