from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lish.reader.tokens import Location


class LishError(Exception):
    """ Base class for all lish errors"""

    def __init__(self, message: str, loc: Location | None = None):
        self.message = message
        self.loc = loc
        super().__init__(self._render())

    def _render(self) -> str:
        if self.loc is None:
            return self.message
        return f"{self.message} at {self.loc}"


class LishSyntaxError(LishError):
    """ Raised on malformed tokens, unterminated forms and bad rewrites"""


class LishArityError(LishError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class LishTypeError(LishError):
    """ Raised when an argument or expression has the wrong kind"""


class LishDispatchError(LishError):
    """ Raised when a call head is neither a function nor a command"""


class LishProcessError(LishError):
    """ Raised when an external command cannot be launched or fails"""


class LishRuntimeError(LishError):
    """ Raised when a host-level exception escapes a library call"""
