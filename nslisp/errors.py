from __future__ import annotations

from typing import Any


class NsLispError(Exception):
    """ Base class for all nslisp errors.

    Every error carries a machine readable `code`, a `data` payload with the
    offending name/arity/etc. and a human readable message.
    """

    def __init__(self, code: str, data: dict[str, Any] | None = None, message: str = ""):
        super().__init__(message or code)
        self.code = code
        self.data = data if data is not None else {}
        self.message = message or code

    def __str__(self) -> str:
        if self.data:
            return f"{self.code}: {self.message} {self.data}"
        return f"{self.code}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r}, {self.message!r})"


class NsIdentifierError(NsLispError):
    """ Raised for identifier definition and lookup failures:
    IDENTIFIER_ALREADY_EXIST, IDENTIFIER_NOT_FOUND, NAMESPACE_NOT_FOUND"""


class NsSyntaxError(NsLispError):
    """ Raised when a form is malformed or used in the wrong place"""


class NsEvalError(NsLispError):
    """ Raised for runtime failures: IDENTIFIER_NOT_A_FUNCTION, NOT_IMPLEMENT"""


def assert_number_of_parameters(name, actual: int, expect: int) -> None:
    if actual != expect:
        raise NsSyntaxError(
            "INCORRECT_NUMBER_OF_PARAMETERS",
            {"name": str(name), "actual": actual, "expect": expect},
            f'Incorrect number of parameters for function: "{name}"',
        )
