"""Function values for nslisp.

Native functions wrap host callables with a fixed arity. The three user-level
kinds share one shape: parameters, a body and the context captured at the
definition site. Free identifiers in the body are always resolved against
that captured context, never the caller's.
"""

from __future__ import annotations

from io import StringIO
from typing import Callable

from nslisp import SExpression, LispValue
from nslisp.errors import NsEvalError
from nslisp.types.context import Namespace, Scope
from nslisp.types.symbol import Symbol


class NativeFunction:
    """A built-in operation implemented by a host callable."""

    __slots__ = ("name", "fn", "arity")

    def __init__(self, name: str, fn: Callable[..., LispValue], arity: int | None = None):
        self.name: str = name
        self.fn = fn
        self.arity: int = fn.__code__.co_argcount if arity is None else arity

    def __call__(self, *args: LispValue) -> LispValue:
        try:
            return self.fn(*args)
        except TypeError as e:
            # e.g. a function value passed where a number is expected
            raise NsEvalError(
                "INVALID_ARGUMENT_TYPE",
                {"name": self.name},
                f'Invalid argument type for "{self.name}": {e}',
            ) from e

    def __repr__(self) -> str:
        return f"<native {self.name}/{self.arity}>"


def not_implemented(name: str, arity: int) -> NativeFunction:
    """A native function that is declared but raises NOT_IMPLEMENT when invoked."""

    def fail(*args: LispValue) -> LispValue:
        raise NsEvalError("NOT_IMPLEMENT", {"name": name}, f'Native function "{name}" is not implemented')

    return NativeFunction(name, fail, arity)


class Function:
    """Common shape of user-level functions."""

    __slots__ = ("name", "parameters", "body", "context")

    keyword = "fn"

    def __init__(
        self,
        name: str,
        parameters: list[Symbol],
        body: SExpression,
        context: Namespace | Scope,
    ):
        self.name: str = name
        self.parameters: list[Symbol] = parameters
        self.body: SExpression = body
        # Fixed at creation: the definition-site context
        self.context: Namespace | Scope = context

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"({self.keyword} ")
            if not isinstance(self, AnonymousFunction):
                buffer.write(f"{self.name} ")
            buffer.write("(")
            buffer.write(" ".join(str(p) for p in self.parameters))
            buffer.write(")")
            buffer.write(" ...)")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)


class UserFunction(Function):
    """(defn name (params...) body): ordinary, non-tail recursion."""

    __slots__ = ()

    keyword = "defn"


class AnonymousFunction(Function):
    """(fn (params...) body): a closure with no name binding."""

    __slots__ = ()

    keyword = "fn"

    def __init__(self, parameters: list[Symbol], body: SExpression, context: Namespace | Scope):
        super().__init__("lambda", parameters, body, context)


class RecursionFunction(Function):
    """(defnr name (params...) body): every path of the body ends in break/recur."""

    __slots__ = ()

    keyword = "defnr"
