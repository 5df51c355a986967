"""Built-in functions for the nslisp runtime.

The `builtin` namespace holds the evaluation helper `val` and the logical
operators. Logical values follow the 1/0 convention: 1 is true, 0 is false.
"""
from __future__ import annotations

from nslisp import LispValue
from nslisp.builtin.native_builtin import boolean, to_i64
from nslisp.environment import Environment
from nslisp.types.functions import NativeFunction
from nslisp.types.symbol import Symbol


def val(value: LispValue) -> LispValue:
    """(val identifier) or (val literal): the value itself."""
    return value


# -------------------------------
# Boolean logic
# -------------------------------
def logical_and(lh: LispValue, rh: LispValue) -> LispValue:
    return boolean((to_i64(lh) & to_i64(rh)) != 0)


def logical_or(lh: LispValue, rh: LispValue) -> LispValue:
    return boolean((to_i64(lh) | to_i64(rh)) != 0)


def logical_not(value: LispValue) -> LispValue:
    return boolean(value == 0)


# -------------------------------
# Registration
# -------------------------------
def register(environment: Environment) -> None:
    namespace = environment.create_namespace("builtin")
    namespace.update({
        Symbol("val"): NativeFunction("builtin.val", val),
        Symbol("and"): NativeFunction("builtin.and", logical_and),
        Symbol("or"): NativeFunction("builtin.or", logical_or),
        Symbol("not"): NativeFunction("builtin.not", logical_not),
    })
