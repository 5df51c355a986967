"""Native instruction namespaces.

Function names follow the WebAssembly instruction names, one sub-namespace
per numeric type:

- native.i64.add is i64 addition
- native.f64.add is f64 addition
- native.i32.* and native.f32.* are declared but not implemented

There is a single runtime number type (a 64-bit float). The i64 arithmetic
operates on it directly; bitwise operations truncate their operands to a
signed 64-bit integer first. Comparisons return 1 or 0.
"""
from __future__ import annotations

import math

from nslisp import LispValue
from nslisp.environment import Environment
from nslisp.types.functions import NativeFunction, not_implemented
from nslisp.types.symbol import Symbol

_MASK64 = (1 << 64) - 1


# -------------------------------
# Helpers
# -------------------------------
def to_i64(value: LispValue) -> int:
    """Truncate a number to a signed 64-bit integer; non-finite values become 0."""
    if not math.isfinite(value):
        return 0
    n = int(value) & _MASK64
    return n - (1 << 64) if n >> 63 else n


def to_u64(value: LispValue) -> int:
    return to_i64(value) & _MASK64


def from_int(n: int) -> float:
    n &= _MASK64
    return float(n - (1 << 64) if n >> 63 else n)


def boolean(flag: bool) -> float:
    return 1.0 if flag else 0.0


def divide(lh: LispValue, rh: LispValue) -> float:
    """IEEE division: x/0 is +-inf and 0/0 is nan."""
    if rh == 0:
        if lh == 0 or math.isnan(lh):
            return math.nan
        return math.copysign(math.inf, lh) * math.copysign(1.0, rh)
    return lh / rh


def remainder(lh: LispValue, rh: LispValue) -> float:
    """Truncated remainder: the result has the sign of the dividend."""
    if rh == 0 or math.isinf(lh):
        return math.nan
    return math.fmod(lh, rh)


# -------------------------------
# i64
# -------------------------------
def i64_add(lh, rh):
    return lh + rh


def i64_sub(lh, rh):
    return lh - rh


def i64_mul(lh, rh):
    return lh * rh


def i64_div_s(lh, rh):
    return divide(lh, rh)


def i64_rem_s(lh, rh):
    return remainder(lh, rh)


def i64_and(lh, rh):
    return from_int(to_i64(lh) & to_i64(rh))


def i64_or(lh, rh):
    return from_int(to_i64(lh) | to_i64(rh))


def i64_xor(lh, rh):
    return from_int(to_i64(lh) ^ to_i64(rh))


def i64_shl(lh, rh):
    return from_int(to_i64(lh) << (to_u64(rh) % 64))


def i64_shr_s(lh, rh):
    return from_int(to_i64(lh) >> (to_u64(rh) % 64))


def i64_shr_u(lh, rh):
    return from_int(to_u64(lh) >> (to_u64(rh) % 64))


def i64_eq(lh, rh):
    return boolean(lh == rh)


def i64_ne(lh, rh):
    return boolean(lh != rh)


def i64_lt_s(lh, rh):
    return boolean(lh < rh)


def i64_gt_s(lh, rh):
    return boolean(lh > rh)


def i64_le_s(lh, rh):
    return boolean(lh <= rh)


def i64_ge_s(lh, rh):
    return boolean(lh >= rh)


# -------------------------------
# f64
# -------------------------------
def f64_div(lh, rh):
    return divide(lh, rh)


def f64_abs(val):
    return abs(val)


def f64_neg(val):
    return -val


def f64_ceil(val):
    return float(math.ceil(val)) if math.isfinite(val) else val


def f64_floor(val):
    return float(math.floor(val)) if math.isfinite(val) else val


def f64_trunc(val):
    return float(math.trunc(val)) if math.isfinite(val) else val


def f64_nearest(val):
    """Round to nearest, ties to even."""
    return float(round(val)) if math.isfinite(val) else val


def f64_sqrt(val):
    return math.sqrt(val) if val >= 0 else math.nan


# -------------------------------
# Declared but unimplemented
# -------------------------------
INTEGER_BINARY = (
    "add", "sub", "mul", "div_s", "div_u", "rem_s", "rem_u",
    "and", "or", "xor", "shl", "shr_s", "shr_u",
    "eq", "ne", "lt_s", "lt_u", "gt_s", "gt_u", "le_s", "le_u", "ge_s", "ge_u",
)
FLOAT_BINARY = ("add", "sub", "mul", "div", "eq", "ne", "lt", "gt", "le", "ge")
FLOAT_UNARY = ("abs", "neg", "ceil", "floor", "trunc", "nearest", "sqrt")

I64_UNIMPLEMENTED = {
    "div_u": 2, "rem_u": 2, "lt_u": 2, "gt_u": 2, "le_u": 2, "ge_u": 2,
    "extend_i32_s": 1, "extend_i32_u": 1,
    "trunc_f32_s": 1, "trunc_f32_u": 1, "trunc_f64_s": 1, "trunc_f64_u": 1,
}
I32_CONVERSIONS = ("wrap", "trunc_f32_s", "trunc_f32_u", "trunc_f64_s", "trunc_f64_u")
F64_CONVERSIONS = ("promote", "convert_i32_s", "convert_i32_u", "convert_i64_s", "convert_i64_u")
F32_CONVERSIONS = ("demote", "convert_i32_s", "convert_i32_u", "convert_i64_s", "convert_i64_u")


def _define(environment: Environment, name_path: str, functions: dict) -> None:
    namespace = environment.create_namespace(name_path)
    namespace.update({
        Symbol(name): fn if isinstance(fn, NativeFunction) else NativeFunction(f"{name_path}.{name}", fn)
        for name, fn in functions.items()
    })


def _unimplemented(name_path: str, arities: dict) -> dict:
    return {name: not_implemented(f"{name_path}.{name}", arity) for name, arity in arities.items()}


# -------------------------------
# Registration
# -------------------------------
def register(environment: Environment) -> None:
    _define(environment, "native.i64", {
        # arithmetic
        "add": i64_add,
        "sub": i64_sub,
        "mul": i64_mul,
        "div_s": i64_div_s,
        "rem_s": i64_rem_s,
        # bitwise
        "and": i64_and,
        "or": i64_or,
        "xor": i64_xor,
        "shl": i64_shl,
        "shr_s": i64_shr_s,
        "shr_u": i64_shr_u,
        # comparison
        "eq": i64_eq,
        "ne": i64_ne,
        "lt_s": i64_lt_s,
        "gt_s": i64_gt_s,
        "le_s": i64_le_s,
        "ge_s": i64_ge_s,
        **_unimplemented("native.i64", I64_UNIMPLEMENTED),
    })

    _define(environment, "native.f64", {
        # arithmetic
        "add": i64_add,
        "sub": i64_sub,
        "mul": i64_mul,
        "div": f64_div,
        # comparison
        "eq": i64_eq,
        "ne": i64_ne,
        "lt": i64_lt_s,
        "gt": i64_gt_s,
        "le": i64_le_s,
        "ge": i64_ge_s,
        # math
        "abs": f64_abs,
        "neg": f64_neg,
        "ceil": f64_ceil,
        "floor": f64_floor,
        "trunc": f64_trunc,
        "nearest": f64_nearest,
        "sqrt": f64_sqrt,
        **_unimplemented("native.f64", dict.fromkeys(F64_CONVERSIONS, 1)),
    })

    _define(environment, "native.i32", _unimplemented("native.i32", {
        **dict.fromkeys(INTEGER_BINARY, 2),
        **dict.fromkeys(I32_CONVERSIONS, 1),
    }))

    _define(environment, "native.f32", _unimplemented("native.f32", {
        **dict.fromkeys(FLOAT_BINARY, 2),
        **dict.fromkeys(FLOAT_UNARY, 1),
        **dict.fromkeys(F32_CONVERSIONS, 1),
    }))
