"""Application engine for nslisp.

This module centralizes function application semantics:
- Native functions: arity-checked, called with evaluated arguments.
- User and anonymous functions: one activation Scope whose parent is the
  captured definition context (static scoping), ordinary recursion.
- Recursion functions: the same activation per step, driven by the loop
  trampoline so that `recur` does not grow the host stack.

The trampoline itself is shared with the `loop` special form.
"""

from __future__ import annotations

from typing import Callable

from nslisp import LispValue, EvaluatorFn, SExpression
from nslisp.environment import Environment
from nslisp.errors import NsEvalError, NsSyntaxError, assert_number_of_parameters
from nslisp.types.context import Scope
from nslisp.types.functions import Function, NativeFunction, RecursionFunction
from nslisp.types.loop_signal import Continue, Stop
from nslisp.types.symbol import Symbol


def activate(fn: Function, args: list[LispValue]) -> Scope:
    """Bind `args` to the parameters of `fn` in a fresh activation Scope."""
    # Static environment: the parent is the definition context, not the caller
    activation = Scope(fn.context)
    for name, value in zip(fn.parameters, args):
        activation.define(name, value)
    return activation


def trampoline(
    step: Callable[[list[LispValue]], LispValue],
    args: list[LispValue],
    check_args: Callable[[list[LispValue]], None],
    owner: str,
    one_value_code: str,
) -> LispValue:
    """Run `step` until it returns Stop.

    `step` evaluates one iteration of the body with the given arguments and
    must return a LoopSignal. Each Continue replaces the arguments; each
    iteration returns to this loop, so the host stack does not grow.
    """
    while True:
        check_args(args)
        signal = step(args)
        if isinstance(signal, Continue):
            args = signal.values
            continue
        if isinstance(signal, Stop):
            if len(signal.values) != 1:
                raise NsSyntaxError(
                    one_value_code,
                    {"actual": len(signal.values), "expect": 1},
                    f'Require "{owner}" to return one value',
                )
            return signal.values[0]
        raise NsSyntaxError(
            "REQUIRE_BREAK_OR_RECUR",
            {"name": owner},
            f'Every control path of "{owner}" must end with break or recur',
        )


def apply_recursion_function(
    fn: RecursionFunction,
    args: list[LispValue],
    environment: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    def check_args(step_args: list[LispValue]) -> None:
        assert_number_of_parameters(fn.name, len(step_args), len(fn.parameters))

    def step(step_args: list[LispValue]) -> LispValue:
        return evaluate_fn(fn.body, activate(fn, step_args), environment, True)

    return trampoline(
        step, args, check_args, fn.name, "REQUIRE_RECURSION_FUNCTION_RETURN_ONE_VALUE"
    )


def apply(
    fn: LispValue,
    args: list[LispValue],
    op: SExpression,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply an evaluated operator to evaluated arguments.

    `op` is the operator expression as written, used for error reporting.
    """
    if isinstance(fn, NativeFunction):
        assert_number_of_parameters(fn.name, len(args), fn.arity)
        return fn(*args)
    if isinstance(fn, RecursionFunction):
        return apply_recursion_function(fn, args, environment, evaluate_fn)
    if isinstance(fn, Function):
        assert_number_of_parameters(fn.name, len(args), len(fn.parameters))
        return evaluate_fn(fn.body, activate(fn, args), environment)
    raise NsEvalError(
        "IDENTIFIER_NOT_A_FUNCTION",
        {"name": str(op) if isinstance(op, Symbol) else op},
        f'The specified identifier is not a function: "{op}"',
    )
