"""Looping special forms: loop, break, recur.

(loop (param1 param2 ...) (init1 init2 ...) body)

The initial values are evaluated once in the enclosing context. Each
iteration binds the parameters in a fresh child Scope and evaluates the body,
which must end every control path with:

- (recur value1 value2 ...): run the body again with new values
- (break value): leave the loop, `value` is the result of the loop

`break` and `recur` return a LoopSignal instead of jumping; the trampoline in
nslisp.evaluation.apply consumes it.
"""

from __future__ import annotations

from nslisp import SExpression, LispValue, EvaluatorFn
from nslisp.environment import Environment
from nslisp.errors import NsSyntaxError, assert_number_of_parameters
from nslisp.evaluation.apply import trampoline
from nslisp.evaluation.special_forms.params import parameter_list
from nslisp.types.context import Namespace, Scope
from nslisp.types.loop_signal import Continue, Stop


class LoopEval:
    """Implements the (loop ...) form for one activation."""

    def __init__(
        self,
        parameters: list,
        body: SExpression,
        evaluate_fn: EvaluatorFn,
    ):
        self.parameters = parameters
        self.body: SExpression = body
        self.evaluate_fn: EvaluatorFn = evaluate_fn

    def check_args(self, args: list[LispValue]) -> None:
        if len(args) != len(self.parameters):
            raise NsSyntaxError(
                "INCORRECT_NUMBER_OF_LOOP_ARGS",
                {"actual": len(args), "expect": len(self.parameters)},
                "Incorrect number of args for loop",
            )

    def eval(
        self,
        args: list[LispValue],
        context: Namespace | Scope,
        environment: Environment,
    ) -> LispValue:
        def step(step_args: list[LispValue]) -> LispValue:
            # Each iteration gets its own scope
            iteration = Scope(context)
            for name, value in zip(self.parameters, step_args):
                iteration.define(name, value)
            return self.evaluate_fn(self.body, iteration, environment, True)

        return trampoline(step, args, self.check_args, "loop", "REQUIRE_LOOP_RETURN_ONE_VALUE")


def loop_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """Special form (loop params initial-values body)."""
    assert_number_of_parameters("loop", len(tail), 3)
    params, init_exprs, body = tail
    if not isinstance(init_exprs, list):
        raise NsSyntaxError("INVALID_EXPRESSION", {"exp": init_exprs}, "Loop initial values must be a list")
    args = [evaluate_fn(e, context, environment) for e in init_exprs]
    return LoopEval(parameter_list(params), body, evaluate_fn).eval(args, context, environment)


def break_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """Special form (break value)."""
    return Stop([evaluate_fn(e, context, environment) for e in tail])


def recur_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """Special form (recur values...)."""
    return Continue([evaluate_fn(e, context, environment) for e in tail])
