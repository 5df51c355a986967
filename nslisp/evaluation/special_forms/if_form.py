from nslisp import EvaluatorFn
from nslisp import SExpression, LispValue
from nslisp.environment import Environment
from nslisp.errors import assert_number_of_parameters
from nslisp.types.context import Namespace, Scope

# Logical true is the number 1; every other value is false.
TRUE = 1


def if_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail: bool = False,
) -> LispValue:
    assert_number_of_parameters("if", len(tail), 3)
    cond_expr, then_expr, else_expr = tail

    cond = evaluate_fn(cond_expr, context, environment)
    if isinstance(cond, (int, float)) and cond == TRUE:
        return evaluate_fn(then_expr, context, environment, is_tail)
    return evaluate_fn(else_expr, context, environment, is_tail)
