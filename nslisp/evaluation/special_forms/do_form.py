from nslisp import EvaluatorFn
from nslisp import SExpression, LispValue
from nslisp.environment import Environment
from nslisp.types.context import Namespace, Scope


def do_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail: bool = False,
) -> LispValue:
    """(do body...): evaluate in a fresh child Scope, return the last value."""
    block = Scope(context)
    result: LispValue = None
    for e in tail[:-1]:
        evaluate_fn(e, block, environment)
    if tail:
        result = evaluate_fn(tail[-1], block, environment, is_tail)
    return result
