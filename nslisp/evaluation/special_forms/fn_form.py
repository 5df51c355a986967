from nslisp import EvaluatorFn
from nslisp import SExpression, LispValue
from nslisp.environment import Environment
from nslisp.errors import assert_number_of_parameters
from nslisp.evaluation.special_forms.params import parameter_list
from nslisp.types.context import Namespace, Scope
from nslisp.types.functions import AnonymousFunction


def fn_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(fn (params...) body): a closure over the current context."""
    assert_number_of_parameters("fn", len(tail), 2)
    params, body = tail
    return AnonymousFunction(parameter_list(params), body, context)
