from nslisp import EvaluatorFn
from nslisp import SExpression, LispValue
from nslisp.environment import Environment
from nslisp.errors import NsSyntaxError, assert_number_of_parameters
from nslisp.types.context import Namespace, Scope
from nslisp.types.symbol import Symbol


def set_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    assert_number_of_parameters("set", len(tail), 2)
    if not isinstance(context, Scope):
        raise NsSyntaxError(
            "INVALID_SET_EXPRESSION_PLACE",
            {},
            "Set expressions can only be used in scopes",
        )
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise NsSyntaxError("INVALID_EXPRESSION", {"exp": var_sym}, f"set first argument must be an identifier, got {var_sym}")
    value = evaluate_fn(val_expr, context, environment)
    return context.assign(var_sym, value)
