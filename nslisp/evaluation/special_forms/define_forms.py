"""Binding forms: const, let, defn, defnr.

`const`, `defn` and `defnr` bind into a Namespace; `let` binds into the
current Scope. Each returns the bound value.
"""

from nslisp import EvaluatorFn
from nslisp import SExpression, LispValue
from nslisp.environment import Environment
from nslisp.errors import NsSyntaxError, assert_number_of_parameters
from nslisp.evaluation.special_forms.params import parameter_list
from nslisp.types.context import Namespace, Scope
from nslisp.types.functions import RecursionFunction, UserFunction


def const_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(const name value)"""
    assert_number_of_parameters("const", len(tail), 2)
    if not isinstance(context, Namespace):
        raise NsSyntaxError(
            "INVALID_CONST_EXPRESSION_PLACE",
            {},
            "Const expressions can only be defined in namespaces",
        )
    name, val_expr = tail
    return context.define(name, evaluate_fn(val_expr, context, environment))


def let_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(let name value)"""
    assert_number_of_parameters("let", len(tail), 2)
    if not isinstance(context, Scope):
        raise NsSyntaxError(
            "INVALID_LET_EXPRESSION_PLACE",
            {},
            "Let expressions can only be defined in scopes",
        )
    name, val_expr = tail
    return context.define(name, evaluate_fn(val_expr, context, environment))


def _function_form(keyword: str, cls, tail, context):
    assert_number_of_parameters(keyword, len(tail), 3)
    if not isinstance(context, Namespace):
        raise NsSyntaxError(
            "INVALID_DEFN_EXPRESSION_PLACE",
            {},
            f"{keyword.capitalize()} expressions can only be defined in namespaces",
        )
    name, params, body = tail
    # The function captures the namespace it is defined in
    fn = cls(str(name), parameter_list(params), body, context)
    return context.define(name, fn)


def defn_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(defn name (params...) body)"""
    return _function_form("defn", UserFunction, tail, context)


def defnr_form(
    tail: list[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(defnr name (params...) body)

    Like defn, but the body is a loop: every control path ends with
    `break` or `recur`, and `recur` re-enters the function without growing
    the host stack.
    """
    return _function_form("defnr", RecursionFunction, tail, context)
