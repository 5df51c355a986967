"""Core evaluator for the nslisp interpreter.

Implements special-form dispatch, identifier resolution and function
application. Loop control travels by value: `break`/`recur` produce a
LoopSignal that is only allowed to flow back through tail positions of a
`loop` or `defnr` body, where the trampoline consumes it.
"""

from __future__ import annotations

from nslisp import SExpression, LispValue
from nslisp.environment import Environment, normalize_full_name
from nslisp.errors import NsSyntaxError
from nslisp.evaluation.apply import apply
from nslisp.evaluation.special_forms import SPECIAL_FORMS
from nslisp.types.context import Namespace, Scope
from nslisp.types.loop_signal import LoopSignal
from nslisp.types.symbol import Symbol


def evaluate(
    expr: SExpression, context: Namespace | Scope, environment: Environment
) -> LispValue:
    """Evaluate `expr` to a value. A stray break/recur is an error here."""
    return evaluate0(expr, context, environment, False)


def evaluate0(
    expr: SExpression,
    context: Namespace | Scope,
    environment: Environment,
    is_tail: bool = False,
) -> LispValue:
    """
    Core evaluator. With `is_tail` set, `expr` sits in a tail position of a
    loop/defnr body and may return a LoopSignal.
    """
    match expr:
        case int() | float():
            return expr

        case Symbol():
            return lookup(expr, context, environment)

        case [Symbol() as head, *tail] if head in SPECIAL_FORMS:
            result = SPECIAL_FORMS[head](tail, context, environment, evaluate0, is_tail)
            if not is_tail and isinstance(result, LoopSignal):
                raise misplaced_loop_signal(head)
            return result

        case [head, *tail]:
            # The operator may be an identifier, a full name or a nested list.
            fn = evaluate0(head, context, environment)
            args = [evaluate0(arg, context, environment) for arg in tail]
            return apply(fn, args, head, environment, evaluate0)

    raise NsSyntaxError("INVALID_EXPRESSION", {"exp": expr}, "Invalid expression")


def lookup(name: Symbol, context: Namespace | Scope, environment: Environment) -> LispValue:
    """Resolve an identifier.

    Full names go through the registry after relative prefixes are
    normalized against the namespace that ends the current context chain.
    Plain names go through the context (Scope chain or flat Namespace).
    """
    if name.is_full_name:
        namespace = context.namespace
        full_name = normalize_full_name(name.id, namespace.module_name, namespace.name_path)
        return environment.get_identifier_by_full_name(full_name)
    return context.get_identifier(name)


def misplaced_loop_signal(head: Symbol) -> NsSyntaxError:
    return NsSyntaxError(
        "INVALID_BREAK_RECUR_PLACE",
        {"name": str(head)},
        "break/recur can only end a control path of a loop or defnr body",
    )
