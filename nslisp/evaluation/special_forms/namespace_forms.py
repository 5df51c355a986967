from __future__ import annotations

import logging
from typing import List

from nslisp import EvaluatorFn, LispValue, SExpression
from nslisp.environment import Environment, normalize_full_name, split_full_name
from nslisp.errors import NsSyntaxError, assert_number_of_parameters
from nslisp.types.context import Namespace, Scope
from nslisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def _to_name(x: SExpression) -> str:
    if isinstance(x, Symbol):
        return x.id
    raise NsSyntaxError("INVALID_EXPRESSION", {"exp": x}, f"Expected a name, got: {x!r}")


def _normalize(name: str, context: Namespace | Scope) -> str:
    current = context.namespace
    return normalize_full_name(name, current.module_name, current.name_path)


def namespace_form(
    tail: List[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(namespace path body...)

    Creates the namespace at `path` if needed and evaluates the body in it.
    Parallel namespaces do not see each other's identifiers.
    """
    if not tail:
        assert_number_of_parameters("namespace", 0, 1)
    path_expr, *body = tail
    name_path = _normalize(_to_name(path_expr), context)
    namespace = environment.create_namespace(name_path)
    result: LispValue = None
    for e in body:
        result = evaluate_fn(e, namespace, environment)
    return result


def use_form(
    tail: List[SExpression],
    context: Namespace | Scope,
    environment: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(use full.name) or (use full.name alias)

    Binds the identifier named by `full.name` into the current namespace,
    under `alias` or its own last segment. A module that is not loaded yet is
    loaded through the environment's module resolver first.
    """
    if len(tail) not in (1, 2):
        assert_number_of_parameters("use", len(tail), 1)
    if not isinstance(context, Namespace):
        raise NsSyntaxError(
            "INVALID_USE_EXPRESSION_PLACE",
            {},
            "Use expressions can only be used in namespaces",
        )
    full_name = _normalize(_to_name(tail[0]), context)
    name_path, identifier_name = split_full_name(full_name)
    alias = Symbol(_to_name(tail[1])) if len(tail) == 2 else identifier_name

    if not environment.has_namespace(name_path) and environment.module_resolver is not None:
        module_name = name_path.split(".", 1)[0]
        logger.debug("use %s: resolving module %s", full_name, module_name)
        environment.module_resolver(module_name)

    value = environment.get_namespace(name_path).get_identifier(identifier_name)
    return context.define(alias, value)
