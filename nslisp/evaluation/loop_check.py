"""Load-time check of break/recur placement.

A `loop` body and a `defnr` body must end every control path with `break`
or `recur`. Tail positions reach through `if` (both branches) and `do` (the
last form). `break`/`recur` anywhere else is rejected.
"""

from __future__ import annotations

from nslisp import SExpression
from nslisp.errors import NsSyntaxError
from nslisp.types.symbol import Symbol

BREAK = Symbol("break")
RECUR = Symbol("recur")
IF = Symbol("if")
DO = Symbol("do")
LOOP = Symbol("loop")
DEFNR = Symbol("defnr")
DEFN = Symbol("defn")
FN = Symbol("fn")


def check_loop_forms(expr: SExpression) -> None:
    """Raise NsSyntaxError if `expr` misplaces break/recur anywhere inside it."""
    _check_value(expr)


def _head(expr: SExpression):
    if isinstance(expr, list) and expr and isinstance(expr[0], Symbol):
        return expr[0]
    return None


def _check_value(expr: SExpression) -> None:
    """`expr` is evaluated for its value: break/recur must not end here."""
    if not isinstance(expr, list):
        return
    head = _head(expr)
    if head in (BREAK, RECUR):
        raise NsSyntaxError(
            "INVALID_BREAK_RECUR_PLACE",
            {"name": str(head)},
            "break/recur can only end a control path of a loop or defnr body",
        )
    if head == LOOP and len(expr) == 4:
        _, params, init_exprs, body = expr
        if isinstance(init_exprs, list):
            for e in init_exprs:
                _check_value(e)
        _check_tail(body, "loop")
        return
    if head == DEFNR and len(expr) == 4:
        _check_tail(expr[3], str(expr[1]))
        return
    # Parameter lists hold names only
    if head == FN and len(expr) == 3:
        _check_value(expr[2])
        return
    if head == DEFN and len(expr) == 4:
        _check_value(expr[3])
        return
    for e in expr:
        _check_value(e)


def _check_tail(expr: SExpression, owner: str) -> None:
    """`expr` is a tail position of a loop/defnr body."""
    head = _head(expr)
    if head in (BREAK, RECUR):
        for e in expr[1:]:
            _check_value(e)
        return
    if head == IF and len(expr) == 4:
        _check_value(expr[1])
        _check_tail(expr[2], owner)
        _check_tail(expr[3], owner)
        return
    if head == DO and len(expr) > 1:
        for e in expr[1:-1]:
            _check_value(e)
        _check_tail(expr[-1], owner)
        return
    if head == IF:
        # Malformed if: only the condition is checked, evaluation reports the arity
        if len(expr) > 1:
            _check_value(expr[1])
        return
    raise NsSyntaxError(
        "REQUIRE_BREAK_OR_RECUR",
        {"name": owner},
        f'Every control path of "{owner}" must end with break or recur',
    )
