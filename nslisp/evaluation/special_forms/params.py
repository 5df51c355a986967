from nslisp import SExpression
from nslisp.errors import NsIdentifierError, NsSyntaxError
from nslisp.types.symbol import Symbol


def parameter_list(params: SExpression) -> list[Symbol]:
    """Validate a parameter list: a list of distinct plain identifiers."""
    if not isinstance(params, list):
        raise NsSyntaxError("INVALID_EXPRESSION", {"exp": params}, "Parameter list expected")
    seen: set[Symbol] = set()
    for p in params:
        if not isinstance(p, Symbol) or p.is_full_name:
            raise NsSyntaxError("INVALID_EXPRESSION", {"exp": p}, f"Invalid parameter name {p!r}")
        if p in seen:
            raise NsIdentifierError(
                "IDENTIFIER_ALREADY_EXIST",
                {"name": str(p)},
                f'Identifier "{p}" has already exists',
            )
        seen.add(p)
    return list(params)
