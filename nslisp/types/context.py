"""Identifier containers for nslisp.

There are two kinds of context, both satisfying the `Context` protocol
(`define`, `exists`, `get_identifier`):

- Namespace: a flat mapping owned by the Environment registry and addressed
  by a dotted path. Holds constants, `defn`/`defnr` functions and host
  registered native functions. It never consults another container.
- Scope: a mapping plus a parent context. Created per `do` block, per
  function activation and per loop iteration. Lookups walk the parent chain,
  so an inner binding shadows an outer one. The chain always ends at a
  Namespace.

A Scope holds a reference to its parent and never to its children, so the
graph of contexts and the function values closing over them has no cycles.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional, Protocol, Union

from nslisp import LispValue
from nslisp.errors import NsIdentifierError, NsSyntaxError
from nslisp.types.symbol import Symbol


class Context(Protocol):
    def define(self, name: Symbol, value: LispValue) -> LispValue: ...

    def exists(self, name: Symbol) -> bool: ...

    def get_identifier(self, name: Symbol) -> LispValue: ...

    @property
    def namespace(self) -> Namespace: ...


def _check_name(name: Symbol) -> None:
    if not isinstance(name, Symbol) or name.is_full_name:
        raise NsSyntaxError(
            "INVALID_EXPRESSION",
            {"exp": name},
            f"Cannot define {name!r} as an identifier",
        )


def _already_exist(name: Symbol) -> NsIdentifierError:
    return NsIdentifierError(
        "IDENTIFIER_ALREADY_EXIST",
        {"name": str(name)},
        f'Identifier "{name}" has already exists',
    )


def _not_found(name: Symbol) -> NsIdentifierError:
    return NsIdentifierError(
        "IDENTIFIER_NOT_FOUND",
        {"name": str(name)},
        f'Identifier "{name}" not found',
    )


class Namespace:
    """Flat, non-inheriting identifier container."""

    __slots__ = ("name_path", "vars")

    def __init__(self, name_path: str):
        self.name_path: str = name_path
        self.vars: dict[Symbol, LispValue] = {}

    @property
    def namespace(self) -> Namespace:
        return self

    @property
    def module_name(self) -> str:
        """The first segment of the path names the module."""
        return self.name_path.split(".", 1)[0]

    def define(self, name: Symbol, value: LispValue) -> LispValue:
        """Bind `name` to `value`, failing if `name` is already bound here."""
        _check_name(name)
        if name in self.vars:
            raise _already_exist(name)
        self.vars[name] = value
        return value

    def exists(self, name: Symbol) -> bool:
        return name in self.vars

    def get_identifier(self, name: Symbol) -> LispValue:
        try:
            return self.vars[name]
        except KeyError:
            raise _not_found(name) from None

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value, used for host registration."""
        for k, v in mapping.items():
            self.define(k, v)

    def __repr__(self) -> str:
        return f"<Namespace {self.name_path} ({len(self.vars)} identifiers)>"


class Scope:
    """Lexically chained identifier container."""

    __slots__ = ("vars", "parent")

    def __init__(self, parent: Union[Namespace, Scope]):
        self.vars: dict[Symbol, LispValue] = {}
        self.parent: Namespace | Scope = parent

    @property
    def namespace(self) -> Namespace:
        """The Namespace terminating this scope chain."""
        ctx: Namespace | Scope = self
        while isinstance(ctx, Scope):
            ctx = ctx.parent
        return ctx

    def define(self, name: Symbol, value: LispValue) -> LispValue:
        """Bind `name` in this level only. Shadowing an ancestor is allowed."""
        _check_name(name)
        if name in self.vars:
            raise _already_exist(name)
        self.vars[name] = value
        return value

    def find(self, name: Symbol) -> Optional[Scope]:
        """Find the nearest Scope in the chain that binds `name`.

        The terminating Namespace is not searched: its bindings are constants.
        """
        ctx: Namespace | Scope = self
        while isinstance(ctx, Scope):
            if name in ctx.vars:
                return ctx
            ctx = ctx.parent
        return None

    def assign(self, name: Symbol, value: LispValue) -> LispValue:
        """Update the nearest existing binding for `name`; never creates one."""
        scope = self.find(name)
        if scope is None:
            raise _not_found(name)
        scope.vars[name] = value
        return value

    def exists(self, name: Symbol) -> bool:
        ctx: Namespace | Scope = self
        while isinstance(ctx, Scope):
            if name in ctx.vars:
                return True
            ctx = ctx.parent
        return ctx.exists(name)

    def get_identifier(self, name: Symbol) -> LispValue:
        ctx: Namespace | Scope = self
        while isinstance(ctx, Scope):
            if name in ctx.vars:
                return ctx.vars[name]
            ctx = ctx.parent
        return ctx.get_identifier(name)

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Scope chain: ")
            ctx: Namespace | Scope = self
            while isinstance(ctx, Scope):
                ctx._write_vars(buffer)
                buffer.write(" -> ")
                ctx = ctx.parent
            buffer.write(repr(ctx))
            buffer.write(">")
            return buffer.getvalue()
