from __future__ import annotations
import sys


class Symbol:
    """An identifier in source code.

    A symbol containing a `.` after its first character is a full name,
    `namePath.identifierName`, resolved through the Environment registry.
    """

    __slots__ = ("id", "_dot")

    def __init__(self, name: str):
        # Interned: equal identifiers share one string object
        self.id: str = sys.intern(name)
        self._dot: int = name.find(".")

    @property
    def is_full_name(self) -> bool:
        return self._dot > 0

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id is other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Symbol({self.id!r})"

    def __str__(self) -> str:
        return self.id
