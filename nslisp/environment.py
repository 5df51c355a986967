"""Namespace registry for one interpreter instance.

- namePath is the dotted path of a namespace; its first segment is the module name.
- fullName is the full name of an identifier: namePath + '.' + identifierName.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from nslisp import LispValue
from nslisp.errors import NsIdentifierError, NsSyntaxError
from nslisp.types.context import Namespace
from nslisp.types.symbol import Symbol

logger = logging.getLogger(__name__)

MODULE_PREFIX = "module."
CURRENT_PREFIX = "current."
PARENT_PREFIX = "parent."


class Environment:
    def __init__(self):
        self._namespaces: Dict[str, Namespace] = {}
        # Called with a module name when `use` needs a namespace that is not loaded
        self.module_resolver: Optional[Callable[[str], object]] = None

    def create_namespace(self, name_path: str) -> Namespace:
        """Create and return the namespace at `name_path`, or the existing one."""
        namespace = self._namespaces.get(name_path)
        if namespace is None:
            namespace = Namespace(name_path)
            self._namespaces[name_path] = namespace
            logger.debug("created namespace %s", name_path)
        return namespace

    def get_namespace(self, name_path: str) -> Namespace:
        namespace = self._namespaces.get(name_path)
        if namespace is None:
            raise NsIdentifierError(
                "NAMESPACE_NOT_FOUND",
                {"namePath": name_path},
                f'Namespace "{name_path}" not found',
            )
        return namespace

    def has_namespace(self, name_path: str) -> bool:
        return name_path in self._namespaces

    def get_identifier_by_full_name(self, full_name: str) -> LispValue:
        name_path, identifier_name = split_full_name(full_name)
        return self.get_namespace(name_path).get_identifier(identifier_name)

    def name_paths(self) -> set[str]:
        return set(self._namespaces)

    def remove_namespace(self, name_path: str) -> None:
        """Drop a namespace from the registry; a missing one is ignored."""
        if self._namespaces.pop(name_path, None) is not None:
            logger.debug("removed namespace %s", name_path)


def split_full_name(full_name: str) -> tuple[str, Symbol]:
    """Split `a.b.c` into ("a.b", Symbol("c"))."""
    pos = full_name.rfind(".")
    if pos <= 0 or pos == len(full_name) - 1:
        raise NsSyntaxError(
            "INVALID_EXPRESSION",
            {"exp": full_name},
            f'Invalid identifier full name "{full_name}"',
        )
    return full_name[:pos], Symbol(full_name[pos + 1:])


def normalize_full_name(full_name: str, module_name: str, current_name_path: str) -> str:
    """Resolve `module.`, `current.` and `parent.` prefixes to an absolute name.

    Used both for `use` targets and for relative identifier full names.
    Names without one of these prefixes are returned unchanged.
    """
    if full_name.startswith(MODULE_PREFIX):
        return module_name + full_name[len("module"):]

    if full_name.startswith(CURRENT_PREFIX):
        return current_name_path + full_name[len("current"):]

    if full_name.startswith(PARENT_PREFIX):
        remain = full_name
        prefix = current_name_path
        while remain.startswith(PARENT_PREFIX):
            remain = remain[len(PARENT_PREFIX):]
            last_dot = prefix.rfind(".")
            if last_dot < 0:
                raise NsSyntaxError(
                    "RELATIVE_PATH_ERROR",
                    {"relativePath": remain},
                    "Relative path out of range.",
                )
            prefix = prefix[:last_dot]
        return prefix + "." + remain

    return full_name
