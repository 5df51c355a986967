from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from nslisp import LispValue, SExpression
from nslisp.builtin import register
from nslisp.config import get_default_namespace
from nslisp.environment import Environment
from nslisp.evaluation.evaluator import evaluate
from nslisp.evaluation.loop_check import check_loop_forms
from nslisp.modules.module_loader import load_module, resolve_module
from nslisp.reader.parser import lex, parse, TokenStream
from nslisp.types.context import Namespace

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates nslisp code against a private Environment.

    The native.* and builtin namespaces are registered at construction.
    Code that does not name a namespace runs in the default namespace
    (`user` unless configured otherwise). Independent instances share no state.
    """

    def __init__(
        self,
        module_roots: Optional[Iterable[str | Path]] = None,
        default_namespace: Optional[str] = None,
    ):
        self.environment: Environment = Environment()
        register(self.environment)

        self.default_namespace: Namespace = self.environment.create_namespace(
            default_namespace or get_default_namespace()
        )
        self.module_roots: list[Path] | None = (
            [Path(p) for p in module_roots] if module_roots is not None else None
        )
        self.loaded_modules: set[str] = set()
        self.environment.module_resolver = self._resolve_module

    def eval_expr(self, expr: SExpression, namespace: Optional[Namespace] = None) -> LispValue:
        """Check and evaluate one parsed expression."""
        check_loop_forms(expr)
        return evaluate(expr, namespace or self.default_namespace, self.environment)

    def eval_from_string(self, text: str) -> LispValue:
        """Evaluate exactly one expression in the default namespace.

        Tokens after the first complete expression are ignored.
        """
        expr, rest = parse(lex(text))
        if rest:
            logger.debug("eval_from_string: ignoring %d trailing tokens", len(rest))
        return self.eval_expr(expr)

    def eval_from_string_multi_exps(self, text: str) -> LispValue:
        """Evaluate every top-level expression in order; return the last value."""
        result: LispValue = None
        for expr in TokenStream(lex(text)).parse_all():
            result = self.eval_expr(expr)
        return result

    def load_module_from_string(self, module_name: str, text: str) -> Namespace:
        """Load a whole module: every top-level form runs in namespace `module_name`.

        All forms are parsed and checked before any of them is evaluated.
        If a form fails, the namespaces created by the load are removed again
        and the module counts as not loaded.
        """
        exprs = list(TokenStream(lex(text)).parse_all())
        for expr in exprs:
            check_loop_forms(expr)

        existing = self.environment.name_paths()
        loaded_before = set(self.loaded_modules)
        namespace = self.environment.create_namespace(module_name)
        self.loaded_modules.add(module_name)
        logger.debug("evaluating module %s (%d forms)", module_name, len(exprs))
        try:
            for expr in exprs:
                evaluate(expr, namespace, self.environment)
        except Exception:
            logger.debug("module %s failed, discarding its namespaces", module_name)
            self.loaded_modules.intersection_update(loaded_before)
            self.loaded_modules.discard(module_name)
            for name_path in self.environment.name_paths() - existing:
                self.environment.remove_namespace(name_path)
            raise
        return namespace

    def load_module(self, module_name: str) -> Namespace:
        """Load `module_name` from the module roots, once."""
        if module_name in self.loaded_modules:
            return self.environment.get_namespace(module_name)
        return load_module(self, module_name, self.module_roots)

    def _resolve_module(self, module_name: str) -> bool:
        if module_name in self.loaded_modules:
            return False
        if resolve_module(module_name, self.module_roots) is None:
            return False
        self.load_module(module_name)
        return True


def eval_from_string(text: str) -> LispValue:
    """Evaluate one expression in a freshly constructed interpreter."""
    return Interpreter().eval_from_string(text)
