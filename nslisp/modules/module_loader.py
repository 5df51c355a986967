from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol

from nslisp.config import get_module_suffix, get_modules_roots
from nslisp.types.context import Namespace

logger = logging.getLogger(__name__)


class _HasLoadModuleFromString(Protocol):
    def load_module_from_string(self, module_name: str, text: str) -> Namespace: ...


# Map a module name to a source file underneath a set of roots

def _module_to_relpath(module_name: str) -> Path:
    return Path(*module_name.split('.')).with_suffix(get_module_suffix())


def resolve_module(module_name: str, roots: Optional[Iterable[Path]] = None) -> Optional[Path]:
    rel = _module_to_relpath(module_name)
    for root in (roots if roots is not None else get_modules_roots()):
        candidate = Path(root) / rel
        if candidate.is_file():
            return candidate
    return None


def load_module(itp: _HasLoadModuleFromString, module_name: str, roots: Optional[Iterable[Path]] = None) -> Namespace:
    p = resolve_module(module_name, roots)
    if p is None:
        raise FileNotFoundError(f"Cannot find module '{module_name}' in NSLISP_MODULES_PATH")
    logger.info("loading module %s from %s", module_name, p)
    code = p.read_text(encoding='utf-8')
    return itp.load_module_from_string(module_name, code)
