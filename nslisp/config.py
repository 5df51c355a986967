from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


# Defaults
_DEFAULT_MODULES_DIRS = [Path('.')]
_DEFAULT_NAMESPACE = 'user'
_DEFAULT_MODULE_SUFFIX = '.nsl'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_modules_roots() -> List[Path]:
    return paths_from_env('NSLISP_MODULES_PATH', _DEFAULT_MODULES_DIRS)


def get_default_namespace() -> str:
    return os.environ.get('NSLISP_DEFAULT_NAMESPACE') or _DEFAULT_NAMESPACE


def get_module_suffix() -> str:
    suffix = os.environ.get('NSLISP_MODULE_SUFFIX') or _DEFAULT_MODULE_SUFFIX
    # accept "nsl" as well as ".nsl"
    return suffix if suffix.startswith('.') else '.' + suffix
