import pytest

from nslisp.interpreter import Interpreter


@pytest.fixture
def itp():
    """A fresh interpreter in the default `user` namespace."""
    return Interpreter()


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    # Tests must not depend on the caller's NSLISP_* settings
    for var in ("NSLISP_MODULES_PATH", "NSLISP_DEFAULT_NAMESPACE", "NSLISP_MODULE_SUFFIX"):
        monkeypatch.delenv(var, raising=False)
