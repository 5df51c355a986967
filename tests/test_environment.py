import pytest

from nslisp.environment import Environment, normalize_full_name, split_full_name
from nslisp.errors import NsIdentifierError, NsSyntaxError
from nslisp.interpreter import Interpreter, eval_from_string
from nslisp.types.context import Namespace, Scope
from nslisp.types.functions import NativeFunction
from nslisp.types.symbol import Symbol


A = Symbol("a")
B = Symbol("b")


@pytest.mark.parametrize(
    "full_name,module_name,current,expected",
    [
        ("module.x", "a", "a.b.c", "a.x"),
        ("module.d.x", "a", "a.b.c", "a.d.x"),
        ("current.x", "a", "a.b.c", "a.b.c.x"),
        ("parent.x", "a", "a.b.c", "a.b.x"),
        ("parent.parent.x", "a", "a.b.c", "a.x"),
        ("parent.d.x", "a", "a.b", "a.d.x"),
        ("foo.x", "a", "a.b.c", "foo.x"),
        ("modules.x", "a", "a.b.c", "modules.x"),
    ],
)
def test_normalize_full_name(full_name, module_name, current, expected):
    assert normalize_full_name(full_name, module_name, current) == expected


@pytest.mark.parametrize(
    "full_name,current,remain",
    [
        ("parent.x", "a", "x"),
        ("parent.parent.parent.x", "a.b.c", "x"),
        ("parent.parent.y.x", "a", "parent.y.x"),
    ],
)
def test_normalize_relative_path_out_of_range(full_name, current, remain):
    with pytest.raises(NsSyntaxError) as exc:
        normalize_full_name(full_name, "a", current)
    assert exc.value.code == "RELATIVE_PATH_ERROR"
    assert exc.value.data == {"relativePath": remain}


def test_split_full_name():
    assert split_full_name("a.b.c") == ("a.b", Symbol("c"))
    assert split_full_name("a.b") == ("a", Symbol("b"))


@pytest.mark.parametrize("full_name", ["a", ".a", "a."])
def test_split_invalid_full_name(full_name):
    with pytest.raises(NsSyntaxError) as exc:
        split_full_name(full_name)
    assert exc.value.code == "INVALID_EXPRESSION"


def test_symbol_full_name():
    assert Symbol("a.b").is_full_name
    assert not Symbol("a").is_full_name
    assert not Symbol(".a").is_full_name
    assert Symbol("a") == Symbol("a")
    assert Symbol("a") != "a"


# -------------------------------
# Environment registry
# -------------------------------
def test_create_namespace_is_idempotent():
    env = Environment()
    ns = env.create_namespace("foo.bar")
    assert env.create_namespace("foo.bar") is ns
    assert env.get_namespace("foo.bar") is ns
    assert env.has_namespace("foo.bar")
    assert not env.has_namespace("foo")


def test_get_missing_namespace():
    with pytest.raises(NsIdentifierError) as exc:
        Environment().get_namespace("nope")
    assert exc.value.code == "NAMESPACE_NOT_FOUND"
    assert exc.value.data == {"namePath": "nope"}


def test_get_identifier_by_full_name():
    env = Environment()
    env.create_namespace("foo.bar").define(A, 1)
    assert env.get_identifier_by_full_name("foo.bar.a") == 1


def test_interpreter_registers_namespaces(itp):
    for name_path in ("native.i64", "native.f64", "native.i32", "native.f32", "builtin", "user"):
        assert itp.environment.has_namespace(name_path)
    add = itp.environment.get_identifier_by_full_name("native.i64.add")
    assert isinstance(add, NativeFunction)
    assert add.arity == 2


def test_interpreters_are_independent():
    first, second = Interpreter(), Interpreter()
    first.eval_from_string("(const a 1)")
    with pytest.raises(NsIdentifierError):
        second.eval_from_string("a")
    second.eval_from_string("(const a 2)")
    assert first.eval_from_string("a") == 1


def test_module_level_eval_from_string():
    assert eval_from_string("(native.i64.add 1 2)") == 3
    eval_from_string("(const a 1)")
    # every call gets a fresh interpreter
    assert eval_from_string("(const a 2)") == 2


def test_default_namespace_argument():
    itp = Interpreter(default_namespace="app.main")
    itp.eval_from_string("(const a 1)")
    assert itp.default_namespace.name_path == "app.main"
    assert itp.eval_from_string("(builtin.val current.a)") == 1
    assert itp.environment.get_identifier_by_full_name("app.main.a") == 1


def test_default_namespace_from_env(monkeypatch):
    monkeypatch.setenv("NSLISP_DEFAULT_NAMESPACE", "scratch")
    itp = Interpreter()
    itp.eval_from_string("(const a 5)")
    assert itp.environment.get_identifier_by_full_name("scratch.a") == 5
    assert not itp.environment.has_namespace("user")


# -------------------------------
# Namespace and Scope
# -------------------------------
def test_namespace_define_and_lookup():
    ns = Namespace("foo.bar")
    assert ns.define(A, 1) == 1
    assert ns.exists(A)
    assert not ns.exists(B)
    assert ns.get_identifier(A) == 1
    assert ns.namespace is ns
    assert ns.module_name == "foo"


def test_namespace_define_twice():
    ns = Namespace("foo")
    ns.define(A, 1)
    with pytest.raises(NsIdentifierError) as exc:
        ns.define(A, 2)
    assert exc.value.code == "IDENTIFIER_ALREADY_EXIST"
    assert exc.value.data == {"name": "a"}


def test_namespace_missing_identifier():
    with pytest.raises(NsIdentifierError) as exc:
        Namespace("foo").get_identifier(A)
    assert exc.value.code == "IDENTIFIER_NOT_FOUND"
    assert exc.value.data == {"name": "a"}


def test_namespace_rejects_full_names():
    with pytest.raises(NsSyntaxError) as exc:
        Namespace("foo").define(Symbol("x.y"), 1)
    assert exc.value.code == "INVALID_EXPRESSION"


def test_namespace_update():
    ns = Namespace("foo")
    ns.update({A: 1, B: 2})
    assert ns.get_identifier(B) == 2


def test_scope_chain_lookup():
    ns = Namespace("foo")
    ns.define(A, 1)
    outer = Scope(ns)
    outer.define(B, 2)
    inner = Scope(outer)
    assert inner.get_identifier(A) == 1
    assert inner.get_identifier(B) == 2
    assert inner.exists(A) and inner.exists(B)
    assert not inner.exists(Symbol("c"))
    assert inner.namespace is ns


def test_scope_shadowing():
    ns = Namespace("foo")
    outer = Scope(ns)
    outer.define(A, 1)
    inner = Scope(outer)
    inner.define(A, 2)
    assert inner.get_identifier(A) == 2
    assert outer.get_identifier(A) == 1
    with pytest.raises(NsIdentifierError) as exc:
        inner.define(A, 3)
    assert exc.value.code == "IDENTIFIER_ALREADY_EXIST"


def test_scope_assign_nearest():
    outer = Scope(Namespace("foo"))
    outer.define(A, 1)
    inner = Scope(outer)
    assert inner.assign(A, 5) == 5
    assert outer.get_identifier(A) == 5
    assert A not in inner.vars


def test_scope_assign_does_not_reach_namespace():
    ns = Namespace("foo")
    ns.define(A, 1)
    scope = Scope(ns)
    assert scope.find(A) is None
    with pytest.raises(NsIdentifierError) as exc:
        scope.assign(A, 2)
    assert exc.value.code == "IDENTIFIER_NOT_FOUND"
    assert ns.get_identifier(A) == 1


def test_scope_missing_identifier():
    with pytest.raises(NsIdentifierError) as exc:
        Scope(Scope(Namespace("foo"))).get_identifier(A)
    assert exc.value.code == "IDENTIFIER_NOT_FOUND"
    assert exc.value.data == {"name": "a"}


def test_scope_repr_shows_chain():
    ns = Namespace("foo")
    scope = Scope(ns)
    scope.define(A, 1.0)
    assert repr(scope) == "<Scope chain: {a: 1.0} -> <Namespace foo (0 identifiers)>>"
    assert str(scope) == "{a: 1.0} -> ..."


def test_remove_namespace():
    env = Environment()
    env.create_namespace("foo")
    env.create_namespace("foo.bar")
    env.remove_namespace("foo.bar")
    assert env.name_paths() == {"foo"}
    # removing twice is harmless
    env.remove_namespace("foo.bar")
    assert not env.has_namespace("foo.bar")
