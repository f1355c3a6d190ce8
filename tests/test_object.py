"""Tests for runtime values and scopes."""

from monkey import parse
from monkey.environment import Environment
from monkey.object import (
    FALSE,
    NULL,
    TRUE,
    Array,
    Bool,
    Builtin,
    Function,
    Hash,
    Int,
    ReturnValue,
    String,
    native_bool,
)


def test_display_strings():
    assert Int(-3).to_string() == "-3"
    assert TRUE.to_string() == "true"
    assert FALSE.to_string() == "false"
    assert NULL.to_string() == "null"
    assert String("hi").to_string() == '"hi"'
    assert Array([Int(1), String("a")]).to_string() == '[1, "a"]'
    assert Builtin("len").to_string() == "[builtin func]"
    assert str(Int(7)) == "7"


def test_hash_display_keeps_insertion_order():
    h = Hash({String("b"): Int(2), Int(1): TRUE})
    assert h.to_string() == '{"b": 2, 1: true}'


def test_function_display():
    body = parse("fn(a, b) { a + b }").stmts[0].expr.body
    fn = Function(["a", "b"], body, Environment())
    assert fn.to_string() == "fn(a, b){(a + b)}"
    assert repr(fn) == "Function(params=['a', 'b'])"


def test_type_names():
    assert Int(1).type_name() == "INTEGER"
    assert TRUE.type_name() == "BOOLEAN"
    assert NULL.type_name() == "NULL"
    assert String("").type_name() == "STRING"
    assert Array([]).type_name() == "ARRAY"
    assert Hash({}).type_name() == "HASH"
    assert Builtin("puts").type_name() == "BUILTIN"
    assert ReturnValue(NULL).type_name() == "RETURN_VALUE"


def test_hash_keys_are_type_tagged():
    assert Int(1) != Bool(True)
    assert String("1") != Int(1)
    assert hash(String("a")) == hash(String("a"))
    h = {Int(1): "int", Bool(True): "bool"}
    assert h[Int(1)] == "int"
    assert h[Bool(True)] == "bool"


def test_value_equality():
    assert Int(5) == Int(5)
    assert String("a") == String("a")
    assert Bool(False) == FALSE


def test_native_bool_returns_singletons():
    assert native_bool(True) is TRUE
    assert native_bool(False) is FALSE


def test_environment_lookup_walks_parents():
    outer = Environment()
    outer.bind("a", Int(1))
    inner = Environment(outer)
    inner.bind("b", Int(2))
    assert inner.get("a") == Int(1)
    assert inner.get("b") == Int(2)
    assert outer.get("b") is None
    assert inner.get("missing") is None


def test_inner_binding_shadows_outer():
    outer = Environment()
    outer.bind("a", Int(1))
    inner = Environment(outer)
    inner.bind("a", Int(2))
    assert inner.get("a") == Int(2)
    assert outer.get("a") == Int(1)


def _let(env: Environment, name: str, value) -> Environment:
    env = env.open_let(name)
    env.define(name, value)
    return env


def test_define_fresh_name_goes_to_base():
    env = Environment()
    assert _let(env, "a", Int(1)) is env
    assert env.store == {"a": Int(1)}


def test_define_existing_name_opens_shadow_scope():
    env = Environment()
    _let(env, "a", Int(1))
    child = _let(env, "a", Int(2))
    assert child is not env
    assert child.shadow
    assert child.get("a") == Int(2)
    assert env.get("a") == Int(1)


def test_define_from_shadow_scope_reaches_base():
    env = Environment()
    _let(env, "a", Int(1))
    child = _let(env, "a", Int(2)).capture()
    assert _let(child, "b", Int(3)) is child
    assert env.get("b") == Int(3)
    grandchild = _let(child, "a", Int(4))
    assert grandchild.get("a") == Int(4)
    assert child.get("a") == Int(2)


def test_uncaptured_shadow_scope_is_reused():
    env = Environment()
    _let(env, "a", Int(1))
    child = _let(env, "a", Int(2))
    assert _let(child, "a", Int(3)) is child
    assert child.get("a") == Int(3)
    assert env.get("a") == Int(1)


def test_open_let_without_reuse_always_shadows():
    env = Environment()
    _let(env, "a", Int(1))
    child = _let(env, "a", Int(2))
    assert child.open_let("a", reuse=False) is not child
    assert child.open_let("b", reuse=False) is child
