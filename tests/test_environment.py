import pytest

from wisp.errors import WispInvalidSymbol, WispUnboundSymbol
from wisp.types.environment import Environment
from wisp.types.value import Value


def test_define_and_lookup(env):
    env.define("x", Value.i64(1))
    assert env.lookup("x") == Value.i64(1)
    assert env.lookup(Value.atom("x")) == Value.i64(1)


def test_lookup_unbound_raises(env):
    with pytest.raises(WispUnboundSymbol):
        env.lookup("missing")


@pytest.mark.parametrize("name", ["", Value.string("x"), Value.i64(1), 3])
def test_define_rejects_non_atoms(env, name):
    with pytest.raises(WispInvalidSymbol):
        env.define(name, Value.nil())


def test_nested_scopes_shadow_and_fall_back(env):
    env.define("x", Value.i64(1))
    env.define("y", Value.i64(2))
    inner = Environment(env)
    inner.define("x", Value.i64(10))
    assert inner.lookup("x") == Value.i64(10)
    assert inner.lookup("y") == Value.i64(2)
    assert env.lookup("x") == Value.i64(1)
    assert inner.find("y") is env
    assert "y" in inner
    assert "z" not in inner


def test_set_updates_the_defining_frame(env):
    env.define("x", Value.i64(1))
    inner = Environment(env)
    inner.set("x", Value.i64(5))
    assert env.lookup("x") == Value.i64(5)
    assert "x" not in inner.vars


def test_set_unbound_raises(env):
    with pytest.raises(WispUnboundSymbol):
        env.set("nope", Value.nil())


def test_bindings_own_their_values(env):
    xs = Value.list([Value.i64(1)])
    env.define("xs", xs)
    xs.push(Value.i64(2))
    fetched = env.lookup("xs")
    fetched.push(Value.i64(3))
    assert env.lookup("xs").debug() == "(1)"


def test_builtin_binding(env):
    plus = env.lookup("+")
    assert plus.is_builtin()
    assert plus.function([Value.i64(1), Value.f64(2.5)]) == Value.f64(3.5)


def test_names_innermost_first_without_duplicates(env):
    env.define("a", Value.nil())
    inner = Environment(env)
    inner.define("a", Value.nil())
    inner.define("b", Value.nil())
    assert list(inner.names()) == ["a", "b", "+"]


def test_str_and_repr(env):
    env.define("s", Value.string("hi"))
    inner = Environment(env)
    inner.define("n", Value.i64(1))
    assert str(inner) == "{n: 1} -> ..."
    assert repr(inner).startswith("<Environment chain: {n: 1} -> {+: <+ at ")
    assert repr(inner).endswith(', s: "hi"}>')
