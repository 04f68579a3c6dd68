"""
Tests for chained environments
"""
from belalang.environment import Environment
from belalang.objects import Integer


def test_get_walks_outward():
    outer = Environment()
    outer.set("x", Integer(1))
    inner = Environment(outer)
    assert inner.get("x") == Integer(1)
    assert inner.get("missing") is None
    assert "x" in inner
    assert "missing" not in inner


def test_set_writes_innermost():
    """
    Test that writes shadow outer bindings instead of changing them.
    """
    outer = Environment()
    outer.set("x", Integer(1))
    inner = outer.capture()
    inner.set("x", Integer(2))
    assert inner.get("x") == Integer(2)
    assert outer.get("x") == Integer(1)


def test_has_here_ignores_outer_scopes():
    outer = Environment()
    outer.set("x", Integer(1))
    inner = Environment(outer)
    assert outer.has_here("x")
    assert not inner.has_here("x")


def test_capture_shares_parent():
    """
    Test that a captured scope sees later writes to its parent.
    """
    outer = Environment()
    child = outer.capture()
    assert child.outer is outer
    outer.set("late", Integer(3))
    assert child.get("late") == Integer(3)


def test_repr():
    env = Environment(Environment())
    env.set("b", Integer(1))
    env.set("a", Integer(2))
    assert repr(env) == "Environment(['a', 'b'], depth=1)"
