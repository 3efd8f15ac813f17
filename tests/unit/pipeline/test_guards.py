"""Unit tests for guard normalization, guarded() and the combinators."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

pytestmark = pytest.mark.unit

from stagecraft.pipeline.guards import (
    ALWAYS,
    NEVER,
    all_of,
    any_of,
    as_guard,
    guarded,
    has_key,
    key_equals,
    negate,
)


class TestAsGuard:
    def test_true_and_none_become_always(self):
        assert as_guard(True) is ALWAYS
        assert as_guard(None) is ALWAYS

    def test_false_becomes_never(self):
        assert as_guard(False) is NEVER

    def test_callable_returned_as_is(self):
        def predicate(ctx):
            return True

        assert as_guard(predicate) is predicate

    def test_rejects_other_values(self):
        with pytest.raises(TypeError, match="guard must be a bool or a callable"):
            as_guard("yes")


class TestGuarded:
    def test_always_returns_call_unwrapped(self):
        call = MagicMock()
        assert guarded(call, ALWAYS) is call

    def test_true_guard_invokes_call(self):
        call = MagicMock(return_value="out")
        wrapped = guarded(call, lambda ctx: True)
        assert wrapped("in") == "out"
        call.assert_called_once_with("in")

    def test_false_guard_passes_context_through(self):
        call = MagicMock()
        wrapped = guarded(call, NEVER)
        ctx = {"untouched": True}
        assert wrapped(ctx) is ctx
        call.assert_not_called()

    def test_guard_sees_live_context(self):
        call = MagicMock(side_effect=lambda ctx: ctx * 2)
        wrapped = guarded(call, lambda ctx: ctx < 10)
        assert wrapped(3) == 6
        assert wrapped(30) == 30
        assert call.call_count == 1


class TestCombinators:
    def test_key_equals_on_mapping(self):
        guard = key_equals("flag", True)
        assert guard({"flag": True})
        assert not guard({"flag": False})
        assert not guard({})

    def test_key_equals_on_object(self):
        guard = key_equals("mode", "preview")
        assert guard(SimpleNamespace(mode="preview"))
        assert not guard(SimpleNamespace())

    def test_key_equals_none_value_distinguishes_missing(self):
        guard = key_equals("x", None)
        assert guard({"x": None})
        assert not guard({})

    def test_has_key(self):
        guard = has_key("user")
        assert guard({"user": None})
        assert not guard({"other": 1})

    def test_all_of(self):
        guard = all_of(has_key("a"), key_equals("b", 2), True)
        assert guard({"a": 1, "b": 2})
        assert not guard({"a": 1, "b": 3})

    def test_any_of(self):
        guard = any_of(key_equals("a", 1), key_equals("b", 2))
        assert guard({"b": 2})
        assert not guard({"a": 0, "b": 0})

    def test_negate(self):
        guard = negate(has_key("skip"))
        assert guard({})
        assert not guard({"skip": True})
