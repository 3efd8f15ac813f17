"""Guard evaluation for stage calls.

A guard is a predicate ``context -> bool``. ``ALWAYS`` is the constant-true
guard; calls guarded by it are emitted without any conditional wrapper.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

Guard = Callable[[Any], bool]
GuardSpec = Optional[Union[bool, Guard]]
StageCall = Callable[[Any], Any]

_MISSING = object()


def ALWAYS(context: Any) -> bool:
    return True


def NEVER(context: Any) -> bool:
    return False


def as_guard(declared: GuardSpec) -> Guard:
    """Normalize a declared guard (``True``, ``False``, ``None`` or a callable)."""
    if declared is None or declared is True:
        return ALWAYS
    if declared is False:
        return NEVER
    if callable(declared):
        return declared
    raise TypeError(f"guard must be a bool or a callable, got {type(declared).__name__}")


def guarded(call: StageCall, guard: Guard) -> StageCall:
    """Wrap *call* so it only runs when *guard* holds for the live context.

    When the guard is false the context is returned unchanged and *call* is
    not invoked at all.
    """
    if guard is ALWAYS:
        return call

    def conditional(context: Any) -> Any:
        if guard(context):
            return call(context)
        return context

    return conditional


# ------------------------------------------------------------------ #
# Combinators
# ------------------------------------------------------------------ #


def _lookup(context: Any, key: str) -> Any:
    if isinstance(context, Mapping):
        return context.get(key, _MISSING)
    return getattr(context, key, _MISSING)


def key_equals(key: str, value: Any) -> Guard:
    """True when ``context[key]`` (or ``context.key``) equals *value*."""

    def check(context: Any) -> bool:
        return _lookup(context, key) == value

    check.__name__ = f"key_equals({key!r}, {value!r})"
    return check


def has_key(key: str) -> Guard:
    def check(context: Any) -> bool:
        return _lookup(context, key) is not _MISSING

    check.__name__ = f"has_key({key!r})"
    return check


def all_of(*guards: GuardSpec) -> Guard:
    resolved = [as_guard(g) for g in guards]

    def check(context: Any) -> bool:
        return all(g(context) for g in resolved)

    return check


def any_of(*guards: GuardSpec) -> Guard:
    resolved = [as_guard(g) for g in guards]

    def check(context: Any) -> bool:
        return any(g(context) for g in resolved)

    return check


def negate(guard: GuardSpec) -> Guard:
    inner = as_guard(guard)

    def check(context: Any) -> bool:
        return not inner(context)

    return check
