"""Stage declarations and their compile-time resolution.

A ``StageDeclaration`` is what a pipeline author writes. ``resolve()`` turns it
into a ``FunctionStage`` or a ``ModuleStage``; the compiler only ever sees the
resolved form, so it never has to inspect a stage's kind per invocation.
"""

from __future__ import annotations

import functools
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Union

from stagecraft.pipeline.errors import MissingCapability
from stagecraft.pipeline.guards import ALWAYS, Guard, GuardSpec, as_guard
from stagecraft.pipeline.protocol import default_init

logger = logging.getLogger(__name__)

REQUIRED_CAPABILITIES = ("forward", "reverse")


@dataclass(frozen=True)
class StageDeclaration:
    """``(identity, options, guard)`` as written by the pipeline author."""

    identity: Any
    options: Any = field(default_factory=dict)
    guard: GuardSpec = True


@dataclass(frozen=True)
class FunctionStage:
    """Forward-only stage; options are passed through unresolved."""

    fn: Any
    options: Any
    guard: Guard = ALWAYS
    label: str = ""

    @property
    def reversible(self) -> bool:
        return False


@dataclass(frozen=True)
class ModuleStage:
    """Stateful stage whose options were resolved by ``init`` at compile time."""

    component: Any
    options: Any
    guard: Guard = ALWAYS
    label: str = ""

    @property
    def reversible(self) -> bool:
        return True


ResolvedStage = Union[FunctionStage, ModuleStage]


def is_function_stage(identity: Any) -> bool:
    return inspect.isroutine(identity) or isinstance(identity, functools.partial)


def stage_label(identity: Any) -> str:
    if isinstance(identity, functools.partial):
        identity = identity.func
    if isinstance(identity, type):
        return identity.__name__
    name = getattr(identity, "__name__", None)
    if name and is_function_stage(identity):
        return name
    return type(identity).__name__


def resolve(declaration: StageDeclaration) -> ResolvedStage:
    """Classify a declaration and initialize it if it is a component.

    Component classes are instantiated once with no arguments. ``init`` runs
    exactly once here; any error it raises aborts compilation.
    """
    identity = declaration.identity
    guard = as_guard(declaration.guard)
    label = stage_label(identity)

    if is_function_stage(identity):
        return FunctionStage(fn=identity, options=declaration.options, guard=guard, label=label)

    component = identity() if isinstance(identity, type) else identity
    for capability in REQUIRED_CAPABILITIES:
        if not callable(getattr(component, capability, None)):
            raise MissingCapability(label, capability)

    init = getattr(component, "init", None)
    if callable(init):
        options = init(declaration.options)
    else:
        options = default_init(declaration.options, stage=label)

    logger.debug("Initialized component %s with options %r", label, options)
    return ModuleStage(component=component, options=options, guard=guard, label=label)
