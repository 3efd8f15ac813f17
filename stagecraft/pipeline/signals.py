"""Forward-phase outcomes.

A forward call may return a bare context, ``Continue(context)`` or
``Halt(context)``. Bare contexts are treated as ``Continue``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Continue:
    """Keep going with the next stage."""

    context: Any

    @property
    def halted(self) -> bool:
        return False


@dataclass(frozen=True)
class Halt:
    """Stop the forward pass; already reached stages still run their reverse phase."""

    context: Any

    @property
    def halted(self) -> bool:
        return True


Outcome = Union[Continue, Halt]


def as_signal(value: Any) -> Outcome:
    if isinstance(value, (Continue, Halt)):
        return value
    return Continue(value)
