"""Stage contract — the unit of pipeline composition.

Two kinds of stage can be declared in a pipeline:

* **Function stages**: any plain function ``fn(context, options) -> context``.
  They run on the forward pass only and receive their options unresolved.
* **Component stages**: objects exposing ``init``, ``forward`` and ``reverse``.
  ``init`` runs once when the pipeline is compiled; ``forward`` runs in
  declaration order and ``reverse`` in the mirrored order once every reached
  ``forward`` has returned.

Any class with matching methods satisfies ``StageComponent`` (structural
subtyping). Subclassing ``Component`` supplies pass-through defaults, so a
minimal component overrides nothing.

The context should have the same type going out as it had coming in. Nothing
enforces it, but pipelines get confusing fast when stages break that rule.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Protocol, Union, runtime_checkable

from stagecraft.pipeline.errors import InvalidOptions
from stagecraft.pipeline.signals import Continue, Halt

Options = Mapping[str, Any]
ForwardResult = Union[Any, Continue, Halt]
FunctionStageFn = Callable[[Any, Any], ForwardResult]


def default_init(options: Optional[Options], stage: Optional[str] = None) -> Dict[str, Any]:
    """Validate *options* and return them as a plain dict.

    ``None`` is treated as an empty mapping. Keys must be strings.
    """
    if options is None:
        return {}
    if not isinstance(options, Mapping) or not all(isinstance(k, str) for k in options):
        raise InvalidOptions.for_value(options, stage)
    return dict(options)


@runtime_checkable
class StageComponent(Protocol):
    """A stateful stage with one-time initialization and two phases."""

    def init(self, options: Any) -> Any:
        """Resolve raw options once, at compile time."""
        ...

    def forward(self, context: Any, options: Any) -> ForwardResult:
        """Called on the way in, in declaration order."""
        ...

    def reverse(self, context: Any, options: Any) -> Any:
        """Called on the way out, in reverse declaration order."""
        ...


class Component:
    """Base class providing pass-through defaults for every operation."""

    def init(self, options: Any = None) -> Any:
        return default_init(options, stage=type(self).__name__)

    def forward(self, context: Any, options: Any = None) -> ForwardResult:
        return context

    def reverse(self, context: Any, options: Any = None) -> Any:
        return context
