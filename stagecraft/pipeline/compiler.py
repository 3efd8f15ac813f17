"""Pipeline compiler — folds stage declarations into one composed callable.

``compile_pipeline()`` resolves every declaration once, then builds two
delegate chains out of plain closures:

* the forward chain, folded from the last stage back to the first, so that the
  first declared stage's ``forward`` runs first;
* the reverse chain, wrapped around the forward chain so that the last
  declared component's ``reverse`` runs first once the forward pass returns.

Each individual forward/reverse call is wrapped by its own guard. A forward
call returning ``Halt`` stops the forward chain; the reverse chain then runs
only for stages whose position was reached, the halting stage included.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from stagecraft.observability.tracing import trace_span
from stagecraft.pipeline.config import CompileConfig
from stagecraft.pipeline.declaration import (
    FunctionStage,
    ModuleStage,
    ResolvedStage,
    StageDeclaration,
    resolve,
)
from stagecraft.pipeline.guards import StageCall, guarded
from stagecraft.pipeline.signals import Continue, Halt, Outcome, as_signal

logger = logging.getLogger(__name__)


class _Pass(NamedTuple):
    """Per-invocation result threaded through the composed chains."""

    context: Any
    reached: int  # index of the last stage the forward chain got to
    halted: bool


Chain = Callable[[Any], _Pass]


class CompiledPipeline:
    """A composed ``context -> context`` operation.

    Holds nothing but immutable closures over the resolved stages, so one
    instance can be invoked any number of times, from any number of threads.
    """

    def __init__(self, chain: Chain, stages: Sequence[ResolvedStage], name: Optional[str] = None):
        self._chain = chain
        self._stages: Tuple[ResolvedStage, ...] = tuple(stages)
        self.name = name or "pipeline"

    @property
    def stages(self) -> Tuple[ResolvedStage, ...]:
        return self._stages

    @property
    def labels(self) -> List[str]:
        return [s.label for s in self._stages]

    def __len__(self) -> int:
        return len(self._stages)

    def __repr__(self) -> str:
        return f"<CompiledPipeline {self.name}: {' -> '.join(self.labels) or 'empty'}>"

    def invoke(self, context: Any) -> Outcome:
        """Run both phases and report whether the forward pass halted."""
        result = self._chain(context)
        if result.halted:
            return Halt(result.context)
        return Continue(result.context)

    def run(self, context: Any) -> Any:
        """Run both phases and return the final context."""
        return self._chain(context).context

    __call__ = run


# ------------------------------------------------------------------ #
# Public API
# ------------------------------------------------------------------ #


def compile_pipeline(
    declarations: Iterable[Any],
    config: Optional[CompileConfig] = None,
) -> CompiledPipeline:
    """Compile *declarations*, given in declaration (forward) order.

    Each item is a ``StageDeclaration``, an ``(identity, options, guard)``
    tuple (options and guard optional) or a bare identity. Compilation either
    returns a complete pipeline or raises; errors from ``init`` and missing
    capabilities propagate unchanged.
    """
    config = config or CompileConfig()
    resolved = [resolve(_as_declaration(d)) for d in declarations]

    chain = _fold_forward(resolved, config)
    chain = _fold_reverse(resolved, chain, config)

    pipeline = CompiledPipeline(chain, resolved, name=config.name)
    logger.debug("Compiled %r", pipeline)
    return pipeline


# ------------------------------------------------------------------ #
# Folds
# ------------------------------------------------------------------ #


def _fold_forward(stages: List[ResolvedStage], config: CompileConfig) -> Chain:
    last_index = len(stages) - 1

    def terminal(context: Any) -> _Pass:
        return _Pass(context, last_index, False)

    chain: Chain = terminal
    for index in range(last_index, -1, -1):
        chain = _link_forward(index, _forward_call(stages[index], config), chain)
    return chain


def _link_forward(index: int, step: StageCall, downstream: Chain) -> Chain:
    def forward(context: Any) -> _Pass:
        outcome = as_signal(step(context))
        if outcome.halted:
            return _Pass(outcome.context, index, True)
        return downstream(outcome.context)

    return forward


def _fold_reverse(stages: List[ResolvedStage], chain: Chain, config: CompileConfig) -> Chain:
    # Wrapping from the last stage outward puts the last reverse innermost.
    for index in range(len(stages) - 1, -1, -1):
        stage = stages[index]
        if not stage.reversible:
            continue
        chain = _link_reverse(index, _reverse_call(stage, config), chain)
    return chain


def _link_reverse(index: int, step: StageCall, upstream: Chain) -> Chain:
    def reverse(context: Any) -> _Pass:
        result = upstream(context)
        if result.reached < index:
            return result
        return result._replace(context=step(result.context))

    return reverse


# ------------------------------------------------------------------ #
# Per-stage calls
# ------------------------------------------------------------------ #


def _forward_call(stage: ResolvedStage, config: CompileConfig) -> StageCall:
    options = stage.options
    if isinstance(stage, FunctionStage):
        fn = stage.fn

        def call(context: Any) -> Any:
            return fn(context, options)

    else:
        forward = stage.component.forward

        def call(context: Any) -> Any:
            return forward(context, options)

    return guarded(_traced(call, "forward", stage, config), stage.guard)


def _reverse_call(stage: ModuleStage, config: CompileConfig) -> StageCall:
    options = stage.options
    reverse = stage.component.reverse

    def call(context: Any) -> Any:
        return reverse(context, options)

    return guarded(_traced(call, "reverse", stage, config), stage.guard)


def _traced(call: StageCall, phase: str, stage: ResolvedStage, config: CompileConfig) -> StageCall:
    if not config.trace:
        return call

    span_name = f"pipeline.{phase}.{stage.label}"
    attributes = {"pipeline": config.name or "pipeline", "phase": phase, "stage": stage.label}
    level = config.trace_levelno

    def traced(context: Any) -> Any:
        with trace_span(span_name, attributes, level=level) as span:
            result = call(context)
            if isinstance(result, Halt):
                span.attributes["halted"] = True
            return result

    return traced


def _as_declaration(item: Any) -> StageDeclaration:
    if isinstance(item, StageDeclaration):
        return item
    if isinstance(item, tuple):
        return StageDeclaration(*item)
    return StageDeclaration(item)
