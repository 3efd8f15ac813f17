"""Declaration conveniences for building pipelines.

Two equivalent surfaces, both compiling once, up front::

    pipeline = (
        PipelineBuilder("ingest")
        .component(LoggerStage, log="info")
        .component(normalize)
        .component(Audit, guard=key_equals("audited", True))
        .build()
    )

    class Ingest(Pipeline):
        stages = [
            component(LoggerStage, log="info"),
            component(normalize),
            component(Audit, guard=key_equals("audited", True)),
        ]

A ``Pipeline`` subclass compiles when the class is defined, so a bad
declaration fails at import time. Instances are components themselves and can
be declared as a stage of another pipeline; a halt inside the nested pipeline
halts the outer one too.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, ClassVar, List, Optional, Sequence

from stagecraft.pipeline.compiler import CompiledPipeline, compile_pipeline
from stagecraft.pipeline.config import CompileConfig
from stagecraft.pipeline.declaration import StageDeclaration
from stagecraft.pipeline.guards import GuardSpec
from stagecraft.pipeline.protocol import Component
from stagecraft.pipeline.signals import Outcome


def component(identity: Any, guard: GuardSpec = True, **options: Any) -> StageDeclaration:
    """Declare a stage. Keyword arguments become the stage's options."""
    return StageDeclaration(identity=identity, options=options, guard=guard)


class PipelineBuilder:
    """Accumulates declarations in order and compiles them on ``build()``."""

    def __init__(self, name: Optional[str] = None, config: Optional[CompileConfig] = None):
        config = config or CompileConfig()
        if name is not None:
            config = replace(config, name=name)
        self.config = config
        self._declarations: List[StageDeclaration] = []

    @property
    def declarations(self) -> List[StageDeclaration]:
        return list(self._declarations)

    def component(self, identity: Any, guard: GuardSpec = True, **options: Any) -> PipelineBuilder:
        self._declarations.append(component(identity, guard=guard, **options))
        return self

    def add(self, declaration: StageDeclaration) -> PipelineBuilder:
        self._declarations.append(declaration)
        return self

    def build(self) -> CompiledPipeline:
        return compile_pipeline(self._declarations, self.config)


class Pipeline(Component):
    """Base class for pipelines declared as classes.

    Subclasses set ``stages`` (and optionally ``config``). ``reverse`` is a
    hook that runs after every stage has finished; override it to touch the
    final context, though a dedicated component is usually the better place.
    """

    stages: ClassVar[Sequence[StageDeclaration]] = ()
    config: ClassVar[Optional[CompileConfig]] = None
    compiled: ClassVar[CompiledPipeline]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        config = cls.config or CompileConfig()
        if config.name is None:
            config = replace(config, name=cls.__name__)
        cls.compiled = compile_pipeline(cls.stages, config)

    def forward(self, context: Any, options: Any = None) -> Outcome:
        return self.compiled.invoke(context)

    def run(self, context: Any) -> Any:
        outcome = self.compiled.invoke(context)
        return self.reverse(outcome.context)

    __call__ = run


Pipeline.compiled = compile_pipeline((), CompileConfig(name="Pipeline", trace=False))
