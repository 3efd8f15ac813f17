"""Two-phase stage pipelines.

Stages run ``forward`` in declaration order and ``reverse`` in mirrored order,
threading one context value through every call. Declarations are compiled once
into a single composed callable.
"""

from stagecraft.pipeline.errors import InvalidOptions, MissingCapability, PipelineError
from stagecraft.pipeline.signals import Continue, Halt, as_signal
from stagecraft.pipeline.protocol import Component, StageComponent, default_init
from stagecraft.pipeline.guards import ALWAYS, NEVER, all_of, any_of, as_guard, guarded, has_key, key_equals, negate
from stagecraft.pipeline.declaration import FunctionStage, ModuleStage, StageDeclaration, resolve
from stagecraft.pipeline.config import CompileConfig
from stagecraft.pipeline.compiler import CompiledPipeline, compile_pipeline
from stagecraft.pipeline.builder import Pipeline, PipelineBuilder, component

__all__ = [
    "PipelineError",
    "InvalidOptions",
    "MissingCapability",
    "Continue",
    "Halt",
    "as_signal",
    "Component",
    "StageComponent",
    "default_init",
    "ALWAYS",
    "NEVER",
    "as_guard",
    "guarded",
    "key_equals",
    "has_key",
    "all_of",
    "any_of",
    "negate",
    "StageDeclaration",
    "FunctionStage",
    "ModuleStage",
    "resolve",
    "CompileConfig",
    "CompiledPipeline",
    "compile_pipeline",
    "Pipeline",
    "PipelineBuilder",
    "component",
]
