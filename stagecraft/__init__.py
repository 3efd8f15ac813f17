"""
stagecraft: declarative two-phase pipelines. Ordered stages run forward on the
way in and reverse on the way out, each optionally guarded, compiled once into
a single callable.
"""

from stagecraft.__version__ import __version__, __version_info__

__author__ = "stagecraft contributors"

from stagecraft.pipeline import (
    Component,
    CompileConfig,
    CompiledPipeline,
    Continue,
    Halt,
    Pipeline,
    PipelineBuilder,
    component,
    compile_pipeline,
)
from stagecraft.stages import LoggerStage

__all__ = [
    "Component",
    "CompileConfig",
    "CompiledPipeline",
    "Continue",
    "Halt",
    "Pipeline",
    "PipelineBuilder",
    "component",
    "compile_pipeline",
    "LoggerStage",
    "__version__",
    "__version_info__",
]
