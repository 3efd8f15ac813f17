"""Compile-time errors raised while building a pipeline.

Errors raised by a stage's ``forward``/``reverse`` during invocation are not
wrapped; they reach the caller of ``run()`` unchanged.
"""

from __future__ import annotations

from typing import Any, Optional


class PipelineError(Exception):
    """Base class for stagecraft errors."""

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class InvalidOptions(PipelineError, ValueError):
    """A stage's options are not a valid option mapping."""

    @classmethod
    def for_value(cls, options: Any, stage: Optional[str] = None) -> InvalidOptions:
        where = f" for {stage}" if stage else ""
        return cls(
            f"options{where} must be a mapping of option names, got {type(options).__name__}",
            stage=stage,
        )


class MissingCapability(PipelineError, TypeError):
    """A stateful stage does not expose a required operation."""

    def __init__(self, stage: str, capability: str):
        super().__init__(f"{stage} component must implement {capability}()", stage=stage)
        self.capability = capability
