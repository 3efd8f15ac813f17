"""CompileConfig — knobs applied when a pipeline is compiled.

Plain dataclass configuration. Defaults can be driven by environment
variables so tracing can be switched on without touching code.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

TRACE_ENV_VAR = "STAGECRAFT_TRACE"

_FALSY = ("", "false", "0", "no", "off")


def _trace_from_env() -> bool:
    return os.environ.get(TRACE_ENV_VAR, "false").strip().lower() not in _FALSY


@dataclass
class CompileConfig:
    """Per-pipeline compilation settings."""

    name: Optional[str] = None
    trace: bool = field(default_factory=_trace_from_env)
    trace_level: str = "DEBUG"

    def __post_init__(self):
        level = logging.getLevelName(self.trace_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"trace_level must be a logging level name, got '{self.trace_level}'")
        self.trace_level = self.trace_level.upper()

    @property
    def trace_levelno(self) -> int:
        return logging.getLevelName(self.trace_level)

    @classmethod
    def default(cls, name: Optional[str] = None) -> CompileConfig:
        return cls(name=name)

    @classmethod
    def traced(cls, name: Optional[str] = None, level: str = "DEBUG") -> CompileConfig:
        """Tracing on regardless of the environment."""
        return cls(name=name, trace=True, trace_level=level)
