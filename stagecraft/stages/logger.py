"""Logger stage — logs the context on the way in and on the way out.

Declare it anywhere in a pipeline::

    component(LoggerStage, log="info")

Options:
    log: the level used, either a level name ("debug", "INFO", ...) or a
        numeric ``logging`` level. Defaults to ``logging.DEBUG``. Every other
        key is ignored.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from stagecraft.pipeline.errors import InvalidOptions
from stagecraft.pipeline.protocol import Component, default_init

logger = logging.getLogger(__name__)


class LoggerOptions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    log: int = logging.DEBUG

    @field_validator("log", mode="before")
    @classmethod
    def _coerce_level(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("log level must be a level name or number")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            level = logging.getLevelName(value.strip().upper())
            if isinstance(level, int):
                return level
        raise ValueError(f"unknown log level {value!r}")


class LoggerStage(Component):
    """Symmetric logging of the context; never changes it."""

    def init(self, options: Any = None) -> int:
        options = default_init(options, stage="LoggerStage")
        try:
            return LoggerOptions.model_validate(options).log
        except ValidationError as exc:
            raise InvalidOptions(f"invalid LoggerStage options: {exc}", stage="LoggerStage") from exc

    def forward(self, context: Any, level: int = logging.DEBUG) -> Any:
        logger.log(level, "%s: %r", datetime.now(timezone.utc).isoformat(), context)
        return context

    def reverse(self, context: Any, level: int = logging.DEBUG) -> Any:
        return self.forward(context, level)
