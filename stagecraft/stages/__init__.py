"""Ready-made stages."""

from stagecraft.stages.logger import LoggerOptions, LoggerStage

__all__ = ["LoggerStage", "LoggerOptions"]
