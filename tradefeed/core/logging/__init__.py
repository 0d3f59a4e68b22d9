"""Structured JSON logging with per-run trace ids."""

from tradefeed.core.logging.config import LogConfig
from tradefeed.core.logging.logger import (
    JsonLineSink,
    StructuredLogger,
    bind,
    configure_logging,
    get_logger,
    log_context,
    logger,
)

__all__ = [
    "JsonLineSink",
    "LogConfig",
    "StructuredLogger",
    "bind",
    "configure_logging",
    "get_logger",
    "log_context",
    "logger",
]
