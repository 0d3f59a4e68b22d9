"""JSON-lines logging on top of loguru.

Every event is written as one JSON object carrying the run's trace id. The
keys ``source``, ``run`` and ``error_code`` are lifted to the top level so a
failing upstream can be grepped across runs; anything else bound to the
event or to the surrounding :func:`log_context` lands under ``context``.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Any, IO, Iterator
from uuid import uuid4

from loguru import logger
from loguru._logger import Logger as _LoguruLogger  # type: ignore[attr-defined]

from tradefeed.core.logging.config import LogConfig

TOP_LEVEL_KEYS = ("source", "run", "error_code")

_trace_id: ContextVar[str | None] = ContextVar("tradefeed_trace_id", default=None)
_bound_context: ContextVar[dict[str, Any]] = ContextVar("tradefeed_log_context", default={})


def _active_trace_id() -> str:
    trace_id = _trace_id.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _trace_id.set(trace_id)
    return trace_id


def _inject_context(record: dict[str, Any]) -> None:
    """loguru patcher: merge the ambient context into ``record["extra"]``."""
    extra = record["extra"]
    extra.setdefault("trace_id", _active_trace_id())
    for key, value in _bound_context.get().items():
        if extra.get(key) is None:
            extra[key] = value


def _to_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    return repr(value)


def render_event(record: dict[str, Any]) -> dict[str, Any]:
    """Build the JSON payload for one loguru record."""
    extra = dict(record["extra"])
    event: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "trace_id": extra.pop("trace_id", None),
    }
    for key in TOP_LEVEL_KEYS:
        event[key] = extra.pop(key, None)
    if extra:
        event["context"] = extra
    if record["exception"] is not None:
        event["exception"] = str(record["exception"].value)
    return event


class JsonLineSink:
    """loguru sink writing one JSON object per line to a stream or a file path."""

    def __init__(self, target: IO[str] | str | Path) -> None:
        if isinstance(target, (str, Path)):
            path = Path(target)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._path: Path | None = path
            self._stream: IO[str] | None = None
        else:
            self._path = None
            self._stream = target

    def __call__(self, message: Any) -> None:
        line = json.dumps(render_event(message.record), ensure_ascii=False, default=_to_json) + "\n"
        if self._path is not None:
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line)
            return
        self._stream.write(line)
        self._stream.flush()


def _apply(config: LogConfig) -> None:
    level = config.level.upper()
    handlers: list[dict[str, Any]] = []
    if config.console_output:
        # stdout is reserved for command output
        handlers.append({"sink": JsonLineSink(config.console_stream or sys.stderr), "level": level})
    if config.file_output and config.file_path:
        handlers.append({"sink": JsonLineSink(config.file_path), "level": level})
    logger.configure(handlers=handlers, patcher=_inject_context, extra=dict(config.extra))


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """Replace all sinks according to ``level`` and :class:`LogConfig` fields."""
    _apply(LogConfig(level=level, **kwargs))


class StructuredLogger:
    """A configured logger plus a trace-scoped context helper."""

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = config or LogConfig()
        _apply(self.config)
        self.logger: _LoguruLogger = logger

    def configure(self, **kwargs: Any) -> None:
        self.config = self.config.model_copy(update=kwargs)
        _apply(self.config)

    @contextmanager
    def context(self, *, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
        with log_context(trace_id=trace_id, **extra) as active:
            yield active


def get_logger(name: str | None = None) -> _LoguruLogger:
    """Return the shared logger, bound to ``logger_name`` when ``name`` is given."""
    return logger.bind(logger_name=name) if name else logger


def bind(**kwargs: Any) -> _LoguruLogger:
    return logger.bind(**kwargs)


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Give every event logged inside the block a fresh (or the given) trace id and ``extra``."""
    active = trace_id or uuid4().hex
    trace_token = _trace_id.set(active)
    context_token = _bound_context.set({**_bound_context.get(), **extra})
    try:
        yield active
    finally:
        _bound_context.reset(context_token)
        _trace_id.reset(trace_token)


configure_logging()


__all__ = [
    "JsonLineSink",
    "StructuredLogger",
    "TOP_LEVEL_KEYS",
    "bind",
    "configure_logging",
    "get_logger",
    "log_context",
    "logger",
    "render_event",
]
