"""Sink settings for the JSON-lines logger."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class LogConfig(BaseModel):
    """Where log events go and from which level on.

    ``console_stream`` defaults to ``sys.stderr`` when left unset; tests pass
    an ``io.StringIO`` to capture events.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: str = "INFO"
    console_output: bool = True
    console_stream: Any = None
    file_output: bool = False
    file_path: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return normalized


__all__ = ["LogConfig"]
