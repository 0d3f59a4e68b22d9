"""Row renderers for command output: a Rich table for people, JSON Lines for scripts."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

PLACEHOLDER = "—"

Row = Mapping[str, object]


class OutputFormatter:
    """Base class; subclasses write ``rows`` restricted to ``columns`` onto ``stream``."""

    name: str

    def render(
        self,
        rows: Sequence[Row],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        title: str | None = None,
    ) -> None:
        raise NotImplementedError


def _column_names(rows: Sequence[Row], columns: Sequence[str] | None) -> list[str]:
    if columns:
        return list(columns)
    return list(rows[0]) if rows else []


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Rich table; ``None`` and non-finite numbers show as the placeholder glyph."""

    name: str = "table"
    no_color: bool = False
    digits: int = 4

    def render(
        self,
        rows: Sequence[Row],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        title: str | None = None,
    ) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)
        names = _column_names(rows, columns)
        if names:
            table = Table(*names, box=SIMPLE, title=title, header_style="" if self.no_color else "bold")
            for row in rows:
                table.add_row(*(self.cell(row.get(name)) for name in names))
            console.print(table)
        if not rows:
            console.print("No data available.")

    def cell(self, value: object) -> str:
        if value is None:
            return PLACEHOLDER
        if isinstance(value, bool):
            return "yes" if value else "no"
        if isinstance(value, float):
            return f"{value:.{self.digits}f}" if math.isfinite(value) else PLACEHOLDER
        return str(value)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """One JSON object per row; ``title`` is ignored."""

    name: str = "jsonl"

    def render(
        self,
        rows: Sequence[Row],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        title: str | None = None,
    ) -> None:
        for row in rows:
            payload = {name: row.get(name) for name in columns} if columns else dict(row)
            stream.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
        stream.flush()


_FORMATTERS: dict[str, Callable[[bool], OutputFormatter]] = {
    "table": lambda no_color: TableFormatter(no_color=no_color),
    "jsonl": lambda no_color: JSONLFormatter(),
}


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    factory = _FORMATTERS.get(name.strip().lower())
    if factory is None:
        raise ValueError(f"Unsupported format '{name}'. Available formats: {', '.join(_FORMATTERS)}.")
    return factory(no_color)


__all__ = ["JSONLFormatter", "OutputFormatter", "PLACEHOLDER", "TableFormatter", "create_formatter"]
