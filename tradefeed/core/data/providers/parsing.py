"""Extraction helpers shared by the HTML and JSON source providers."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")
_NUMBER = re.compile(r"\d+(?:,\d{3})*(?:\.\d+)?")


def safe_num(value: Any) -> float | None:
    """Normalize ``"12,345.67"`` style input to a float.

    Thousands separators and any whitespace are stripped. Non-numeric, empty
    and non-finite input yields ``None`` instead of raising.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = _WHITESPACE.sub("", str(value).replace(",", ""))
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def page_text(html: str) -> str:
    """Flatten a page to its body text with whitespace runs collapsed.

    Text nodes are joined without a separator, so patterns must tolerate
    words from adjacent elements running together.
    """
    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup
    return collapse_whitespace(root.get_text())


def table_rows(html: str, min_cells: int = 1) -> list[list[str]]:
    """Return the non-empty ``td``/``th`` texts of every ``tr`` with at least ``min_cells`` cells."""
    soup = BeautifulSoup(html, "html.parser")
    rows: list[list[str]] = []
    for tr in soup.find_all("tr"):
        cells = [collapse_whitespace(cell.get_text()) for cell in tr.find_all(["td", "th"])]
        cells = [cell for cell in cells if cell]
        if len(cells) >= min_cells:
            rows.append(cells)
    return rows


def first_number(text: str | None) -> float | None:
    """Return the first ``1,234.5`` style number found in ``text``."""
    if not text:
        return None
    match = _NUMBER.search(text)
    return safe_num(match.group(0)) if match else None


def search_number(text: str, *patterns: str | re.Pattern[str]) -> float | None:
    """Try ``patterns`` in order; return the first capture group that parses as a number."""
    for pattern in patterns:
        match = re.search(pattern, text)
        if match:
            value = safe_num(match.group(1))
            if value is not None:
                return value
    return None


def iter_objects(document: Any) -> Iterator[Mapping[str, Any]]:
    """Lazily yield every JSON object in ``document``, depth-first, parents before children."""
    stack: list[Iterator[Any]] = [iter([document])]
    while stack:
        try:
            node = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue
        if isinstance(node, Mapping):
            yield node
            stack.append(iter(node.values()))
        elif isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray)):
            stack.append(iter(node))


@dataclass(frozen=True)
class JsonMatchRule:
    """Relevance predicate plus field-synonym priority list for locating a value in arbitrary JSON."""

    name_fields: tuple[str, ...]
    patterns: tuple[re.Pattern[str], ...]
    value_fields: tuple[str, ...]

    def label(self, node: Mapping[str, Any]) -> str:
        for field_name in self.name_fields:
            value = node.get(field_name)
            if value is not None:
                return str(value)
        return ""

    def matches(self, node: Mapping[str, Any]) -> bool:
        label = self.label(node)
        serialized = json.dumps(node, ensure_ascii=False, separators=(",", ":"), default=str)
        blob = f"{label} {serialized}".upper()
        return any(pattern.search(label) or pattern.search(blob) for pattern in self.patterns)

    def pick_value(self, node: Mapping[str, Any]) -> float | None:
        for field_name in self.value_fields:
            value = safe_num(node.get(field_name))
            if value is not None:
                return value
        return None


def find_value(document: Any, rule: JsonMatchRule) -> float | None:
    """Return the first numeric value selected by ``rule`` anywhere in ``document``."""
    for node in iter_objects(document):
        if not rule.matches(node):
            continue
        value = rule.pick_value(node)
        if value is not None:
            return value
    return None


__all__ = [
    "JsonMatchRule",
    "collapse_whitespace",
    "find_value",
    "first_number",
    "iter_objects",
    "page_text",
    "safe_num",
    "search_number",
    "table_rows",
]
