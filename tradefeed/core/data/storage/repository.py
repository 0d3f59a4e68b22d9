"""JSON file persistence for the record time series."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tradefeed.core.exceptions import StorageError
from tradefeed.core.logging import bind
from tradefeed.core.models import Record


class TimeSeriesRepository:
    """Reads and atomically rewrites the whole time-series file.

    The file holds one pretty-printed JSON array. Readers also accept an
    object with a ``rows`` array, which is what the dashboard tolerates.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._logger = bind(component="TimeSeriesRepository", path=str(self.path))

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> list[Record]:
        """Load every record; a missing file is an empty series."""
        if not self.path.exists():
            self._logger.info("Time series file not found, starting empty")
            return []

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"Unable to read time series file: {e}", path=str(self.path)) from e

        rows = self._extract_rows(payload)
        try:
            records = [Record.from_json_dict(row) for row in rows]
        except ValidationError as e:
            raise StorageError(
                f"Time series file contains an invalid record: {e.error_count()} validation errors",
                path=str(self.path),
            ) from e

        self._logger.debug("Loaded time series", rows=len(records))
        return records

    def _extract_rows(self, payload: Any) -> list[dict[str, Any]]:
        if isinstance(payload, dict):
            payload = payload.get("rows")
        if not isinstance(payload, list):
            raise StorageError("Time series file must hold a JSON array or an object with 'rows'", path=str(self.path))
        if not all(isinstance(row, dict) for row in payload):
            raise StorageError("Time series rows must be JSON objects", path=str(self.path))
        return payload

    def save(self, records: Sequence[Record]) -> None:
        """Replace the file with ``records`` via a same-directory temp file and ``os.replace``."""
        content = json.dumps([record.to_json_dict() for record in records], ensure_ascii=False, indent=2) + "\n"
        directory = self.path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Unable to write time series file: {e}", path=str(self.path)) from e

        self._logger.debug("Saved time series", rows=len(records))


__all__ = ["TimeSeriesRepository"]
