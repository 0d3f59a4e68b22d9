"""Data models for tradefeed."""

from tradefeed.core.models.clock import BEIJING_TZ, calendar_date, format_ts, now, parse_ts
from tradefeed.core.models.record import FxRates, Observation, Record, RecordErrors

__all__ = [
    "BEIJING_TZ",
    "calendar_date",
    "format_ts",
    "now",
    "parse_ts",
    "FxRates",
    "Observation",
    "Record",
    "RecordErrors",
]
