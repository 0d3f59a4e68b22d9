"""Slot-deduplicated time series operations.

All functions here are pure: they take the full persisted sequence plus the
new input and return a new list without mutating their arguments.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from tradefeed.core.models import Record, parse_ts

MORNING_SLOT = "09:30"
AFTERNOON_SLOT = "16:00"
SLOT_CUTOFF_HOUR = 13

DEFAULT_RETENTION = 2000
DEFAULT_DEDUP_MINUTES = 10.0


def slot_label(ts: str) -> str:
    """Return ``"09:30"`` for hours 0-12 and ``"16:00"`` for hours 13-23.

    The hour is read straight from the string (characters 11-13); anything
    that is not a number there counts as hour 0.
    """
    hour_text = str(ts)[11:13]
    hour = int(hour_text) if hour_text.isdigit() else 0
    return MORNING_SLOT if hour < SLOT_CUTOFF_HOUR else AFTERNOON_SLOT


def slot_key(ts: str) -> str:
    """Return ``"YYYY-MM-DD|HH:MM"`` for the slot ``ts`` belongs to."""
    return f"{str(ts)[:10]}|{slot_label(ts)}"


def canonical_slot_ts(key: str) -> str:
    """Return the canonical instant of a slot key, e.g. ``2025-01-07T09:30:00+08:00``."""
    date, label = key.split("|", 1)
    return f"{date}T{label}:00+08:00"


def minutes_between(earlier: str | None, later: str | None) -> float:
    """Signed minutes from ``earlier`` to ``later``; ``inf`` when either is unparseable."""
    start = parse_ts(earlier)
    end = parse_ts(later)
    if start is None or end is None:
        return math.inf
    return (end - start).total_seconds() / 60.0


def is_rerun(last: Record | None, incoming: Record, dedup_minutes: float = DEFAULT_DEDUP_MINUTES) -> bool:
    """True when ``incoming`` was captured less than ``dedup_minutes`` after ``last``."""
    if last is None or not last.ts:
        return False
    return minutes_between(last.ts, incoming.ts) < dedup_minutes


def sort_records(rows: Sequence[Record]) -> list[Record]:
    return sorted(rows, key=lambda record: record.order_key)


def merge_record(
    rows: Sequence[Record],
    incoming: Record,
    *,
    retention: int = DEFAULT_RETENTION,
    dedup_minutes: float = DEFAULT_DEDUP_MINUTES,
) -> list[Record]:
    """Merge one new record into the persisted sequence.

    A capture less than ``dedup_minutes`` after the last record replaces it;
    otherwise it is appended. The oldest entries are then evicted down to
    ``retention`` and the result is sorted by ``ts``.
    """
    if retention < 1:
        raise ValueError(f"retention must be at least 1, got {retention}")
    merged = list(rows)
    last = merged[-1] if merged else None
    if is_rerun(last, incoming, dedup_minutes):
        merged[-1] = incoming
    else:
        merged.append(incoming)

    if len(merged) > retention:
        merged = merged[len(merged) - retention :]

    return sort_records(merged)


def compact_records(rows: Sequence[Record]) -> list[Record]:
    """Collapse historical records to one per slot.

    Within a slot the record with the latest ``runTs`` (falling back to
    ``ts``) wins; on equal timestamps the later one in input order wins.
    Survivors get their ``ts`` rewritten to the canonical slot instant.
    """
    best_by_slot: dict[str, Record] = {}
    for record in rows:
        anchor = record.ts or record.date
        if not anchor:
            continue
        key = slot_key(anchor)
        current = best_by_slot.get(key)
        if current is None:
            best_by_slot[key] = record
            continue
        current_at = parse_ts(current.run_ts or current.ts)
        candidate_at = parse_ts(record.run_ts or record.ts)
        if candidate_at is not None and (current_at is None or candidate_at >= current_at):
            best_by_slot[key] = record

    compacted = [record.model_copy(update={"ts": canonical_slot_ts(key)}) for key, record in best_by_slot.items()]
    return sort_records(compacted)


__all__ = [
    "AFTERNOON_SLOT",
    "DEFAULT_DEDUP_MINUTES",
    "DEFAULT_RETENTION",
    "MORNING_SLOT",
    "canonical_slot_ts",
    "compact_records",
    "is_rerun",
    "merge_record",
    "minutes_between",
    "slot_key",
    "slot_label",
    "sort_records",
]
