"""Pipeline entry points: capture-and-merge runs and offline compaction."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

import httpx

from tradefeed.core.config import TradeFeedConfig
from tradefeed.core.data.storage import TimeSeriesRepository
from tradefeed.core.http_adapter import HttpClient
from tradefeed.core.logging import bind, log_context
from tradefeed.core.models import Record, now
from tradefeed.core.services.collector import SnapshotCollector
from tradefeed.core.services.timeseries import compact_records, is_rerun, merge_record


class Collector(Protocol):
    async def collect(self, moment: datetime | None = None) -> Record: ...


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one capture run."""

    record: Record
    total: int
    replaced: bool
    path: str


@dataclass(frozen=True)
class CompactionResult:
    """Outcome of an offline compaction pass."""

    before: int
    after: int
    path: str


async def run_pipeline(
    config: TradeFeedConfig | None = None,
    *,
    repository: TimeSeriesRepository | None = None,
    collector: Collector | None = None,
    clock: Callable[[], datetime] = now,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PipelineResult:
    """Read the series, capture one snapshot, merge it in and write the series back.

    Only :class:`~tradefeed.core.exceptions.StorageError` escapes; source
    failures end up as null values and error strings inside the record.
    """
    config = config or TradeFeedConfig()
    repository = repository or TimeSeriesRepository(config.storage.path)
    logger = bind(component="pipeline")

    with log_context(run="fetch"):
        moment = clock()
        rows = repository.load()
        logger.info("Pipeline started", existing=len(rows), path=str(repository.path))

        if collector is not None:
            record = await collector.collect(moment)
        else:
            async with HttpClient(config.http, transport=transport) as http:
                record = await SnapshotCollector.from_config(http, config).collect(moment)

        replaced = is_rerun(rows[-1] if rows else None, record, config.storage.dedup_minutes)
        merged = merge_record(
            rows,
            record,
            retention=config.storage.retention,
            dedup_minutes=config.storage.dedup_minutes,
        )
        repository.save(merged)
        logger.info(
            "Pipeline finished",
            total=len(merged),
            replaced=replaced,
            date=record.date,
            ts=record.ts,
        )

    return PipelineResult(record=record, total=len(merged), replaced=replaced, path=str(repository.path))


def run_compaction(
    config: TradeFeedConfig | None = None,
    *,
    repository: TimeSeriesRepository | None = None,
) -> CompactionResult:
    """Rewrite the series with exactly one canonical record per slot."""
    config = config or TradeFeedConfig()
    repository = repository or TimeSeriesRepository(config.storage.path)
    logger = bind(component="compaction")

    with log_context(run="compact"):
        rows = repository.load()
        compacted = compact_records(rows)
        repository.save(compacted)
        logger.info("Compaction finished", before=len(rows), after=len(compacted))

    return CompactionResult(before=len(rows), after=len(compacted), path=str(repository.path))


__all__ = ["CompactionResult", "PipelineResult", "run_compaction", "run_pipeline"]
