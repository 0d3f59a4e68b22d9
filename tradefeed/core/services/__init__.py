"""Core services: snapshot collection, time-series merging and analytics."""

from tradefeed.core.services.alerts import (
    COMMODITY_CATALOG,
    VolatilityAlert,
    history_rows,
    index_series,
    pct_change,
    volatility_alerts,
)
from tradefeed.core.services.collector import SnapshotCollector
from tradefeed.core.services.pipeline import CompactionResult, PipelineResult, run_compaction, run_pipeline
from tradefeed.core.services.timeseries import compact_records, merge_record, slot_key, slot_label

__all__ = [
    "COMMODITY_CATALOG",
    "CompactionResult",
    "PipelineResult",
    "SnapshotCollector",
    "VolatilityAlert",
    "compact_records",
    "history_rows",
    "index_series",
    "merge_record",
    "pct_change",
    "run_compaction",
    "run_pipeline",
    "slot_key",
    "slot_label",
    "volatility_alerts",
]
