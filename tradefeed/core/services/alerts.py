"""Volatility alerts and history views derived from the persisted series."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from tradefeed.core.models import Record
from tradefeed.core.services.timeseries import sort_records

DEFAULT_ALERT_THRESHOLD = 10.0


@dataclass(frozen=True)
class SeriesMeta:
    """Display metadata for one plotted series."""

    key: str
    name: str
    group: str


FX_CATALOG: tuple[SeriesMeta, ...] = (
    SeriesMeta("usdCnyMid", "USD/CNY（中间价）", "FX"),
    SeriesMeta("usdCny", "USD/CNY（即时）", "FX"),
    SeriesMeta("usdBrl", "USD/BRL（即时）", "FX"),
    SeriesMeta("brlCny", "BRL/CNY（即时）", "FX"),
)

COMMODITY_CATALOG: tuple[SeriesMeta, ...] = (
    SeriesMeta("au9999", "AU99.99", "金属"),
    SeriesMeta("ag9999", "AG99.99", "金属"),
    SeriesMeta("copper1", "1#电解铜", "金属"),
    SeriesMeta("alA00", "A00铝", "金属"),
    SeriesMeta("zn0", "0#锌", "金属"),
    SeriesMeta("hrc", "热轧卷板", "钢铁"),
    SeriesMeta("rebar", "螺纹钢(HRB400)", "钢铁"),
    SeriesMeta("ironOre62", "铁矿石62%FE", "钢铁"),
    SeriesMeta("pp", "PP(拉丝)", "化工"),
    SeriesMeta("abs", "ABS(通用)", "化工"),
    SeriesMeta("pvc", "PVC(SG-5)", "化工"),
    SeriesMeta("lithiumCarbonate", "碳酸锂", "化工"),
    SeriesMeta("wti", "WTI", "能源"),
    SeriesMeta("brent", "布伦特", "能源"),
    SeriesMeta("corrugated", "瓦楞纸", "纸"),
)


@dataclass(frozen=True)
class VolatilityAlert:
    kind: str
    key: str
    title: str
    current: float
    previous: float
    pct: float


def _finite(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def fx_value(record: Record, key: str) -> float | None:
    """Read an FX series by its wire name (``usdCny`` etc.)."""
    dumped = record.fx.model_dump(by_alias=True)
    value = dumped.get(key)
    return _finite(value) if isinstance(value, (int, float)) else None


def commodity_value(record: Record, key: str) -> float | None:
    observation = record.commodities.get(key)
    return _finite(observation.value) if observation is not None else None


def pct_change(current: float | None, previous: float | None) -> float | None:
    """Percent change, or ``None`` when either side is missing or ``previous`` is zero."""
    current = _finite(current)
    previous = _finite(previous)
    if current is None or previous is None or previous == 0:
        return None
    return (current - previous) / previous * 100


def find_previous(rows: Sequence[Record], pick: Callable[[Record], float | None]) -> float | None:
    """Scan back from the second-to-last row for the first available value."""
    for record in reversed(rows[:-1]):
        value = _finite(pick(record))
        if value is not None:
            return value
    return None


def volatility_alerts(
    rows: Sequence[Record],
    threshold: float = DEFAULT_ALERT_THRESHOLD,
    commodity_catalog: Sequence[SeriesMeta] = COMMODITY_CATALOG,
) -> list[VolatilityAlert]:
    """Compare the latest record against the previous valid value of every series.

    Changes with ``|pct| >= threshold`` are reported, largest move first.
    """
    ordered = sort_records(rows)
    if not ordered:
        return []
    latest = ordered[-1]

    candidates: list[tuple[str, SeriesMeta, Callable[[Record], float | None]]] = []
    for meta in FX_CATALOG:
        candidates.append(("FX", meta, lambda record, key=meta.key: fx_value(record, key)))
    for meta in commodity_catalog:
        candidates.append(("commodity", meta, lambda record, key=meta.key: commodity_value(record, key)))

    alerts: list[VolatilityAlert] = []
    for kind, meta, pick in candidates:
        current = pick(latest)
        previous = find_previous(ordered, pick)
        pct = pct_change(current, previous)
        if pct is not None and abs(pct) >= threshold:
            alerts.append(VolatilityAlert(kind, meta.key, meta.name, current, previous, pct))

    alerts.sort(key=lambda alert: abs(alert.pct), reverse=True)
    return alerts


def index_series(rows: Sequence[Record], keys: Sequence[str]) -> list[dict[str, object]]:
    """Rebase each commodity series to 100 at its first available value."""
    bases: dict[str, float] = {}
    indexed: list[dict[str, object]] = []
    for record in sort_records(rows):
        point: dict[str, object] = {"x": record.order_key}
        for key in keys:
            value = commodity_value(record, key)
            if value is None:
                point[key] = None
                continue
            base = bases.setdefault(key, value)
            point[key] = value / base * 100 if base else None
        indexed.append(point)
    return indexed


def history_rows(rows: Sequence[Record]) -> list[Mapping[str, object]]:
    """Flatten records, newest first, for the history listing."""
    listing: list[Mapping[str, object]] = []
    for record in reversed(sort_records(rows)):
        available = sum(1 for observation in record.commodities.values() if not observation.is_missing)
        listing.append(
            {
                "ts": record.ts or record.date,
                "usdCnyMid": record.fx.usd_cny_mid,
                "usdCny": record.fx.usd_cny,
                "usdBrl": record.fx.usd_brl,
                "brlCny": record.fx.brl_cny,
                "commodities": f"{available}/{len(record.commodities)}",
                "partial": record.errors.has_errors,
            }
        )
    return listing


__all__ = [
    "COMMODITY_CATALOG",
    "DEFAULT_ALERT_THRESHOLD",
    "FX_CATALOG",
    "SeriesMeta",
    "VolatilityAlert",
    "commodity_value",
    "find_previous",
    "fx_value",
    "history_rows",
    "index_series",
    "pct_change",
    "volatility_alerts",
]
