"""快照采集服务: 并发运行所有数据源并汇总为一条记录."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from tradefeed.core.config import TradeFeedConfig
from tradefeed.core.data.providers import (
    ChinamoneyMidRate,
    SourceProvider,
    XeSpotRates,
    build_commodity_providers,
    public_key,
)
from tradefeed.core.data.providers.fx import CHINAMONEY_SOURCE, XE_SOURCE
from tradefeed.core.exceptions import TradeFeedError
from tradefeed.core.http_adapter import HttpClient
from tradefeed.core.logging import bind
from tradefeed.core.models import FxRates, Observation, Record, RecordErrors, calendar_date, format_ts, now
from tradefeed.core.patterns import RetryConfig, with_retry

T = TypeVar("T")

MID_RATE_MISSING = "no endpoint returned a USD/CNY mid rate"
SPOT_SOURCE_FALLBACK = "xe.com"


def error_message(error: BaseException) -> str:
    """将异常转换为写入错误表的字符串."""
    if isinstance(error, TradeFeedError):
        return error.message
    return str(error) or type(error).__name__


@dataclass
class SubtaskOutcome(Generic[T]):
    """顶层子任务的结果."""

    ok: bool
    data: T | None = None
    error: str | None = None


@dataclass
class CommodityCollection:
    """商品汇总结果: 公开键 -> 观测值，以及字段/子任务级诊断."""

    commodities: dict[str, Observation] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


class SnapshotCollector:
    """快照采集器.

    商品数据源各自带重试并发执行，单个数据源失败不影响其他数据源；
    即时汇率三个货币对要么全部成功要么整体失败；中间价按镜像顺序尝试。
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        retry_config: RetryConfig | None = None,
        commodity_providers: Sequence[SourceProvider] | None = None,
        spot_source: XeSpotRates | None = None,
        mid_source: ChinamoneyMidRate | None = None,
    ) -> None:
        self.retry_config = retry_config or RetryConfig()
        self.commodity_providers = list(
            commodity_providers if commodity_providers is not None
            else build_commodity_providers(http, self.retry_config)
        )
        self.spot_source = spot_source or XeSpotRates(http, self.retry_config)
        self.mid_source = mid_source or ChinamoneyMidRate(http)
        self.logger = bind(component="SnapshotCollector")

    @classmethod
    def from_config(cls, http: HttpClient, config: TradeFeedConfig) -> "SnapshotCollector":
        retry_config = RetryConfig(max_attempts=config.retry.attempts, backoff=config.retry.backoff)
        mid_retry = RetryConfig(max_attempts=config.retry.attempts, backoff=config.retry.mid_rate_backoff)
        return cls(
            http,
            retry_config=retry_config,
            mid_source=ChinamoneyMidRate(http, mid_retry),
        )

    async def collect_commodities(self) -> CommodityCollection:
        """并发运行所有商品数据源并合并结果."""
        outcomes = await asyncio.gather(
            *(
                with_retry(provider.fetch, self.retry_config, name=provider.name)
                for provider in self.commodity_providers
            ),
            return_exceptions=True,
        )

        # 所有分支结束后再统一写入
        collection = CommodityCollection()
        for provider, outcome in zip(self.commodity_providers, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                message = error_message(outcome)
                collection.errors[f"subtask:{provider.name}"] = message
                self.logger.warning("Commodity subtask failed", source=provider.name, error=message)
                continue

            for key, observation in outcome.items():
                collection.commodities[public_key(key)] = observation
                if observation.is_missing:
                    collection.errors[key] = f"parse_failed ({provider.name})"
                    self.logger.warning("Commodity parsed null", source=provider.name, field=key)

        return collection

    async def collect_fx_spot(self) -> dict[str, float | None]:
        return await self.spot_source.fetch()

    async def collect_fx_mid(self) -> float | None:
        return await self.mid_source.fetch()

    async def _guard(self, label: str, operation: Callable[[], Awaitable[T]]) -> SubtaskOutcome[T]:
        try:
            return SubtaskOutcome(ok=True, data=await operation())
        except Exception as e:
            message = error_message(e)
            self.logger.error(f"{label} failed", error=message, error_code=getattr(e, "error_code", None))
            return SubtaskOutcome(ok=False, error=message)

    async def collect(self, moment: datetime | None = None) -> Record:
        """执行一次完整采集，任何数据源失败都只体现为空值和错误信息."""
        moment = moment or now()
        spot, mid, commodities = await asyncio.gather(
            self._guard("FX spot (XE)", self.collect_fx_spot),
            self._guard("USD/CNY mid (Chinamoney)", self.collect_fx_mid),
            self._guard("Commodities", self.collect_commodities),
        )

        spot_values = spot.data or {}
        fx = FxRates(
            usd_cny=spot_values.get("usdCny"),
            usd_cny_mid=mid.data,
            usd_brl=spot_values.get("usdBrl"),
            brl_cny=spot_values.get("brlCny"),
            sources={
                "spot": XE_SOURCE if spot.ok else SPOT_SOURCE_FALLBACK,
                "mid": CHINAMONEY_SOURCE,
            },
        )

        mid_error = mid.error
        if mid.ok and mid.data is None:
            mid_error = MID_RATE_MISSING

        collection = commodities.data
        errors = RecordErrors(
            fx_spot=spot.error,
            usd_cny_mid=mid_error,
            commodities=commodities.error,
            commodities_detailed=collection.errors if collection is not None else None,
        )

        record = Record(
            date=calendar_date(moment),
            ts=format_ts(moment),
            fx=fx,
            commodities=collection.commodities if collection is not None else {},
            errors=errors,
        )
        self.logger.info(
            "Snapshot collected",
            ts=record.ts,
            commodities=len(record.commodities),
            partial=record.errors.has_errors,
        )
        return record


__all__ = ["CommodityCollection", "SnapshotCollector", "SubtaskOutcome", "MID_RATE_MISSING", "error_message"]
