"""时间序列记录模型.

线上格式使用 camelCase 字段名 (``usdCny``, ``commoditiesDetailed`` ...)，
看板直接读取该 JSON 文件，字段名不可随意更改。
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Observation(BaseModel):
    """单个抓取到的数值观测."""

    model_config = ConfigDict(extra="allow")

    value: float | None = None
    unit: str = ""
    source: str = ""

    @property
    def is_missing(self) -> bool:
        """解析失败(空值或 NaN)时为 True."""
        return self.value is None or math.isnan(self.value)


class FxRates(BaseModel):
    """汇率快照."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    usd_cny: float | None = Field(default=None, alias="usdCny")
    usd_cny_mid: float | None = Field(default=None, alias="usdCnyMid")
    usd_brl: float | None = Field(default=None, alias="usdBrl")
    brl_cny: float | None = Field(default=None, alias="brlCny")
    sources: dict[str, str] = Field(default_factory=dict)


class RecordErrors(BaseModel):
    """一次抓取的错误汇总."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    fx_spot: str | None = Field(default=None, alias="fxSpot")
    usd_cny_mid: str | None = Field(default=None, alias="usdCnyMid")
    commodities: str | None = None
    commodities_detailed: dict[str, str] | None = Field(default=None, alias="commoditiesDetailed")

    @property
    def has_errors(self) -> bool:
        return bool(self.fx_spot or self.usd_cny_mid or self.commodities or self.commodities_detailed)


class Record(BaseModel):
    """一次抓取事件(快照)，持久化后即为时间序列中的一条记录."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    date: str | None = None
    ts: str | None = None
    run_ts: str | None = Field(default=None, alias="runTs")
    fx: FxRates = Field(default_factory=FxRates)
    commodities: dict[str, Observation] = Field(default_factory=dict)
    errors: RecordErrors = Field(default_factory=RecordErrors)

    @property
    def order_key(self) -> str:
        """排序键: ts 为固定 +08:00 偏移的 ISO-8601 字符串，字典序即时间序."""
        return str(self.ts or self.date or "")

    def to_json_dict(self) -> dict[str, Any]:
        """转换为写入文件的字典，空值观测保留为 null."""
        payload = self.model_dump(mode="json", by_alias=True)
        if payload.get("runTs") is None:
            payload.pop("runTs", None)
        return payload

    @classmethod
    def from_json_dict(cls, payload: dict[str, Any]) -> Record:
        return cls.model_validate(payload)


__all__ = ["Observation", "FxRates", "RecordErrors", "Record"]
