"""数据源抽象基类.

每个数据源拆分为 ``fetch_raw`` (网络请求) 与 ``extract`` (纯解析) 两步，
解析逻辑可以直接用录制的页面夹具单独测试。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import ClassVar, Generic, TypeVar

from tradefeed.core.http_adapter import HttpClient
from tradefeed.core.models import Observation
from tradefeed.core.patterns import RetryConfig, gather_all, with_retry

RawT = TypeVar("RawT")


class SourceProvider(ABC, Generic[RawT]):
    """商品数据源基类.

    ``name`` 是聚合器中使用的逻辑子任务名，``extract`` 返回的键为内部字段名
    (别名转换在聚合阶段统一进行)。
    """

    name: ClassVar[str]

    def __init__(self, http: HttpClient, retry_config: RetryConfig | None = None) -> None:
        self.http = http
        self.retry_config = retry_config or RetryConfig()

    @abstractmethod
    async def fetch_raw(self) -> RawT:
        """获取原始页面内容."""

    @abstractmethod
    def extract(self, raw: RawT) -> dict[str, Observation]:
        """从原始内容中解析出观测值，找不到的字段返回空值而不是抛错."""

    async def fetch(self) -> dict[str, Observation]:
        """获取并解析."""
        return self.extract(await self.fetch_raw())

    @staticmethod
    def observation(value: float | None, unit: str, source: str) -> Observation:
        return Observation(value=value, unit=unit, source=source)


class PageProvider(SourceProvider[str]):
    """单页面 HTML 数据源."""

    url: ClassVar[str]

    async def fetch_raw(self) -> str:
        return await self.http.get_text(self.url, source_name=self.name)


@dataclass(frozen=True)
class PageSpec:
    """多页面数据源中的一个页面."""

    key: str
    url: str
    unit: str = "CNY/t"
    hint: str = ""


class MultiPageProvider(SourceProvider[dict[str, str]]):
    """多页面数据源: 页面并发获取，每个页面单独重试，任一页面失败则整个子任务失败."""

    pages: ClassVar[tuple[PageSpec, ...]]

    async def fetch_raw(self) -> dict[str, str]:
        bodies = await gather_all(
            *(
                with_retry(
                    partial(self.http.get_text, page.url, source_name=self.name),
                    self.retry_config,
                    name=f"{self.name}:{page.key}",
                )
                for page in self.pages
            )
        )
        return {page.key: body for page, body in zip(self.pages, bodies, strict=True)}

    def extract(self, raw: dict[str, str]) -> dict[str, Observation]:
        return {
            page.key: self.observation(self.extract_page(page, raw.get(page.key, "")), page.unit, page.url)
            for page in self.pages
        }

    @abstractmethod
    def extract_page(self, page: PageSpec, html: str) -> float | None:
        """解析单个页面."""


__all__ = ["SourceProvider", "PageProvider", "MultiPageProvider", "PageSpec"]
