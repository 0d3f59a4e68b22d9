"""汇率数据源: XE 即时汇率与中国外汇交易中心人民币中间价."""

from __future__ import annotations

import re
from functools import partial
from typing import Any

from tradefeed.core.data.providers.parsing import JsonMatchRule, find_value, page_text, safe_num
from tradefeed.core.exceptions import ParseError, SourceError
from tradefeed.core.http_adapter import HttpClient
from tradefeed.core.logging import bind
from tradefeed.core.patterns import RetryConfig, gather_all, with_retry

XE_SOURCE = "https://www.xe.com/zh-cn/currencyconverter/"
XE_CONVERT_URL = "https://www.xe.com/zh-cn/currencyconverter/convert/?Amount=1&From={base}&To={quote}"

CHINAMONEY_ENDPOINTS = (
    "https://iftp.chinamoney.com.cn/r/cms/www/chinamoney/data/fx/ccpr.json",
    "https://www.chinamoney.com.cn/r/cms/www/chinamoney/data/fx/ccpr.json",
)
CHINAMONEY_SOURCE = "chinamoney.com.cn (ccpr.json)"

USD_CNY_MID_RULE = JsonMatchRule(
    name_fields=("ccyPair", "currencyPair", "vrtEName", "vrtEname", "pair", "name"),
    patterns=(
        re.compile(r"USD\s*/\s*CNY"),
        re.compile(r"USD\s*CNY"),
        re.compile(r"美元\s*/\s*人民币"),
    ),
    value_fields=("middleRate", "centralParity", "parity", "mid", "price", "value", "last"),
)


class XeSpotRates:
    """XE 汇率换算页面上的即时汇率.

    三个货币对并发获取，任一失败则整体失败。
    """

    name = "fxSpot"
    PAIRS: dict[str, tuple[str, str]] = {
        "usdCny": ("USD", "CNY"),
        "usdBrl": ("USD", "BRL"),
        "brlCny": ("BRL", "CNY"),
    }

    def __init__(self, http: HttpClient, retry_config: RetryConfig | None = None) -> None:
        self.http = http
        self.retry_config = retry_config or RetryConfig()

    async def fetch_raw(self, base: str, quote: str) -> str:
        url = XE_CONVERT_URL.format(base=base, quote=quote)
        return await self.http.get_text(url, source_name=self.name)

    def extract(self, html: str, base: str, quote: str) -> float | None:
        text = page_text(html)
        pattern = rf"1\.00\s*{re.escape(base)}\s*=\s*([0-9.,\s]+)\s*{re.escape(quote)}"
        match = re.search(pattern, text, re.IGNORECASE)
        if not match:
            raise ParseError(f"XE parse failed for {base}->{quote}", source_name=self.name)
        return safe_num(match.group(1))

    async def fetch_pair(self, base: str, quote: str) -> float | None:
        return self.extract(await self.fetch_raw(base, quote), base, quote)

    async def fetch(self) -> dict[str, float | None]:
        """返回 ``{"usdCny": ..., "usdBrl": ..., "brlCny": ...}``."""
        values = await gather_all(
            *(
                with_retry(partial(self.fetch_pair, base, quote), self.retry_config, name=f"xe:{base}{quote}")
                for base, quote in self.PAIRS.values()
            )
        )
        return dict(zip(self.PAIRS, values, strict=True))


class ChinamoneyMidRate:
    """人民币兑美元中间价，依次尝试各镜像地址，第一个成功者胜出."""

    name = "usdCnyMid"

    def __init__(
        self,
        http: HttpClient,
        retry_config: RetryConfig | None = None,
        endpoints: tuple[str, ...] = CHINAMONEY_ENDPOINTS,
        rule: JsonMatchRule = USD_CNY_MID_RULE,
    ) -> None:
        self.http = http
        self.retry_config = retry_config or RetryConfig(backoff=1.0)
        self.endpoints = endpoints
        self.rule = rule

    def extract(self, document: Any) -> float | None:
        return find_value(document, self.rule)

    async def fetch(self) -> float | None:
        logger = bind(component="ChinamoneyMidRate", source=self.name)
        for url in self.endpoints:
            try:
                document = await with_retry(
                    partial(self.http.get_json, url, source_name=self.name),
                    self.retry_config,
                    name=f"chinamoney:{url}",
                )
            except SourceError as e:
                logger.warning("Mid-rate endpoint failed", url=url, error=e.message)
                continue
            mid = self.extract(document)
            if mid is not None:
                return mid
            logger.warning("Mid-rate endpoint returned no USD/CNY entry", url=url)
        return None
