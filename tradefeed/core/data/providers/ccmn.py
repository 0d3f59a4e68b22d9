"""长江有色金属网(CCMN) 移动版现货报价: 低价—高价 均价."""

from __future__ import annotations

from tradefeed.core.data.providers.base import PageProvider
from tradefeed.core.data.providers.parsing import page_text, search_number
from tradefeed.core.models import Observation

CCMN_URL = "https://m.ccmn.cn/"


def quote_average(text: str, label: str, dashes: str = "—") -> float | None:
    """取 ``label 低价—高价 均价`` 中的均价."""
    return search_number(text, rf"{label}\s*[0-9,]+[{dashes}][0-9,]+\s*([0-9,]+)")


class CcmnBaseMetals(PageProvider):
    """1#电解铜与A00铝."""

    name = "cu/al"
    url = CCMN_URL

    def extract(self, raw: str) -> dict[str, Observation]:
        text = page_text(raw)
        return {
            "copper1": self.observation(quote_average(text, "1#铜"), "CNY/t", self.url),
            "aluminumA00": self.observation(quote_average(text, "A00铝"), "CNY/t", self.url),
        }


class CcmnZinc(PageProvider):
    """0#锌."""

    name = "zinc"
    url = CCMN_URL

    def extract(self, raw: str) -> dict[str, Observation]:
        text = page_text(raw)
        return {"zinc0": self.observation(quote_average(text, "0#锌", dashes="—-"), "CNY/t", self.url)}
