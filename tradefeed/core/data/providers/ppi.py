"""生意社(100ppi) 基准价与行情走势页面."""

from __future__ import annotations

import re

from tradefeed.core.data.providers.base import MultiPageProvider, PageProvider, PageSpec
from tradefeed.core.data.providers.parsing import page_text, search_number
from tradefeed.core.models import Observation

# 走势表格行形如 "01-07 3237.66 0.00%"，最新一条在最前
_VANE_ROW = re.compile(r"\b\d{2}-\d{2}\s+([0-9]+\.[0-9]+)", re.ASCII)
_VANE_ROW_WITH_CHANGE = re.compile(r"\b\d{2}-\d{2}\s+([0-9]+\.[0-9]+)\s+[-+0-9.]+%", re.ASCII)


def base_price(text: str, name_hint: str = "") -> float | None:
    """解析 ``1月7日生意社XXX基准价为8237.50元/吨`` 格式的基准价."""
    patterns = []
    if name_hint:
        patterns.append(rf"{re.escape(name_hint)}\S*基准价为([0-9.]+)元/吨")
    patterns.append(r"基准价为([0-9.]+)元/吨")
    return search_number(text, *patterns)


class PpiIronOre(PageProvider):
    """铁矿石 62% Fe 粉矿基准价."""

    name = "iron ore"
    url = "https://www.100ppi.com/vane/detail-961.html"

    def extract(self, raw: str) -> dict[str, Observation]:
        value = base_price(page_text(raw), "铁矿石")
        return {"ironOre62": self.observation(value, "CNY/t", self.url)}


class PpiCrudeOil(PageProvider):
    """原油频道滚动发布的 WTI / Brent 基准价."""

    name = "oil"
    url = "https://www.100ppi.com/crudeoil/"

    WTI_PATTERN = re.compile(r"WTI原油\S*基准价为([0-9.]+)美元/桶")
    BRENT_PATTERN = re.compile(r"Brent原油\S*基准价为([0-9.]+)美元/桶", re.IGNORECASE)

    def extract(self, raw: str) -> dict[str, Observation]:
        text = page_text(raw)
        return {
            "wti": self.observation(search_number(text, self.WTI_PATTERN), "USD/bbl", self.url),
            "brent": self.observation(search_number(text, self.BRENT_PATTERN), "USD/bbl", self.url),
        }


class PpiChemicals(MultiPageProvider):
    """塑料与化工: PP(拉丝级)、ABS(通用级)、PVC(SG-5)、电池级碳酸锂."""

    name = "chem"
    pages = (
        PageSpec("ppRaffia", "https://www.100ppi.com/vane/detail-718.html", hint="PP"),
        PageSpec("absGeneral", "https://www.100ppi.com/vane/detail-713.html", hint="ABS"),
        PageSpec("pvcSG5", "https://www.100ppi.com/vane/detail-107.html", hint="PVC"),
        PageSpec("lithiumCarbonate", "https://www.100ppi.com/vane/detail-1162.html", hint="碳酸锂"),
    )

    def extract_page(self, page: PageSpec, html: str) -> float | None:
        return base_price(page_text(html), page.hint)


class PpiSteel(MultiPageProvider):
    """螺纹钢(HRB400)与热轧卷板."""

    name = "steel"
    pages = (
        PageSpec("rebarHRB400", "https://m1.100ppi.com/vane/927-%E8%9E%BA%E7%BA%B9%E9%92%A2.html"),
        PageSpec("hrc", "https://m1.100ppi.com/vane/195-%E7%83%AD%E8%BD%A7%E6%9D%BF%E5%8D%B7"),
    )

    def extract_page(self, page: PageSpec, html: str) -> float | None:
        return search_number(page_text(html), _VANE_ROW)


class PpiCorrugatedPaper(PageProvider):
    """瓦楞原纸."""

    name = "paper"
    url = "https://m1.100ppi.com/vane/1250-%E7%93%A6%E6%A5%9E%E5%8E%9F%E7%BA%B8.html"

    def extract(self, raw: str) -> dict[str, Observation]:
        value = search_number(page_text(raw), _VANE_ROW_WITH_CHANGE)
        return {"corrugatedPaper": self.observation(value, "CNY/t", self.url)}
