"""上海有色网(SMM) H5 贵金属行情."""

from __future__ import annotations

import re
from collections.abc import Sequence

from tradefeed.core.data.providers.base import PageProvider
from tradefeed.core.data.providers.parsing import first_number, page_text, safe_num, search_number, table_rows
from tradefeed.core.models import Observation

_NUM = r"[0-9]+(?:\.[0-9]+)?"


def _to_num(cell: str) -> float | None:
    return safe_num(re.sub(r"[^\d.,-]", "", cell))


class SmmPreciousMetals(PageProvider):
    """黄金(99黄金, 元/克)与白银(Ag99.99, 元/千克)均价.

    表格行结构一般为: 名称 | 价格范围 | 均价 | 涨跌 | 单位 | 日期，
    表格解析不到时退回整页文本正则。
    """

    name = "au/ag"
    url = "https://hq.smm.cn/h5/precious-metals-price"

    GOLD_NAMES = ("99黄金价格",)
    SILVER_NAMES = ("Ag99.99白银价格", "IC-Ag99.99白银价格")

    # 名称 低价 - 高价 均价
    GOLD_TEXT_PATTERNS = (
        rf"99黄金价格\D*{_NUM}\s*-\s*{_NUM}\s*({_NUM})",
        rf"99黄金价格\D*({_NUM})",
    )
    SILVER_TEXT_PATTERNS = (
        rf"(?:IC-)?Ag99\.99白银价格\D*{_NUM}\s*-\s*{_NUM}\s*({_NUM})",
        rf"(?:IC-)?Ag99\.99白银价格\D*({_NUM})",
    )

    def extract(self, raw: str) -> dict[str, Observation]:
        rows = table_rows(raw, min_cells=5)
        text = page_text(raw)

        gold = self.average_from_rows(rows, self.GOLD_NAMES)
        if gold is None:
            gold = search_number(text, *self.GOLD_TEXT_PATTERNS)
        silver = self.average_from_rows(rows, self.SILVER_NAMES)
        if silver is None:
            silver = search_number(text, *self.SILVER_TEXT_PATTERNS)

        return {
            "au9999": self.observation(gold, "CNY/g", self.url),
            "ag9999": self.observation(silver, "CNY/kg", self.url),
        }

    @staticmethod
    def average_from_rows(rows: Sequence[Sequence[str]], names: Sequence[str]) -> float | None:
        """在首个名称匹配的行中取均价，均价列不是纯数字时依次尝试均价列、价格范围列的第一个数字."""
        for cells in rows:
            label = cells[0] if cells else ""
            if not any(name in label for name in names):
                continue
            avg_cell = cells[2] if len(cells) > 2 else ""
            range_cell = cells[1] if len(cells) > 1 else ""
            average = _to_num(avg_cell)
            if average is None:
                average = first_number(avg_cell)
            if average is None:
                average = first_number(range_cell)
            return average
        return None
