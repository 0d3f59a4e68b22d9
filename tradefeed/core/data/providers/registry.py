"""商品数据源注册表与公开字段别名."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from tradefeed.core.data.providers.base import SourceProvider
from tradefeed.core.data.providers.ccmn import CcmnBaseMetals, CcmnZinc
from tradefeed.core.data.providers.ppi import (
    PpiChemicals,
    PpiCorrugatedPaper,
    PpiCrudeOil,
    PpiIronOre,
    PpiSteel,
)
from tradefeed.core.data.providers.smm import SmmPreciousMetals
from tradefeed.core.http_adapter import HttpClient
from tradefeed.core.patterns import RetryConfig

# 内部字段名 -> 看板使用的短键
COMMODITY_KEY_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "aluminumA00": "alA00",
        "zinc0": "zn0",
        "rebarHRB400": "rebar",
        "corrugatedPaper": "corrugated",
        "ppRaffia": "pp",
        "absGeneral": "abs",
        "pvcSG5": "pvc",
    }
)

COMMODITY_PROVIDERS: tuple[type[SourceProvider], ...] = (
    SmmPreciousMetals,
    CcmnBaseMetals,
    PpiIronOre,
    PpiCrudeOil,
    PpiChemicals,
    PpiCorrugatedPaper,
    CcmnZinc,
    PpiSteel,
)


def public_key(key: str) -> str:
    """返回内部字段名对应的公开键."""
    return COMMODITY_KEY_ALIASES.get(key, key)


def build_commodity_providers(http: HttpClient, retry_config: RetryConfig | None = None) -> list[SourceProvider]:
    """按固定顺序实例化全部商品数据源."""
    return [provider_cls(http, retry_config) for provider_cls in COMMODITY_PROVIDERS]
