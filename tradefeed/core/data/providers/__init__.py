"""Source providers: one unit per upstream page or feed."""

from tradefeed.core.data.providers.base import MultiPageProvider, PageProvider, PageSpec, SourceProvider
from tradefeed.core.data.providers.ccmn import CcmnBaseMetals, CcmnZinc
from tradefeed.core.data.providers.fx import ChinamoneyMidRate, XeSpotRates
from tradefeed.core.data.providers.ppi import (
    PpiChemicals,
    PpiCorrugatedPaper,
    PpiCrudeOil,
    PpiIronOre,
    PpiSteel,
)
from tradefeed.core.data.providers.registry import (
    COMMODITY_KEY_ALIASES,
    COMMODITY_PROVIDERS,
    build_commodity_providers,
    public_key,
)
from tradefeed.core.data.providers.smm import SmmPreciousMetals

__all__ = [
    "COMMODITY_KEY_ALIASES",
    "COMMODITY_PROVIDERS",
    "CcmnBaseMetals",
    "CcmnZinc",
    "ChinamoneyMidRate",
    "MultiPageProvider",
    "PageProvider",
    "PageSpec",
    "PpiChemicals",
    "PpiCorrugatedPaper",
    "PpiCrudeOil",
    "PpiIronOre",
    "PpiSteel",
    "SmmPreciousMetals",
    "SourceProvider",
    "XeSpotRates",
    "build_commodity_providers",
    "public_key",
]
