"""Live checks against the upstream sites; run with --tradefeed-run-integration."""

from __future__ import annotations

import pytest

from tradefeed.core.config import TradeFeedConfig
from tradefeed.core.http_adapter import HttpClient
from tradefeed.core.services.collector import SnapshotCollector

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_live_snapshot_has_some_values() -> None:
    config = TradeFeedConfig()

    async with HttpClient(config.http) as http:
        record = await SnapshotCollector.from_config(http, config).collect()

    available = [key for key, observation in record.commodities.items() if not observation.is_missing]
    assert record.ts is not None
    assert available or record.fx.usd_cny is not None or record.fx.usd_cny_mid is not None
