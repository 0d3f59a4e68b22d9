"""Tests for the shared async HTTP client."""

import httpx
import pytest

from tradefeed.core.config import HttpConfig
from tradefeed.core.exceptions import NetworkError, ParseError
from tradefeed.core.http_adapter import HttpClient


@pytest.mark.asyncio
async def test_sends_configured_headers():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<html>ok</html>")

    config = HttpConfig(user_agent="test-agent/1.0", accept_language="zh-CN")
    async with HttpClient(config, transport=httpx.MockTransport(handler)) as http:
        body = await http.get_text("https://m.ccmn.cn/", source_name="cu/al")

    assert body == "<html>ok</html>"
    assert seen[0].headers["User-Agent"] == "test-agent/1.0"
    assert seen[0].headers["Accept-Language"] == "zh-CN"


@pytest.mark.asyncio
async def test_non_success_status_raises_network_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))

    async with HttpClient(transport=transport) as http:
        with pytest.raises(NetworkError) as exc_info:
            await http.get_text("https://m.ccmn.cn/", source_name="cu/al")

    assert exc_info.value.status_code == 503
    assert exc_info.value.source_name == "cu/al"
    assert exc_info.value.details["url"] == "https://m.ccmn.cn/"


@pytest.mark.asyncio
async def test_transport_error_raises_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with HttpClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(NetworkError, match="ConnectError"):
            await http.get_text("https://www.100ppi.com/crudeoil/")


@pytest.mark.asyncio
async def test_get_json():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "application/json" in request.headers["Accept"]
        return httpx.Response(200, json={"records": []})

    async with HttpClient(transport=httpx.MockTransport(handler)) as http:
        assert await http.get_json("https://www.chinamoney.com.cn/ccpr.json") == {"records": []}


@pytest.mark.asyncio
async def test_invalid_json_raises_parse_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    async with HttpClient(transport=transport) as http:
        with pytest.raises(ParseError):
            await http.get_json("https://www.chinamoney.com.cn/ccpr.json", source_name="usdCnyMid")


@pytest.mark.asyncio
async def test_close_is_idempotent():
    http = HttpClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    await http.get_text("https://example.com/")

    await http.close()
    await http.close()
