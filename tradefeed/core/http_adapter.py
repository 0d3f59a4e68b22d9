"""
HTTP adapter shared by all source providers.

Wraps a single ``httpx.AsyncClient`` so that every provider in one pipeline run
reuses the same connection pool, headers and timeout policy. Transport failures
and non-2xx responses are surfaced as :class:`NetworkError`; undecodable JSON
bodies as :class:`ParseError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from tradefeed.core.config import HttpConfig
from tradefeed.core.exceptions import NetworkError, ParseError
from tradefeed.core.logging import get_logger

logger = get_logger(__name__)


class HttpClient:
    """Async HTTP client used by the source providers."""

    def __init__(
        self,
        config: HttpConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP client with configuration."""
        self.config = config or HttpConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HttpClient":
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=True,
                max_redirects=self.config.max_redirects,
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept-Language": self.config.accept_language,
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get(self, url: str, source_name: str, headers: dict[str, str] | None = None) -> httpx.Response:
        client = self._ensure_client()
        try:
            response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Request failed for {url}: {type(e).__name__}: {e}",
                source_name=source_name,
                details={"url": url},
            ) from e

        logger.debug("HTTP GET", url=url, status=response.status_code)
        if not response.is_success:
            raise NetworkError(
                f"HTTP {response.status_code} for {url}",
                source_name=source_name,
                status_code=response.status_code,
                details={"url": url},
            )
        return response

    async def get_text(self, url: str, *, source_name: str = "http") -> str:
        """GET ``url`` and return the decoded body."""
        response = await self._get(url, source_name)
        return response.text

    async def get_json(self, url: str, *, source_name: str = "http") -> Any:
        """GET ``url`` and decode its JSON body."""
        response = await self._get(url, source_name, headers={"Accept": "application/json,text/plain,*/*"})
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(
                f"Invalid JSON from {url}: {e}",
                source_name=source_name,
                details={"url": url},
            ) from e


__all__ = ["HttpClient"]
