"""Cursor-based data sources that feed the paginated adapter.

``HttpPageSource`` talks to the hosted backend over HTTP. Any callable that
matches ``PageSource`` can stand in for it, which is how tests drive the
adapter without a network.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from feedguard.core.settings import settings
from feedguard.schemas.feed import Page

__all__ = [
    "FEED_PATHS",
    "HttpPageSource",
    "PageSource",
    "TransportError",
    "build_page_source",
]

# Configure logger for this module
logger = logging.getLogger(__name__)

# HTTP status codes
HTTP_OK = 200

FEED_PATHS: dict[str, str] = {
    "home": "/api/v1/feed/home",
    "notifications": "/api/v1/notifications",
    "search": "/api/v1/search",
}


class TransportError(RuntimeError):
    """Raised when the backend is unreachable or answers with a failure."""


class PageSource(Protocol):
    """Fetches the page that follows ``cursor`` (the first page when None)."""

    async def __call__(self, cursor: str | None) -> Page: ...


class HttpPageSource:
    """Fetch pages of a feed from the hosted backend."""

    def __init__(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        page_size: int | None = None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.path = path
        self.params = dict(params or {})
        self.page_size = page_size or settings.feed_page_size
        self.base_url = base_url or settings.feed_base_url
        self.timeout_seconds = timeout_seconds or settings.feed_http_timeout_seconds
        self._client = client
        self._owns_client = client is None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=httpx.Timeout(self.timeout_seconds),
                )
        return self._client

    async def __call__(self, cursor: str | None) -> Page:
        client = await self._ensure_client()
        query: dict[str, Any] = {**self.params, "numItems": self.page_size}
        if cursor is not None:
            query["cursor"] = cursor

        try:
            response = await client.get(self.path, params=query)
        except httpx.HTTPError as exc:
            raise TransportError(f"Feed request to {self.path} failed: {exc}") from exc

        if response.status_code != HTTP_OK:
            raise TransportError(f"Feed backend responded with {response.status_code} for {self.path}")

        try:
            return Page.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TransportError(f"Malformed page returned for {self.path}: {exc}") from exc

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None and self._owns_client:
                await self._client.aclose()
                self._client = None


def build_page_source(
    name: str,
    *,
    tag: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> HttpPageSource:
    """Return the HTTP data source backing the named list view.

    Raises:
        KeyError: If ``name`` is not a known feed.
    """
    path = FEED_PATHS[name]
    params = {"tag": tag} if tag else None
    return HttpPageSource(path, params=params, client=client)
