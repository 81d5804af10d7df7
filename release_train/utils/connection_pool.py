"""
HTTP connection pooling for API requests.

Each provider owns one pool so that every request to the same service
reuses connections and carries the same authentication.
"""

import asyncio
from typing import Any

import httpx
import structlog

log = structlog.get_logger(__name__)


class HTTPConnectionPool:
    """HTTP connection pool for API requests."""

    def __init__(
        self,
        base_url: str,
        max_connections: int = 10,
        max_keepalive_connections: int = 5,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | tuple[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.max_connections = max_connections
        self.max_keepalive_connections = max_keepalive_connections
        self.timeout = timeout
        self.headers = headers or {}
        self.auth = auth
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Initialize the connection pool."""
        async with self._lock:
            if self._client is None:
                limits = httpx.Limits(
                    max_keepalive_connections=self.max_keepalive_connections,
                    max_connections=self.max_connections,
                    keepalive_expiry=30.0,
                )

                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    limits=limits,
                    timeout=self.timeout,
                    http2=True,
                    headers=self.headers,
                    auth=self.auth,
                )

                log.debug("connection_pool_initialized", base_url=self.base_url)

    async def close(self) -> None:
        """Close the connection pool."""
        async with self._lock:
            if self._client:
                await self._client.aclose()
                self._client = None
                log.debug("connection_pool_closed", base_url=self.base_url)

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make GET request."""
        if self._client is None:
            await self.initialize()

        assert self._client is not None
        return await self._client.get(path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make POST request."""
        if self._client is None:
            await self.initialize()

        assert self._client is not None
        return await self._client.post(path, **kwargs)

    async def __aenter__(self) -> "HTTPConnectionPool":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
