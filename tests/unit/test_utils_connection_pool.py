"""Tests for release_train/utils/connection_pool.py - HTTP connection pooling."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from release_train.utils.connection_pool import HTTPConnectionPool


class TestHTTPConnectionPool:
    """Tests for HTTPConnectionPool class."""

    def test_init_defaults(self):
        """Test HTTPConnectionPool initialization with defaults."""
        pool = HTTPConnectionPool("https://api.example.com")

        assert pool.base_url == "https://api.example.com"
        assert pool.max_connections == 10
        assert pool.max_keepalive_connections == 5
        assert pool.timeout == 30.0
        assert pool.headers == {}
        assert pool.auth is None
        assert pool._client is None

    def test_init_with_auth(self):
        """Test that auth and headers are kept for the client."""
        auth = httpx.BasicAuth("bot", "secret")
        pool = HTTPConnectionPool(
            "https://api.example.com",
            headers={"Accept": "application/json"},
            auth=auth,
        )

        assert pool.auth is auth
        assert pool.headers == {"Accept": "application/json"}

    @pytest.mark.asyncio
    async def test_initialize_creates_client(self):
        """Test that initialize creates an httpx client."""
        pool = HTTPConnectionPool("https://api.example.com")

        await pool.initialize()

        assert isinstance(pool._client, httpx.AsyncClient)

        await pool.close()

    @pytest.mark.asyncio
    async def test_initialize_idempotent(self):
        """Test that repeated initialize calls keep the same client."""
        pool = HTTPConnectionPool("https://api.example.com")

        await pool.initialize()
        client = pool._client
        await pool.initialize()

        assert pool._client is client

        await pool.close()

    @pytest.mark.asyncio
    async def test_concurrent_initialize_creates_one_client(self):
        """Test that concurrent initialization is serialized by the lock."""
        pool = HTTPConnectionPool("https://api.example.com")

        with patch("release_train.utils.connection_pool.httpx.AsyncClient") as client_cls:
            client_cls.return_value = MagicMock(aclose=AsyncMock())
            await asyncio.gather(pool.initialize(), pool.initialize(), pool.initialize())

        client_cls.assert_called_once()
        assert client_cls.call_args.kwargs["http2"] is True

    @pytest.mark.asyncio
    async def test_close_resets_client(self):
        """Test that close releases the client."""
        pool = HTTPConnectionPool("https://api.example.com")
        await pool.initialize()

        await pool.close()

        assert pool._client is None

    @pytest.mark.asyncio
    async def test_close_without_client(self):
        """Test that closing an unused pool is a no-op."""
        pool = HTTPConnectionPool("https://api.example.com")

        await pool.close()

        assert pool._client is None

    @pytest.mark.asyncio
    async def test_get_initializes_lazily(self):
        """Test that GET creates the client on first use."""
        pool = HTTPConnectionPool("https://api.example.com")
        response = MagicMock(spec=httpx.Response)
        client = MagicMock(get=AsyncMock(return_value=response), aclose=AsyncMock())

        with patch("release_train.utils.connection_pool.httpx.AsyncClient", return_value=client):
            result = await pool.get("/search", params={"jql": "project = DC"})

        assert result is response
        client.get.assert_awaited_once_with("/search", params={"jql": "project = DC"})

    @pytest.mark.asyncio
    async def test_post_forwards_json(self):
        """Test that POST forwards the request body."""
        pool = HTTPConnectionPool("https://api.example.com")
        response = MagicMock(spec=httpx.Response)
        client = MagicMock(post=AsyncMock(return_value=response), aclose=AsyncMock())

        with patch("release_train.utils.connection_pool.httpx.AsyncClient", return_value=client):
            result = await pool.post("/pullrequests", json={"title": "Release 1.0.0"})

        assert result is response
        client.post.assert_awaited_once_with("/pullrequests", json={"title": "Release 1.0.0"})

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test that the pool opens and closes as a context manager."""
        async with HTTPConnectionPool("https://api.example.com") as pool:
            assert pool._client is not None

        assert pool._client is None
