"""Unit tests for AuthorityConnectionPool lifecycle."""

import httpx
import pytest
from unittest.mock import MagicMock

from docacl.domains.authority.exceptions import ConfigurationError, PoolClosedError
from docacl.domains.authority.pool import AuthorityConnectionPool


def _mock_transport() -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(200))


class TestConfiguration:
    def test_defaults(self):
        pool = AuthorityConnectionPool()

        assert pool.limits.max_connections == 50
        assert pool.limits.max_keepalive_connections == 50
        assert pool.timeout.connect == 60.0
        assert pool.timeout.read == 300.0
        assert pool.timeout.write == 300.0
        assert pool.timeout.pool == 300.0

    def test_custom_values(self):
        pool = AuthorityConnectionPool(pool_size=5, connect_timeout=1.5, socket_timeout=3.0)

        assert pool.limits.max_connections == 5
        assert pool.limits.max_keepalive_connections == 5
        assert pool.timeout.connect == 1.5
        assert pool.timeout.read == 3.0

    def test_no_client_until_first_use(self):
        pool = AuthorityConnectionPool(transport=_mock_transport())

        assert pool._client is None
        assert not pool.closed


@pytest.mark.asyncio
class TestLifecycle:
    async def test_initialize_is_idempotent(self):
        pool = AuthorityConnectionPool(transport=_mock_transport(), logger=MagicMock())

        first = pool.initialize()
        second = pool.initialize()

        assert first is second
        assert pool.client is first
        await pool.aclose()

    async def test_client_follows_redirects(self):
        pool = AuthorityConnectionPool(transport=_mock_transport())

        assert pool.client.follow_redirects is True
        await pool.aclose()

    async def test_close_is_idempotent(self):
        pool = AuthorityConnectionPool(transport=_mock_transport())
        client = pool.initialize()

        await pool.aclose()
        await pool.aclose()

        assert pool.closed
        assert client.is_closed

    async def test_close_without_use(self):
        pool = AuthorityConnectionPool(transport=_mock_transport())

        await pool.aclose()

        assert pool.closed

    async def test_use_after_close_raises(self):
        pool = AuthorityConnectionPool(transport=_mock_transport())
        pool.initialize()
        await pool.aclose()

        with pytest.raises(PoolClosedError):
            pool.initialize()
        with pytest.raises(PoolClosedError):
            _ = pool.client

    async def test_pool_closed_is_a_configuration_error(self):
        pool = AuthorityConnectionPool(transport=_mock_transport())
        await pool.aclose()

        with pytest.raises(ConfigurationError):
            pool.initialize()
