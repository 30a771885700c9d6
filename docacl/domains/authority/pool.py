"""Process-scoped connection pool toward the authority service.

Owns the single ``httpx.AsyncClient`` shared by every in-flight request.
The client is created at most once (eagerly via ``initialize()`` or lazily
on first use of ``client``) and closed at most once via ``aclose()``. Any
use after close is a lifecycle error, not something to retry.

Thread-safe creation: concurrent first users converge on one client.
"""

import threading
from typing import Optional

import httpx

from docacl.core.logging import ContextualLogger
from docacl.core.logging import logger as default_logger
from docacl.domains.authority.exceptions import PoolClosedError


class AuthorityConnectionPool:
    """Bounded, non-retrying HTTP connection pool for authority lookups.

    Attributes:
        limits: Total and keep-alive connection bounds (both the pool size).
        timeout: Connect timeout plus socket timeout for read/write/pool.
    """

    DEFAULT_POOL_SIZE = 50
    DEFAULT_CONNECT_TIMEOUT = 60.0
    DEFAULT_SOCKET_TIMEOUT = 300.0

    def __init__(
        self,
        *,
        pool_size: int = DEFAULT_POOL_SIZE,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        socket_timeout: float = DEFAULT_SOCKET_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Configure the pool. No connection or client is created yet.

        Args:
            pool_size: Max connections in total; the authority service is a
                single destination, so this is also the per-destination bound.
            connect_timeout: Seconds to establish a connection.
            socket_timeout: Seconds for reads, writes and waiting on the pool.
            transport: Transport override (tests pass ``httpx.MockTransport``).
            logger: Optional logger.
        """
        self.limits = httpx.Limits(
            max_connections=pool_size, max_keepalive_connections=pool_size
        )
        self.timeout = httpx.Timeout(socket_timeout, connect=connect_timeout)
        self._transport = transport
        self._logger = logger or default_logger
        self._lock = threading.Lock()
        self._client: Optional[httpx.AsyncClient] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether aclose() has been called."""
        return self._closed

    @property
    def client(self) -> httpx.AsyncClient:
        """The shared client, created on first use.

        Raises:
            PoolClosedError: If the pool has been torn down.
        """
        return self.initialize()

    def initialize(self) -> httpx.AsyncClient:
        """Create the shared client if needed. Idempotent.

        Raises:
            PoolClosedError: If the pool has been torn down.
        """
        with self._lock:
            if self._closed:
                raise PoolClosedError(
                    "Authority connection pool is closed; no further lookups are possible"
                )
            if self._client is None:
                self._client = self._build_client()
                self._logger.info(
                    f"[AuthorityConnectionPool] Initialized pool "
                    f"(max_connections={self.limits.max_connections})"
                )
            return self._client

    async def aclose(self) -> None:
        """Close the shared client. Idempotent."""
        with self._lock:
            client, self._client = self._client, None
            self._closed = True
        if client is not None:
            await client.aclose()
            self._logger.info("[AuthorityConnectionPool] Closed pool")

    def _build_client(self) -> httpx.AsyncClient:
        # retries=0: a failed connect surfaces immediately instead of being replayed.
        transport = self._transport or httpx.AsyncHTTPTransport(limits=self.limits, retries=0)
        return httpx.AsyncClient(
            transport=transport,
            timeout=self.timeout,
            follow_redirects=True,
        )
