"""ASGI lifespan hooks for the database pool."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Open the pool when the server starts; drain and close it on shutdown.

    With ``wait_timeout`` set, startup blocks until ``min_size`` connections
    are ready and fails if the database cannot be reached in time.
    """

    def __init__(self, pool: AsyncConnectionPool, wait_timeout: float | None = None) -> None:
        self._pool = pool
        self._wait_timeout = wait_timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        if self._wait_timeout is None:
            await self._pool.open()
        else:
            await self._pool.open(wait=True, timeout=self._wait_timeout)
        logger.info(
            "Database pool %s opened (min=%d, max=%d)",
            self._pool.name,
            self._pool.min_size,
            self._pool.max_size,
        )

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("Database pool %s closed", self._pool.name)
