"""PostgreSQL async connection pool."""

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool


async def _configure_connection(conn: AsyncConnection) -> None:
    # Timestamps are stored and returned in UTC.
    await conn.execute("SET TIME ZONE 'UTC'")
    await conn.commit()


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    name: str = "quire",
) -> AsyncConnectionPool:
    """Create the pool closed; PoolLifespanMiddleware opens it on ASGI startup."""
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        name=name,
        configure=_configure_connection,
        open=False,
    )
