"""PostgreSQL user repository implementation."""

from psycopg import AsyncConnection

from quire.domain.entities import User


def _row_to_user(r: tuple) -> User:
    return User(id=r[0], email=r[1], display_name=r[2], created_at=r[3])


class PostgresUserRepository:
    """User repository implementation (table app_user)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by identity provider subject."""
        cur = await self._conn.execute(
            "SELECT id, email, display_name, created_at FROM app_user WHERE id = %s", (user_id,)
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def upsert(self, user: User) -> User:
        """Insert user unless already known."""
        await self._conn.execute(
            "INSERT INTO app_user (id, email, display_name, created_at) "
            "VALUES (%s, %s, %s, %s) ON CONFLICT (id) DO NOTHING",
            (user.id, user.email, user.display_name, user.created_at),
        )
        return user

    async def update_display_name(self, user_id: str, display_name: str) -> User | None:
        """Set display name, return updated user or None if unknown."""
        cur = await self._conn.execute(
            "UPDATE app_user SET display_name = %s WHERE id = %s "
            "RETURNING id, email, display_name, created_at",
            (display_name, user_id),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None
