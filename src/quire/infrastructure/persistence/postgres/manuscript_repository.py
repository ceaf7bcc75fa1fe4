"""PostgreSQL manuscript repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from quire.domain.entities import Manuscript
from quire.domain.value_objects import ImageSettings

_COLUMNS = "id, title, author_id, original_markdown, image_settings, created_at, updated_at"


def _row_to_manuscript(r: tuple) -> Manuscript:
    return Manuscript(
        id=r[0],
        title=r[1],
        author_id=r[2],
        original_markdown=r[3],
        image_settings=ImageSettings.from_dict(r[4]),
        created_at=r[5],
        updated_at=r[6],
    )


class PostgresManuscriptRepository:
    """Manuscript repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, manuscript_id: UUID) -> Manuscript | None:
        """Get manuscript by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM manuscript WHERE id = %s", (manuscript_id,)
        )
        r = await cur.fetchone()
        return _row_to_manuscript(r) if r else None

    async def get_for_update(self, manuscript_id: UUID) -> Manuscript | None:
        """Get manuscript and lock its row until the transaction ends.

        Serializes chunk order mutations of one manuscript.
        """
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM manuscript WHERE id = %s FOR UPDATE", (manuscript_id,)
        )
        r = await cur.fetchone()
        return _row_to_manuscript(r) if r else None

    async def list(
        self,
        *,
        author_id: str | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Manuscript], str | None]:
        """List manuscripts with cursor pagination."""
        conditions = []
        _params: list[object] = []
        if author_id:
            conditions.append("author_id = %s")
            _params.append(author_id)
        if cursor:
            conditions.append("id > %s")
            _params.append(UUID(cursor))
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        params = tuple(_params) + (limit + 1,)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM manuscript{where} ORDER BY id LIMIT %s", params
        )
        rows = await cur.fetchall()
        items = [_row_to_manuscript(r) for r in rows[:limit]]
        next_cursor = str(rows[limit][0]) if len(rows) > limit else None
        return items, next_cursor

    async def create(self, manuscript: Manuscript) -> Manuscript:
        """Create manuscript."""
        await self._conn.execute(
            f"INSERT INTO manuscript ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                manuscript.id,
                manuscript.title,
                manuscript.author_id,
                manuscript.original_markdown,
                Jsonb(manuscript.image_settings.to_dict()),
                manuscript.created_at,
                manuscript.updated_at,
            ),
        )
        return manuscript

    async def update(self, manuscript: Manuscript) -> Manuscript:
        """Update title and image settings."""
        await self._conn.execute(
            "UPDATE manuscript SET title=%s, image_settings=%s, updated_at=%s WHERE id=%s",
            (
                manuscript.title,
                Jsonb(manuscript.image_settings.to_dict()),
                manuscript.updated_at,
                manuscript.id,
            ),
        )
        return manuscript

    async def delete(self, manuscript_id: UUID) -> None:
        """Delete manuscript; chunks and images cascade."""
        await self._conn.execute("DELETE FROM manuscript WHERE id = %s", (manuscript_id,))
