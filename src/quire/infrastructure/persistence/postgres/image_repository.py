"""PostgreSQL image repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from quire.domain.entities import Image

_COLUMNS = "id, manuscript_id, chunk_id, local_path, prompt_params, character_reference_url, created_at"


def _row_to_image(r: tuple) -> Image:
    return Image(
        id=r[0],
        manuscript_id=r[1],
        chunk_id=r[2],
        local_path=r[3],
        prompt_params=r[4] or {},
        character_reference_url=r[5],
        created_at=r[6],
    )


class PostgresImageRepository:
    """Image repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, image_id: UUID) -> Image | None:
        """Get image by id."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM image WHERE id = %s", (image_id,))
        r = await cur.fetchone()
        return _row_to_image(r) if r else None

    async def list(
        self,
        *,
        manuscript_id: UUID | None = None,
        page: int = 1,
        limit: int = 12,
    ) -> tuple[list[Image], int]:
        """Newest first, page-numbered. Returns (images, total)."""
        where = " WHERE manuscript_id = %s" if manuscript_id else ""
        filter_params: tuple = (manuscript_id,) if manuscript_id else ()
        cur = await self._conn.execute(f"SELECT count(*) FROM image{where}", filter_params)
        total = int((await cur.fetchone())[0])
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM image{where} ORDER BY created_at DESC LIMIT %s OFFSET %s",
            filter_params + (limit, (page - 1) * limit),
        )
        return [_row_to_image(r) for r in await cur.fetchall()], total

    async def create(self, image: Image) -> Image:
        """Create image."""
        await self._conn.execute(
            f"INSERT INTO image ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                image.id,
                image.manuscript_id,
                image.chunk_id,
                image.local_path,
                Jsonb(image.prompt_params),
                image.character_reference_url,
                image.created_at,
            ),
        )
        return image

    async def delete(self, image_id: UUID) -> None:
        """Delete image."""
        await self._conn.execute("DELETE FROM image WHERE id = %s", (image_id,))

    async def delete_by_chunk(self, chunk_id: UUID) -> None:
        """Delete every image of a chunk."""
        await self._conn.execute("DELETE FROM image WHERE chunk_id = %s", (chunk_id,))
