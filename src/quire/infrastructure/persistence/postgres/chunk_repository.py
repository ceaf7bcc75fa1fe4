"""PostgreSQL chunk repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from quire.application.dto.chunk_dto import ChunkWithImage
from quire.domain.entities import Chunk, Image

_COLUMNS = (
    "id, manuscript_id, chunk_order, text, heading_level1, heading_level2, created_at, updated_at"
)
_INSERT = (
    f"INSERT INTO chunk ({_COLUMNS}) "
    "VALUES (%s, %s, %s, %s, %s, %s, COALESCE(%s, NOW()), COALESCE(%s, NOW()))"
)


def _row_to_chunk(r: tuple) -> Chunk:
    return Chunk(
        id=r[0],
        manuscript_id=r[1],
        order=r[2],
        text=r[3],
        heading_level1=r[4],
        heading_level2=r[5],
        created_at=r[6],
        updated_at=r[7],
    )


class PostgresChunkRepository:
    """Chunk repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, chunk: Chunk) -> Chunk:
        """Create chunk."""
        await self._conn.execute(
            _INSERT,
            (
                chunk.id,
                chunk.manuscript_id,
                chunk.order,
                chunk.text,
                chunk.heading_level1,
                chunk.heading_level2,
                chunk.created_at,
                chunk.updated_at,
            ),
        )
        return chunk

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        """Create chunks in batch."""
        async with self._conn.cursor() as cur:
            await cur.executemany(
                _INSERT,
                [
                    (
                        c.id,
                        c.manuscript_id,
                        c.order,
                        c.text,
                        c.heading_level1,
                        c.heading_level2,
                        c.created_at,
                        c.updated_at,
                    )
                    for c in chunks
                ],
            )
        return chunks

    async def get_by_id(self, chunk_id: UUID) -> Chunk | None:
        """Get chunk by id."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM chunk WHERE id = %s", (chunk_id,))
        r = await cur.fetchone()
        return _row_to_chunk(r) if r else None

    async def get_by_order(self, manuscript_id: UUID, order: int) -> Chunk | None:
        """Get the chunk at a given position."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM chunk WHERE manuscript_id = %s AND chunk_order = %s",
            (manuscript_id, order),
        )
        r = await cur.fetchone()
        return _row_to_chunk(r) if r else None

    async def list_by_manuscript(self, manuscript_id: UUID) -> list[Chunk]:
        """Get chunks in reading order."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM chunk WHERE manuscript_id = %s ORDER BY chunk_order",
            (manuscript_id,),
        )
        return [_row_to_chunk(r) for r in await cur.fetchall()]

    async def list_with_latest_image(self, manuscript_id: UUID) -> list[ChunkWithImage]:
        """Get chunks in reading order, each with its most recent image."""
        cur = await self._conn.execute(
            """
            SELECT c.id, c.manuscript_id, c.chunk_order, c.text, c.heading_level1,
                   c.heading_level2, c.created_at, c.updated_at,
                   i.id, i.local_path, i.prompt_params, i.character_reference_url, i.created_at
            FROM chunk c
            LEFT JOIN LATERAL (
                SELECT id, local_path, prompt_params, character_reference_url, created_at
                FROM image WHERE chunk_id = c.id
                ORDER BY created_at DESC LIMIT 1
            ) i ON true
            WHERE c.manuscript_id = %s
            ORDER BY c.chunk_order
            """,
            (manuscript_id,),
        )
        result: list[ChunkWithImage] = []
        for r in await cur.fetchall():
            chunk = _row_to_chunk(r[:8])
            image = None
            if r[8] is not None:
                image = Image(
                    id=r[8],
                    manuscript_id=chunk.manuscript_id,
                    chunk_id=chunk.id,
                    local_path=r[9],
                    prompt_params=r[10] or {},
                    character_reference_url=r[11],
                    created_at=r[12],
                )
            result.append(ChunkWithImage(chunk=chunk, image=image))
        return result

    async def list_without_images(self, manuscript_id: UUID) -> list[Chunk]:
        """Get chunks that have no image yet, in reading order."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM chunk c WHERE manuscript_id = %s "
            "AND NOT EXISTS (SELECT 1 FROM image i WHERE i.chunk_id = c.id) "
            "ORDER BY chunk_order",
            (manuscript_id,),
        )
        return [_row_to_chunk(r) for r in await cur.fetchall()]

    async def count_by_manuscript(self, manuscript_id: UUID) -> int:
        """Number of chunks of a manuscript."""
        cur = await self._conn.execute(
            "SELECT count(*) FROM chunk WHERE manuscript_id = %s", (manuscript_id,)
        )
        r = await cur.fetchone()
        return int(r[0])

    async def update(self, chunk: Chunk) -> Chunk:
        """Update chunk content and position."""
        await self._conn.execute(
            "UPDATE chunk SET chunk_order=%s, text=%s, heading_level1=%s, heading_level2=%s, "
            "updated_at=COALESCE(%s, NOW()) WHERE id=%s",
            (
                chunk.order,
                chunk.text,
                chunk.heading_level1,
                chunk.heading_level2,
                chunk.updated_at,
                chunk.id,
            ),
        )
        return chunk

    async def delete(self, chunk_id: UUID) -> None:
        """Delete chunk; its images cascade."""
        await self._conn.execute("DELETE FROM chunk WHERE id = %s", (chunk_id,))

    async def shift_orders(self, manuscript_id: UUID, after_order: int, delta: int) -> None:
        """Add delta to the order of every chunk positioned after after_order."""
        await self._conn.execute(
            "UPDATE chunk SET chunk_order = chunk_order + %s "
            "WHERE manuscript_id = %s AND chunk_order > %s",
            (delta, manuscript_id, after_order),
        )
