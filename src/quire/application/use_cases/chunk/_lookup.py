"""Chunk lookup scoped to one manuscript."""

from uuid import UUID

from quire.application.ports import UnitOfWork
from quire.domain.entities import Chunk
from quire.domain.exceptions import NotFound


async def load_chunk(uow: UnitOfWork, manuscript_id: UUID, chunk_id: UUID) -> Chunk:
    chunk = await uow.chunks.get_by_id(chunk_id)
    if not chunk or chunk.manuscript_id != manuscript_id:
        raise NotFound("Chunk", str(chunk_id))
    return chunk
