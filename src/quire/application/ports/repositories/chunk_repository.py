"""Chunk repository port."""

from typing import Protocol
from uuid import UUID

from quire.application.dto.chunk_dto import ChunkWithImage
from quire.domain.entities import Chunk


class ChunkRepository(Protocol):
    """Port for chunk persistence."""

    async def create(self, chunk: Chunk) -> Chunk: ...

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]: ...

    async def get_by_id(self, chunk_id: UUID) -> Chunk | None: ...

    async def get_by_order(self, manuscript_id: UUID, order: int) -> Chunk | None: ...

    async def list_by_manuscript(self, manuscript_id: UUID) -> list[Chunk]: ...

    async def list_with_latest_image(self, manuscript_id: UUID) -> list[ChunkWithImage]: ...

    async def list_without_images(self, manuscript_id: UUID) -> list[Chunk]: ...

    async def count_by_manuscript(self, manuscript_id: UUID) -> int: ...

    async def update(self, chunk: Chunk) -> Chunk: ...

    async def delete(self, chunk_id: UUID) -> None: ...

    async def shift_orders(self, manuscript_id: UUID, after_order: int, delta: int) -> None: ...
