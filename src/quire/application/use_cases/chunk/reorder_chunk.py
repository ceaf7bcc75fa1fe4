"""Move a chunk one position up or down."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from quire.application.use_cases.chunk._lookup import load_chunk
from quire.application.use_cases.ownership import load_owned_manuscript
from quire.domain.entities import Chunk
from quire.domain.ordering import neighbour_order
from quire.domain.value_objects import Direction

logger = logging.getLogger(__name__)


class ReorderChunkUseCase:
    """Swap a chunk's order with its neighbour. No-op at the sequence boundaries."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, user_id: str, manuscript_id: UUID, chunk_id: UUID, direction: Direction
    ) -> Chunk:
        async with self._uow_factory() as uow:
            await load_owned_manuscript(uow, manuscript_id, user_id, for_update=True)
            chunk = await load_chunk(uow, manuscript_id, chunk_id)
            count = await uow.chunks.count_by_manuscript(manuscript_id)
            target = neighbour_order(chunk.order, direction, count)
            if target is None:
                return chunk
            neighbour = await uow.chunks.get_by_order(manuscript_id, target)
            if neighbour is None:
                return chunk

            now = datetime.now(UTC)
            moved = replace(chunk, order=target, updated_at=now)
            await uow.chunks.update(replace(neighbour, order=chunk.order, updated_at=now))
            await uow.chunks.update(moved)

        logger.info("Moved chunk %s %s to order %d", chunk_id, direction.value, target)
        return moved
