"""Delete a chunk and close the order gap."""

import logging
from uuid import UUID

from quire.application.use_cases.chunk._lookup import load_chunk
from quire.application.use_cases.ownership import load_owned_manuscript

logger = logging.getLogger(__name__)


class DeleteChunkUseCase:
    """Remove a chunk; every later chunk moves up by one."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str, manuscript_id: UUID, chunk_id: UUID) -> None:
        async with self._uow_factory() as uow:
            await load_owned_manuscript(uow, manuscript_id, user_id, for_update=True)
            chunk = await load_chunk(uow, manuscript_id, chunk_id)
            await uow.chunks.delete(chunk.id)
            await uow.chunks.shift_orders(manuscript_id, chunk.order, -1)

        logger.info("Deleted chunk %s at order %d", chunk_id, chunk.order)
