"""Split one chunk into two consecutive chunks."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from quire.application.dto.chunk_dto import SplitResult
from quire.application.use_cases.chunk._lookup import load_chunk
from quire.application.use_cases.ownership import load_owned_manuscript
from quire.domain.entities import Chunk
from quire.domain.ordering import split_text

logger = logging.getLogger(__name__)


class SplitChunkUseCase:
    """Cut a chunk at split_point; the tail becomes a new chunk right after it."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, user_id: str, manuscript_id: UUID, chunk_id: UUID, split_point: int
    ) -> SplitResult:
        async with self._uow_factory() as uow:
            await load_owned_manuscript(uow, manuscript_id, user_id, for_update=True)
            chunk = await load_chunk(uow, manuscript_id, chunk_id)
            head, tail = split_text(chunk.text, split_point)

            now = datetime.now(UTC)
            await uow.chunks.shift_orders(manuscript_id, chunk.order, 1)
            first = replace(chunk, text=head, updated_at=now)
            second = Chunk(
                id=uuid4(),
                manuscript_id=manuscript_id,
                order=chunk.order + 1,
                text=tail,
                heading_level1=chunk.heading_level1,
                created_at=now,
                updated_at=now,
            )
            await uow.chunks.update(first)
            await uow.chunks.create(second)

        logger.info("Split chunk %s at %d into %s", chunk_id, split_point, second.id)
        return SplitResult(first=first, second=second)
