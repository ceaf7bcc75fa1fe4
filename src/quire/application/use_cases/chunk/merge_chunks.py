"""Merge two adjacent chunks."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from quire.application.dto.chunk_dto import MergeInput
from quire.application.use_cases.ownership import load_owned_manuscript
from quire.domain.entities import Chunk
from quire.domain.exceptions import NotFound, ValidationError
from quire.domain.ordering import merge_texts

logger = logging.getLogger(__name__)


class MergeChunksUseCase:
    """Append the second chunk's text to the first, delete the second, close the gap."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str, manuscript_id: UUID, input_data: MergeInput) -> Chunk:
        async with self._uow_factory() as uow:
            await load_owned_manuscript(uow, manuscript_id, user_id, for_update=True)
            first = await uow.chunks.get_by_id(input_data.first_chunk_id)
            second = await uow.chunks.get_by_id(input_data.second_chunk_id)
            if not first or not second:
                raise NotFound("Chunk")
            if first.manuscript_id != second.manuscript_id:
                raise ValidationError("Chunks belong to different manuscripts")
            if first.manuscript_id != manuscript_id:
                raise NotFound("Chunk")
            if second.order != first.order + 1:
                raise ValidationError("Second chunk must immediately follow the first")

            merged = replace(
                first,
                text=merge_texts(first.text, second.text),
                updated_at=datetime.now(UTC),
            )
            await uow.chunks.update(merged)
            await uow.chunks.delete(second.id)
            await uow.chunks.shift_orders(manuscript_id, second.order, -1)

        logger.info("Merged chunk %s into %s", second.id, first.id)
        return merged
