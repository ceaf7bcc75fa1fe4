"""Edit chunk content."""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from quire.application.dto.chunk_dto import ChunkEditInput
from quire.application.use_cases.chunk._lookup import load_chunk
from quire.application.use_cases.ownership import load_owned_manuscript
from quire.domain.entities import Chunk
from quire.domain.exceptions import ValidationError


class EditChunkUseCase:
    """Update text and heading labels of a chunk. Order is never touched here."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, user_id: str, manuscript_id: UUID, chunk_id: UUID, input_data: ChunkEditInput
    ) -> Chunk:
        for name in ("text", "heading_level1", "heading_level2"):
            value = getattr(input_data, name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{name} must be a string")
        if input_data.text is not None and not input_data.text.strip():
            raise ValidationError("text must not be empty")
        async with self._uow_factory() as uow:
            await load_owned_manuscript(uow, manuscript_id, user_id)
            chunk = await load_chunk(uow, manuscript_id, chunk_id)
            changes: dict[str, object] = {
                k: v
                for k, v in (
                    ("text", input_data.text),
                    ("heading_level1", input_data.heading_level1),
                    ("heading_level2", input_data.heading_level2),
                )
                if v is not None
            }
            updated = replace(chunk, **changes, updated_at=datetime.now(UTC))
            await uow.chunks.update(updated)
        return updated
