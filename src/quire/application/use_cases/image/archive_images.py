"""Select the chunks that go into one part of the image archive download."""

import math
from dataclasses import dataclass
from uuid import UUID

from quire.application.dto.chunk_dto import ChunkWithImage
from quire.domain.exceptions import NotFound, ValidationError


@dataclass
class ArchivePart:
    """Chunks with images for one zip part, plus pagination info."""

    title: str
    entries: list[ChunkWithImage]
    total_parts: int
    next_chunk: int | None


class ArchiveImagesUseCase:
    """Paginate a manuscript's illustrated chunks by chunk index."""

    def __init__(self, unit_of_work_factory: type, images_per_archive: int = 50) -> None:
        self._uow_factory = unit_of_work_factory
        self._per_archive = max(1, images_per_archive)

    async def execute(self, manuscript_id: UUID, start_chunk: int = 0) -> ArchivePart:
        if start_chunk < 0:
            raise ValidationError("chunk must be a non-negative integer")
        async with self._uow_factory() as uow:
            manuscript = await uow.manuscripts.get_by_id(manuscript_id)
            if not manuscript:
                raise NotFound("Manuscript", str(manuscript_id))
            rows = await uow.chunks.list_with_latest_image(manuscript_id)

        illustrated = [r for r in rows if r.image is not None]
        remaining = [r for r in illustrated if r.chunk.order >= start_chunk]
        entries = remaining[: self._per_archive]
        rest = remaining[self._per_archive :]
        return ArchivePart(
            title=manuscript.title,
            entries=entries,
            total_parts=math.ceil(len(illustrated) / self._per_archive),
            next_chunk=rest[0].chunk.order if rest else None,
        )
