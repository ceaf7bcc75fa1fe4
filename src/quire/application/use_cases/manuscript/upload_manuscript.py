"""Upload manuscript use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from quire.application.dto.manuscript_dto import ManuscriptCreateInput, ManuscriptOutput
from quire.application.ports import Segmenter
from quire.domain.entities import Chunk, Manuscript, User
from quire.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class UploadManuscriptUseCase:
    """Store a markdown manuscript and its segmented chunks in one transaction."""

    def __init__(self, unit_of_work_factory: type, segmenter: Segmenter) -> None:
        self._uow_factory = unit_of_work_factory
        self._segmenter = segmenter

    async def execute(
        self, user_id: str, email: str | None, input_data: ManuscriptCreateInput
    ) -> ManuscriptOutput:
        """Upload manuscript."""
        title = input_data.title.strip() if isinstance(input_data.title, str) else ""
        if not title:
            raise ValidationError("title is required")
        if not self._segmenter.validate(input_data.markdown):
            raise ValidationError("markdown could not be parsed")

        now = datetime.now(UTC)
        manuscript = Manuscript(
            id=uuid4(),
            title=title,
            author_id=user_id,
            original_markdown=input_data.markdown,
            created_at=now,
            updated_at=now,
        )
        chunks = [
            Chunk(
                id=uuid4(),
                manuscript_id=manuscript.id,
                order=draft.order,
                text=draft.text,
                heading_level1=draft.heading_level1,
                heading_level2=draft.heading_level2,
                created_at=now,
                updated_at=now,
            )
            for draft in self._segmenter.segment(input_data.markdown)
        ]

        async with self._uow_factory() as uow:
            await uow.users.upsert(User(id=user_id, email=email or "", created_at=now))
            await uow.manuscripts.create(manuscript)
            if chunks:
                await uow.chunks.create_batch(chunks)

        logger.info("Uploaded manuscript %s with %d chunks", manuscript.id, len(chunks))
        return ManuscriptOutput(
            id=manuscript.id,
            title=manuscript.title,
            author_id=manuscript.author_id,
            image_settings=manuscript.image_settings.to_dict(),
            created_at=manuscript.created_at,
            updated_at=manuscript.updated_at,
            chunk_count=len(chunks),
        )
