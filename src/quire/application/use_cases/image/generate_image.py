"""Generate an illustration for one chunk."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from quire.application.ports import ImageGenerator
from quire.application.use_cases.ownership import load_owned_manuscript
from quire.domain.entities import Image
from quire.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class GenerateImageUseCase:
    """Generate an image for a chunk, replacing any previous image of that chunk."""

    def __init__(self, unit_of_work_factory: type, image_generator: ImageGenerator) -> None:
        self._uow_factory = unit_of_work_factory
        self._image_generator = image_generator

    async def execute(
        self,
        user_id: str,
        chunk_id: UUID,
        prompt: str | None = None,
        character_reference_url: str | None = None,
    ) -> Image:
        async with self._uow_factory() as uow:
            chunk = await uow.chunks.get_by_id(chunk_id)
            if not chunk:
                raise NotFound("Chunk", str(chunk_id))
            manuscript = await load_owned_manuscript(uow, chunk.manuscript_id, user_id)

        # The provider call is slow; no transaction is held while it runs.
        prompt = (prompt or "").strip() or chunk.text
        logger.info("Generating image for chunk %s", chunk_id)
        local_path = await self._image_generator.generate(
            prompt, manuscript.image_settings, character_reference_url
        )

        image = Image(
            id=uuid4(),
            manuscript_id=chunk.manuscript_id,
            chunk_id=chunk.id,
            local_path=local_path,
            created_at=datetime.now(UTC),
            prompt_params={"prompt": prompt},
            character_reference_url=character_reference_url,
        )
        try:
            async with self._uow_factory() as uow:
                # Chunk deletes hold the same lock, so the chunk cannot vanish after this check.
                await uow.manuscripts.get_for_update(chunk.manuscript_id)
                if not await uow.chunks.get_by_id(chunk.id):
                    logger.warning(
                        "Chunk %s was deleted while its image was generated", chunk.id
                    )
                    raise NotFound("Chunk", str(chunk_id))
                await uow.images.delete_by_chunk(chunk.id)
                await uow.images.create(image)
        except Exception:
            await self._image_generator.discard(local_path)
            raise
        return image
