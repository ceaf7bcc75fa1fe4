"""Batch image generation for every chunk that has no image yet."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from quire.application.dto.export_dto import ImageBatchResult
from quire.application.ports import ImageGenerator
from quire.application.use_cases.ownership import load_owned_manuscript
from quire.domain.entities import Image
from quire.domain.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class GenerateImagesUseCase:
    """Walk image-less chunks sequentially; a failed chunk is logged and skipped."""

    def __init__(self, unit_of_work_factory: type, image_generator: ImageGenerator) -> None:
        self._uow_factory = unit_of_work_factory
        self._image_generator = image_generator

    async def execute(self, user_id: str, manuscript_id: UUID) -> ImageBatchResult:
        async with self._uow_factory() as uow:
            manuscript = await load_owned_manuscript(uow, manuscript_id, user_id)
            pending = await uow.chunks.list_without_images(manuscript_id)

        generated = 0
        failed = 0
        for chunk in pending:
            local_path = None
            try:
                local_path = await self._image_generator.generate(
                    chunk.text, manuscript.image_settings
                )
                async with self._uow_factory() as uow:
                    await uow.images.create(
                        Image(
                            id=uuid4(),
                            manuscript_id=manuscript_id,
                            chunk_id=chunk.id,
                            local_path=local_path,
                            created_at=datetime.now(UTC),
                            prompt_params={"prompt": chunk.text},
                        )
                    )
            except UpstreamServiceError as e:
                failed += 1
                logger.warning("Failed to generate image for chunk %s: %s", chunk.id, e)
                continue
            except Exception:
                # The chunk may have been deleted while the batch was running.
                failed += 1
                logger.warning("Failed to store image for chunk %s", chunk.id, exc_info=True)
                if local_path is not None:
                    await self._image_generator.discard(local_path)
                continue
            generated += 1
            logger.info("Generated image for chunk %s", chunk.id)

        return ImageBatchResult(total_chunks=len(pending), generated=generated, failed=failed)
