"""Delete image use case."""

from uuid import UUID

from quire.application.use_cases.ownership import load_owned_manuscript
from quire.domain.exceptions import NotFound


class DeleteImageUseCase:
    """Delete an image record. Chunk text is not affected."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str, image_id: UUID) -> None:
        async with self._uow_factory() as uow:
            image = await uow.images.get_by_id(image_id)
            if not image:
                raise NotFound("Image", str(image_id))
            await load_owned_manuscript(uow, image.manuscript_id, user_id)
            await uow.images.delete(image_id)
