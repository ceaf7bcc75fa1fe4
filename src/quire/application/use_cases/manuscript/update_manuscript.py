"""Update manuscript title and image settings."""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from quire.application.dto.manuscript_dto import ManuscriptOutput
from quire.application.use_cases.ownership import load_owned_manuscript
from quire.domain.entities import Manuscript
from quire.domain.exceptions import ValidationError
from quire.domain.value_objects import ImageSettings


def _to_output(m: Manuscript) -> ManuscriptOutput:
    return ManuscriptOutput(
        id=m.id,
        title=m.title,
        author_id=m.author_id,
        image_settings=m.image_settings.to_dict(),
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


class UpdateManuscriptUseCase:
    """Rename a manuscript or replace its image settings (author only)."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def rename(self, user_id: str, manuscript_id: UUID, title: str) -> ManuscriptOutput:
        title = title.strip() if isinstance(title, str) else ""
        if not title:
            raise ValidationError("title is required")
        async with self._uow_factory() as uow:
            manuscript = await load_owned_manuscript(uow, manuscript_id, user_id)
            updated = replace(manuscript, title=title, updated_at=datetime.now(UTC))
            await uow.manuscripts.update(updated)
        return _to_output(updated)

    async def update_image_settings(
        self, user_id: str, manuscript_id: UUID, settings: dict[str, object]
    ) -> ManuscriptOutput:
        image_settings = ImageSettings.from_dict(settings)
        async with self._uow_factory() as uow:
            manuscript = await load_owned_manuscript(uow, manuscript_id, user_id)
            updated = replace(
                manuscript, image_settings=image_settings, updated_at=datetime.now(UTC)
            )
            await uow.manuscripts.update(updated)
        return _to_output(updated)
