"""Image repository port."""

from typing import Protocol
from uuid import UUID

from quire.domain.entities import Image


class ImageRepository(Protocol):
    """Port for image persistence."""

    async def get_by_id(self, image_id: UUID) -> Image | None: ...

    async def list(
        self,
        *,
        manuscript_id: UUID | None = None,
        page: int = 1,
        limit: int = 12,
    ) -> tuple[list[Image], int]: ...

    async def create(self, image: Image) -> Image: ...

    async def delete(self, image_id: UUID) -> None: ...

    async def delete_by_chunk(self, chunk_id: UUID) -> None: ...
