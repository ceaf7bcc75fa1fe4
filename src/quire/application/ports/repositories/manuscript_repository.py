"""Manuscript repository port."""

from typing import Protocol
from uuid import UUID

from quire.domain.entities import Manuscript


class ManuscriptRepository(Protocol):
    """Port for manuscript persistence."""

    async def get_by_id(self, manuscript_id: UUID) -> Manuscript | None: ...

    async def get_for_update(self, manuscript_id: UUID) -> Manuscript | None: ...

    async def list(
        self,
        *,
        author_id: str | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Manuscript], str | None]: ...

    async def create(self, manuscript: Manuscript) -> Manuscript: ...

    async def update(self, manuscript: Manuscript) -> Manuscript: ...

    async def delete(self, manuscript_id: UUID) -> None: ...
