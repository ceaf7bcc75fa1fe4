"""Manuscript lookup with ownership check, shared by mutating use cases."""

from uuid import UUID

from quire.application.ports import UnitOfWork
from quire.domain.entities import Manuscript
from quire.domain.exceptions import Forbidden, NotFound


async def load_owned_manuscript(
    uow: UnitOfWork,
    manuscript_id: UUID,
    user_id: str,
    *,
    for_update: bool = False,
) -> Manuscript:
    """Fetch manuscript (row-locked when for_update) and require user_id to be its author."""
    if for_update:
        manuscript = await uow.manuscripts.get_for_update(manuscript_id)
    else:
        manuscript = await uow.manuscripts.get_by_id(manuscript_id)
    if not manuscript:
        raise NotFound("Manuscript", str(manuscript_id))
    if not manuscript.is_owned_by(user_id):
        raise Forbidden("Only the author can modify this manuscript")
    return manuscript
