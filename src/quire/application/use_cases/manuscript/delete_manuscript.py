"""Delete manuscript use case."""

import logging
from uuid import UUID

from quire.application.use_cases.ownership import load_owned_manuscript

logger = logging.getLogger(__name__)


class DeleteManuscriptUseCase:
    """Delete a manuscript; chunks and images go with it (cascade)."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str, manuscript_id: UUID) -> None:
        async with self._uow_factory() as uow:
            await load_owned_manuscript(uow, manuscript_id, user_id)
            await uow.manuscripts.delete(manuscript_id)
        logger.info("Deleted manuscript %s", manuscript_id)
