"""Export manuscript use case."""

import logging
import re
import tempfile
from collections.abc import Mapping
from pathlib import Path
from uuid import UUID

from quire.application.dto.export_dto import ExportResult
from quire.application.ports import DocumentWriter
from quire.domain.exceptions import NotFound, ValidationError
from quire.domain.value_objects import ExportFormat

logger = logging.getLogger(__name__)


def sanitize_title(title: str) -> str:
    """Replace every non-alphanumeric character with an underscore."""
    return re.sub(r"[^a-zA-Z0-9]", "_", title) or "manuscript"


class ExportManuscriptUseCase:
    """Compile a manuscript's ordered chunks into a downloadable document."""

    def __init__(
        self,
        unit_of_work_factory: type,
        writers: Mapping[ExportFormat, DocumentWriter],
        tmp_dir: str | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._writers = writers
        self._tmp_dir = tmp_dir

    async def execute(self, manuscript_id: UUID, export_format: str) -> ExportResult:
        try:
            fmt = ExportFormat(export_format)
        except ValueError:
            raise ValidationError(f"Invalid export format: {export_format}") from None
        writer = self._writers.get(fmt)
        if writer is None:
            raise ValidationError(f"Export format not available: {fmt.value}")

        async with self._uow_factory() as uow:
            manuscript = await uow.manuscripts.get_by_id(manuscript_id)
            if not manuscript:
                raise NotFound("Manuscript", str(manuscript_id))
            chunks = await uow.chunks.list_with_latest_image(manuscript_id)

        logger.info(
            "Exporting manuscript %s (%d chunks) as %s", manuscript_id, len(chunks), fmt.value
        )
        with tempfile.TemporaryDirectory(prefix="quire-export-", dir=self._tmp_dir) as tmp:
            data = writer.write(manuscript.title, chunks, Path(tmp))

        return ExportResult(
            filename=f"{sanitize_title(manuscript.title)}.{fmt.extension}",
            content_type=writer.content_type,
            data=data,
        )
