"""DOCX export via python-docx."""

import io
import logging
import shutil
from pathlib import Path

from docx import Document as DocxDocument
from docx.image.exceptions import UnrecognizedImageError
from docx.shared import Inches

from quire.application.dto.chunk_dto import ChunkWithImage
from quire.domain.exceptions import ConversionError
from quire.infrastructure.export.compiler import BlockKind, compile_blocks

logger = logging.getLogger(__name__)


class DocxWriter:
    """Word document; pictures resolved from ./images/ inside the export directory."""

    content_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def __init__(self, images_dir: Path, image_width_inches: float = 5.0) -> None:
        self._images_dir = images_dir
        self._image_width = Inches(image_width_inches)

    def image_reference(self, filename: str) -> str:
        return f"./images/{filename}"

    def write(self, title: str, chunks: list[ChunkWithImage], export_dir: Path) -> bytes:
        blocks = compile_blocks(chunks, self._images_dir, self.image_reference)
        (export_dir / "images").mkdir(parents=True, exist_ok=True)

        try:
            doc = DocxDocument()
            doc.add_heading(title, level=0)
            for block in blocks:
                if block.kind == BlockKind.CHAPTER:
                    doc.add_heading(block.value, level=1)
                elif block.kind == BlockKind.SECTION:
                    doc.add_heading(block.value, level=2)
                elif block.kind == BlockKind.PARAGRAPH:
                    doc.add_paragraph(block.value)
                else:
                    self._add_picture(doc, block.value, block.source, export_dir)
            buf = io.BytesIO()
            doc.save(buf)
        except Exception as e:
            raise ConversionError(f"Failed to convert to DOCX: {e}") from e
        return buf.getvalue()

    def _add_picture(self, doc: object, reference: str, source: Path | None, export_dir: Path) -> None:
        target = export_dir / reference
        try:
            if source is not None:
                shutil.copyfile(source, target)
            doc.add_picture(str(target), width=self._image_width)
        except (OSError, UnrecognizedImageError) as e:
            logger.warning("Failed to embed image %s in DOCX: %s", reference, e)
