"""Document export: compiler and per-format writers."""

from pathlib import Path

from quire.application.ports import DocumentWriter
from quire.domain.value_objects import ExportFormat
from quire.infrastructure.export.docx_writer import DocxWriter
from quire.infrastructure.export.epub_writer import EpubWriter
from quire.infrastructure.export.markdown_writer import MarkdownWriter


def create_writers(images_dir: Path, public_url: str) -> dict[ExportFormat, DocumentWriter]:
    """Return the writer for every supported export format."""
    return {
        ExportFormat.MARKDOWN: MarkdownWriter(images_dir, public_url),
        ExportFormat.EPUB: EpubWriter(images_dir),
        ExportFormat.DOCX: DocxWriter(images_dir),
    }


__all__ = ["DocxWriter", "EpubWriter", "MarkdownWriter", "create_writers"]
