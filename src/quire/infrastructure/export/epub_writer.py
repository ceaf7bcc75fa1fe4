"""EPUB export via ebooklib."""

import logging
import mimetypes
from html import escape
from pathlib import Path
from uuid import uuid4

from ebooklib import epub

from quire.application.dto.chunk_dto import ChunkWithImage
from quire.domain.exceptions import ConversionError
from quire.infrastructure.export.compiler import (
    IMAGE_ALT_TEXT,
    BlockKind,
    ExportBlock,
    compile_blocks,
)

logger = logging.getLogger(__name__)


def group_chapters(title: str, blocks: list[ExportBlock]) -> list[tuple[str, list[ExportBlock]]]:
    """Group blocks under their chapter heading.

    Blocks before the first chapter heading form an opening section named
    after the manuscript.
    """
    chapters: list[tuple[str, list[ExportBlock]]] = []
    current_title = title
    current: list[ExportBlock] = []
    for block in blocks:
        if block.kind == BlockKind.CHAPTER:
            if current:
                chapters.append((current_title, current))
            current_title, current = block.value, []
            continue
        current.append(block)
    if current or not chapters:
        chapters.append((current_title, current))
    return chapters


def _chapter_html(title: str, blocks: list[ExportBlock]) -> str:
    body = [f"<h1>{escape(title)}</h1>"]
    for block in blocks:
        if block.kind == BlockKind.SECTION:
            body.append(f"<h2>{escape(block.value)}</h2>")
        elif block.kind == BlockKind.PARAGRAPH:
            body.append(f"<p>{escape(block.value)}</p>")
        elif block.kind == BlockKind.IMAGE:
            body.append(
                f'<img src="{escape(block.value)}" alt="{IMAGE_ALT_TEXT}" class="chapter-image"/>'
            )
    return "<html><body>" + "\n".join(body) + "</body></html>"


class EpubWriter:
    """One XHTML document per chapter; images stored under images/ in the container."""

    content_type = "application/epub+zip"

    def __init__(self, images_dir: Path, language: str = "en") -> None:
        self._images_dir = images_dir
        self._language = language

    def image_reference(self, filename: str) -> str:
        return f"images/{filename}"

    def write(self, title: str, chunks: list[ChunkWithImage], export_dir: Path) -> bytes:
        blocks = compile_blocks(chunks, self._images_dir, self.image_reference)
        book = epub.EpubBook()
        book.set_identifier(f"quire-{uuid4()}")
        book.set_title(title)
        book.set_language(self._language)

        added: set[str] = set()
        for block in blocks:
            if block.kind != BlockKind.IMAGE or block.value in added or block.source is None:
                continue
            try:
                content = block.source.read_bytes()
            except OSError as e:
                logger.warning("Failed to read image %s for EPUB: %s", block.source, e)
                continue
            media_type = mimetypes.guess_type(block.source.name)[0] or "image/png"
            book.add_item(
                epub.EpubImage(
                    uid=f"img_{len(added)}",
                    file_name=block.value,
                    media_type=media_type,
                    content=content,
                )
            )
            added.add(block.value)

        chapters = []
        for i, (chapter_title, chapter_blocks) in enumerate(group_chapters(title, blocks), 1):
            visible = [
                b for b in chapter_blocks if b.kind != BlockKind.IMAGE or b.value in added
            ]
            item = epub.EpubHtml(
                title=chapter_title, file_name=f"chapter_{i:03d}.xhtml", lang=self._language
            )
            item.content = _chapter_html(chapter_title, visible)
            book.add_item(item)
            chapters.append(item)

        book.toc = tuple(chapters)
        book.spine = ["nav", *chapters]
        book.add_item(epub.EpubNcx())
        book.add_item(epub.EpubNav())

        target = export_dir / "manuscript.epub"
        try:
            epub.write_epub(str(target), book, {})
            return target.read_bytes()
        except Exception as e:
            raise ConversionError(f"Failed to generate EPUB: {e}") from e
