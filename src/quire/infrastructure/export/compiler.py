"""Export compiler - turns ordered chunks into a flat list of document blocks."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from quire.application.dto.chunk_dto import ChunkWithImage

logger = logging.getLogger(__name__)

IMAGE_ALT_TEXT = "Generated illustration"


class BlockKind(StrEnum):
    """Kind of a compiled document block."""

    CHAPTER = "chapter"
    SECTION = "section"
    PARAGRAPH = "paragraph"
    IMAGE = "image"


@dataclass(frozen=True)
class ExportBlock:
    """One heading, paragraph or image of the compiled document.

    For images ``value`` is the format-specific reference and ``source`` the
    file on disk.
    """

    kind: BlockKind
    value: str
    source: Path | None = None


def compile_blocks(
    chunks: Iterable[ChunkWithImage],
    images_dir: Path,
    image_reference: Callable[[str], str],
) -> list[ExportBlock]:
    """Walk chunks in order, dropping repeated chapter headings and echoed text.

    A chapter heading is emitted only when it differs from the current one, a
    section heading only when it differs from the chunk text, and the text
    only when it matches neither heading. Images whose file is missing are
    logged and skipped.
    """
    blocks: list[ExportBlock] = []
    current_chapter: str | None = None
    for row in chunks:
        chunk = row.chunk
        if chunk.heading_level1 and chunk.heading_level1 != current_chapter:
            blocks.append(ExportBlock(BlockKind.CHAPTER, chunk.heading_level1))
            current_chapter = chunk.heading_level1
        if chunk.heading_level2 and chunk.heading_level2 != chunk.text:
            blocks.append(ExportBlock(BlockKind.SECTION, chunk.heading_level2))
        if chunk.text != chunk.heading_level1 and chunk.text != chunk.heading_level2:
            blocks.append(ExportBlock(BlockKind.PARAGRAPH, chunk.text))

        if row.image is None:
            continue
        filename = row.image.filename
        source = images_dir / filename
        if not source.is_file():
            logger.warning("Image %s for chunk %s not found, skipping", source, chunk.id)
            continue
        blocks.append(ExportBlock(BlockKind.IMAGE, image_reference(filename), source))
    return blocks
