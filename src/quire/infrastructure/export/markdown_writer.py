"""Markdown export."""

from pathlib import Path

from quire.application.dto.chunk_dto import ChunkWithImage
from quire.infrastructure.export.compiler import (
    IMAGE_ALT_TEXT,
    BlockKind,
    ExportBlock,
    compile_blocks,
)


def render_markdown(title: str, blocks: list[ExportBlock]) -> str:
    """Serialize blocks as markdown, one blank line between blocks."""
    parts = [f"# {title}"]
    for block in blocks:
        if block.kind == BlockKind.CHAPTER:
            parts.append(f"# {block.value}")
        elif block.kind == BlockKind.SECTION:
            parts.append(f"## {block.value}")
        elif block.kind == BlockKind.PARAGRAPH:
            parts.append(block.value)
        else:
            parts.append(f"![{IMAGE_ALT_TEXT}]({block.value})")
    return "".join(f"{p}\n\n" for p in parts)


class MarkdownWriter:
    """Flat markdown document; images point at absolute public URLs."""

    content_type = "text/markdown; charset=utf-8"

    def __init__(self, images_dir: Path, public_url: str) -> None:
        self._images_dir = images_dir
        self._public_url = public_url.rstrip("/")

    def image_reference(self, filename: str) -> str:
        return f"{self._public_url}/images/{filename}"

    def write(self, title: str, chunks: list[ChunkWithImage], export_dir: Path) -> bytes:
        blocks = compile_blocks(chunks, self._images_dir, self.image_reference)
        return render_markdown(title, blocks).encode("utf-8")
