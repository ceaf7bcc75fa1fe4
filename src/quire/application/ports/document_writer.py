"""Document writer port - compiled export formats."""

from pathlib import Path
from typing import Protocol

from quire.application.dto.chunk_dto import ChunkWithImage


class DocumentWriter(Protocol):
    """Port for serializing an ordered chunk sequence into one document."""

    content_type: str

    def write(self, title: str, chunks: list[ChunkWithImage], export_dir: Path) -> bytes: ...
