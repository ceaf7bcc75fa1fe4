"""Segmenter port - markdown to chunk drafts."""

from collections.abc import Iterator
from typing import Protocol

from quire.application.dto.chunk_dto import ChunkDraft


class Segmenter(Protocol):
    """Port for splitting a manuscript into chunks."""

    def segment(self, markdown: str) -> Iterator[ChunkDraft]: ...

    def validate(self, markdown: str) -> bool: ...
