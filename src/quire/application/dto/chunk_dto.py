"""Chunk DTOs."""

from dataclasses import dataclass
from uuid import UUID

from quire.domain.entities import Chunk, Image


@dataclass
class ChunkDraft:
    """Chunk produced by segmentation, not yet persisted."""

    order: int
    text: str
    heading_level1: str | None = None
    heading_level2: str | None = None


@dataclass
class ChunkEditInput:
    """Content changes for a single chunk. None leaves a field unchanged."""

    text: str | None = None
    heading_level1: str | None = None
    heading_level2: str | None = None


@dataclass
class SplitResult:
    """Both halves of a split chunk."""

    first: Chunk
    second: Chunk


@dataclass
class ChunkWithImage:
    """Chunk together with its most recent image (if any)."""

    chunk: Chunk
    image: Image | None = None


@dataclass
class MergeInput:
    """Identifiers of two adjacent chunks to merge."""

    first_chunk_id: UUID
    second_chunk_id: UUID
