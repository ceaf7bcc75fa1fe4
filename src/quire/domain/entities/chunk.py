"""Chunk entity - addressable unit of manuscript content."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Chunk:
    """Chunk - one paragraph of a manuscript plus its heading labels.

    ``order`` is the zero-based reading position inside the manuscript.
    """

    id: UUID
    manuscript_id: UUID
    order: int
    text: str
    heading_level1: str | None = None
    heading_level2: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
