"""Manuscript DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class ManuscriptCreateInput:
    """Input for uploading a manuscript."""

    title: str
    markdown: str


@dataclass
class ManuscriptOutput:
    """Output DTO for manuscript."""

    id: UUID
    title: str
    author_id: str
    image_settings: dict[str, object]
    created_at: datetime
    updated_at: datetime
    chunk_count: int | None = None
