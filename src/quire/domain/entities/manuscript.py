"""Manuscript entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from quire.domain.value_objects import ImageSettings


@dataclass
class Manuscript:
    """Manuscript - authored markdown document owning an ordered chunk sequence."""

    id: UUID
    title: str
    author_id: str
    original_markdown: str
    created_at: datetime
    updated_at: datetime
    image_settings: ImageSettings = field(default_factory=ImageSettings)

    def is_owned_by(self, user_id: str) -> bool:
        return self.author_id == user_id
