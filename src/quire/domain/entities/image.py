"""Image entity."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePosixPath
from uuid import UUID


@dataclass
class Image:
    """Generated illustration attached to one chunk."""

    id: UUID
    manuscript_id: UUID
    chunk_id: UUID
    local_path: str
    created_at: datetime
    prompt_params: dict[str, object] = field(default_factory=dict)
    character_reference_url: str | None = None

    @property
    def filename(self) -> str:
        """Bare file name of the stored image (``/images/abc.png`` -> ``abc.png``)."""
        return PurePosixPath(self.local_path).name
