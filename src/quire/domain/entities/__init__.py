"""Domain entities."""

from quire.domain.entities.chunk import Chunk
from quire.domain.entities.image import Image
from quire.domain.entities.manuscript import Manuscript
from quire.domain.entities.user import User

__all__ = [
    "Chunk",
    "Image",
    "Manuscript",
    "User",
]
