"""Repository ports."""

from quire.application.ports.repositories.chunk_repository import ChunkRepository
from quire.application.ports.repositories.image_repository import ImageRepository
from quire.application.ports.repositories.manuscript_repository import (
    ManuscriptRepository,
)
from quire.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "ChunkRepository",
    "ImageRepository",
    "ManuscriptRepository",
    "UserRepository",
]
