"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from quire.application.ports.repositories import (
    ChunkRepository,
    ImageRepository,
    ManuscriptRepository,
    UserRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def manuscripts(self) -> ManuscriptRepository: ...

    @property
    def chunks(self) -> ChunkRepository: ...

    @property
    def images(self) -> ImageRepository: ...

    @property
    def users(self) -> UserRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
