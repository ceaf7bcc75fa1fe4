"""Pytest fixtures for Quire tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from quire.application.dto.chunk_dto import ChunkWithImage
from quire.domain.entities import Chunk, Image, Manuscript, User


# --- Fake repositories ---


class FakeManuscriptRepository:
    """In-memory manuscript repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Manuscript] = {}
        self.locked: list[UUID] = []

    async def get_by_id(self, manuscript_id: UUID) -> Manuscript | None:
        return self._by_id.get(manuscript_id)

    async def get_for_update(self, manuscript_id: UUID) -> Manuscript | None:
        self.locked.append(manuscript_id)
        return self._by_id.get(manuscript_id)

    async def list(
        self,
        *,
        author_id: str | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Manuscript], str | None]:
        items = [m for m in self._by_id.values() if not author_id or m.author_id == author_id]
        items.sort(key=lambda m: m.id)
        if cursor:
            cursor_uuid = UUID(cursor)
            items = [m for m in items if m.id > cursor_uuid]
        page = items[: limit + 1]
        next_cursor = str(page[limit].id) if len(page) > limit else None
        return (page[:limit], next_cursor)

    async def create(self, manuscript: Manuscript) -> Manuscript:
        self._by_id[manuscript.id] = manuscript
        return manuscript

    async def update(self, manuscript: Manuscript) -> Manuscript:
        self._by_id[manuscript.id] = manuscript
        return manuscript

    async def delete(self, manuscript_id: UUID) -> None:
        self._by_id.pop(manuscript_id, None)


class FakeImageRepository:
    """In-memory image repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Image] = {}

    async def get_by_id(self, image_id: UUID) -> Image | None:
        return self._by_id.get(image_id)

    async def list(
        self,
        *,
        manuscript_id: UUID | None = None,
        page: int = 1,
        limit: int = 12,
    ) -> tuple[list[Image], int]:
        items = [
            i for i in self._by_id.values() if not manuscript_id or i.manuscript_id == manuscript_id
        ]
        items.sort(key=lambda i: i.created_at, reverse=True)
        start = (page - 1) * limit
        return items[start : start + limit], len(items)

    async def create(self, image: Image) -> Image:
        self._by_id[image.id] = image
        return image

    async def delete(self, image_id: UUID) -> None:
        self._by_id.pop(image_id, None)

    async def delete_by_chunk(self, chunk_id: UUID) -> None:
        for image_id in [i.id for i in self._by_id.values() if i.chunk_id == chunk_id]:
            del self._by_id[image_id]

    def latest_for_chunk(self, chunk_id: UUID) -> Image | None:
        images = [i for i in self._by_id.values() if i.chunk_id == chunk_id]
        return max(images, key=lambda i: i.created_at) if images else None


class FakeChunkRepository:
    """In-memory chunk repository; images are looked up in the sibling image repository."""

    def __init__(self, images: FakeImageRepository | None = None) -> None:
        self._by_id: dict[UUID, Chunk] = {}
        self._images = images or FakeImageRepository()

    async def create(self, chunk: Chunk) -> Chunk:
        self._by_id[chunk.id] = chunk
        return chunk

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        for c in chunks:
            self._by_id[c.id] = c
        return chunks

    async def get_by_id(self, chunk_id: UUID) -> Chunk | None:
        return self._by_id.get(chunk_id)

    async def get_by_order(self, manuscript_id: UUID, order: int) -> Chunk | None:
        for c in self._by_id.values():
            if c.manuscript_id == manuscript_id and c.order == order:
                return c
        return None

    async def list_by_manuscript(self, manuscript_id: UUID) -> list[Chunk]:
        return sorted(
            (c for c in self._by_id.values() if c.manuscript_id == manuscript_id),
            key=lambda c: c.order,
        )

    async def list_with_latest_image(self, manuscript_id: UUID) -> list[ChunkWithImage]:
        return [
            ChunkWithImage(chunk=c, image=self._images.latest_for_chunk(c.id))
            for c in await self.list_by_manuscript(manuscript_id)
        ]

    async def list_without_images(self, manuscript_id: UUID) -> list[Chunk]:
        return [
            c
            for c in await self.list_by_manuscript(manuscript_id)
            if self._images.latest_for_chunk(c.id) is None
        ]

    async def count_by_manuscript(self, manuscript_id: UUID) -> int:
        return sum(1 for c in self._by_id.values() if c.manuscript_id == manuscript_id)

    async def update(self, chunk: Chunk) -> Chunk:
        self._by_id[chunk.id] = chunk
        return chunk

    async def delete(self, chunk_id: UUID) -> None:
        self._by_id.pop(chunk_id, None)
        await self._images.delete_by_chunk(chunk_id)

    async def shift_orders(self, manuscript_id: UUID, after_order: int, delta: int) -> None:
        for chunk_id, c in list(self._by_id.items()):
            if c.manuscript_id == manuscript_id and c.order > after_order:
                self._by_id[chunk_id] = replace(c, order=c.order + delta)

    def orders(self, manuscript_id: UUID) -> list[int]:
        return sorted(c.order for c in self._by_id.values() if c.manuscript_id == manuscript_id)

    def texts(self, manuscript_id: UUID) -> list[str]:
        return [
            c.text
            for c in sorted(
                (c for c in self._by_id.values() if c.manuscript_id == manuscript_id),
                key=lambda c: c.order,
            )
        ]


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    async def upsert(self, user: User) -> User:
        self._by_id.setdefault(user.id, user)
        return self._by_id[user.id]

    async def update_display_name(self, user_id: str, display_name: str) -> User | None:
        user = self._by_id.get(user_id)
        if not user:
            return None
        self._by_id[user_id] = replace(user, display_name=display_name)
        return self._by_id[user_id]


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.manuscripts = FakeManuscriptRepository()
        self.images = FakeImageRepository()
        self.chunks = FakeChunkRepository(self.images)
        self.users = FakeUserRepository()
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass


def make_factory(uow: FakeUnitOfWork):
    """Factory (async context manager) that yields the same uow on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Builders ---


def add_manuscript(
    uow: FakeUnitOfWork,
    texts: list[str],
    *,
    author_id: str = "author-1",
    title: str = "My Book",
    heading: str | None = None,
) -> tuple[Manuscript, list[Chunk]]:
    """Seed a manuscript with one chunk per text, orders 0..N-1."""
    now = datetime.now(UTC)
    manuscript = Manuscript(
        id=uuid4(),
        title=title,
        author_id=author_id,
        original_markdown="\n\n".join(texts),
        created_at=now,
        updated_at=now,
    )
    uow.manuscripts._by_id[manuscript.id] = manuscript
    chunks = []
    for order, text in enumerate(texts):
        chunk = Chunk(
            id=uuid4(),
            manuscript_id=manuscript.id,
            order=order,
            text=text,
            heading_level1=heading,
            created_at=now,
            updated_at=now,
        )
        uow.chunks._by_id[chunk.id] = chunk
        chunks.append(chunk)
    return manuscript, chunks


def add_image(
    uow: FakeUnitOfWork, chunk: Chunk, filename: str = "a.png", age_seconds: int = 0
) -> Image:
    image = Image(
        id=uuid4(),
        manuscript_id=chunk.manuscript_id,
        chunk_id=chunk.id,
        local_path=f"/images/{filename}",
        created_at=datetime.now(UTC) - timedelta(seconds=age_seconds),
    )
    uow.images._by_id[image.id] = image
    return image


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields fake_uow."""
    return make_factory(fake_uow)


@pytest.fixture
def mock_image_generator():
    """AsyncMock for ImageGenerator - returns a new /images path per call."""
    counter = iter(range(1, 10_000))

    async def _generate(prompt, settings, character_reference_url=None) -> str:
        return f"/images/generated-{next(counter)}.png"

    mock = AsyncMock()
    mock.generate = AsyncMock(side_effect=_generate)
    return mock


@pytest.fixture
def mock_speech_synthesizer():
    """AsyncMock for SpeechSynthesizer - returns fixed mp3 bytes."""
    mock = AsyncMock()
    mock.synthesize.return_value = b"ID3fake-mp3"
    return mock
