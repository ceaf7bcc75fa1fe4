"""Unit tests for image, archive and speech use cases."""

from uuid import uuid4

import pytest

from quire.application.use_cases.image.archive_images import ArchiveImagesUseCase
from quire.application.use_cases.image.delete_image import DeleteImageUseCase
from quire.application.use_cases.image.generate_image import GenerateImageUseCase
from quire.application.use_cases.image.generate_images import GenerateImagesUseCase
from quire.application.use_cases.speech.synthesize_speech import (
    MAX_SPEECH_CHARS,
    SynthesizeSpeechUseCase,
)
from quire.domain.exceptions import Forbidden, NotFound, UpstreamServiceError, ValidationError

from tests.conftest import FakeUnitOfWork, add_image, add_manuscript

AUTHOR = "author-1"


# --- GenerateImageUseCase ---


@pytest.mark.asyncio
async def test_generate_image_replaces_previous(
    fake_uow: FakeUnitOfWork, uow_factory, mock_image_generator
) -> None:
    manuscript, (chunk,) = add_manuscript(fake_uow, ["A quiet harbour."])
    old = add_image(fake_uow, chunk, "old.png", age_seconds=60)

    image = await GenerateImageUseCase(uow_factory, mock_image_generator).execute(
        AUTHOR, chunk.id, character_reference_url="https://example.com/hero.png"
    )

    assert image.local_path == "/images/generated-1.png"
    assert image.prompt_params == {"prompt": "A quiet harbour."}
    assert await fake_uow.images.get_by_id(old.id) is None
    assert fake_uow.images.latest_for_chunk(chunk.id).id == image.id
    mock_image_generator.generate.assert_awaited_once_with(
        "A quiet harbour.", manuscript.image_settings, "https://example.com/hero.png"
    )


@pytest.mark.asyncio
async def test_generate_image_keeps_old_image_on_failure(
    fake_uow: FakeUnitOfWork, uow_factory, mock_image_generator
) -> None:
    _, (chunk,) = add_manuscript(fake_uow, ["Text."])
    old = add_image(fake_uow, chunk, "old.png")
    mock_image_generator.generate.side_effect = UpstreamServiceError("boom")

    with pytest.raises(UpstreamServiceError):
        await GenerateImageUseCase(uow_factory, mock_image_generator).execute(AUTHOR, chunk.id)

    assert await fake_uow.images.get_by_id(old.id) is not None


@pytest.mark.asyncio
async def test_generate_image_custom_prompt_and_ownership(
    fake_uow: FakeUnitOfWork, uow_factory, mock_image_generator
) -> None:
    _, (chunk,) = add_manuscript(fake_uow, ["Text."])
    use_case = GenerateImageUseCase(uow_factory, mock_image_generator)

    image = await use_case.execute(AUTHOR, chunk.id, prompt="A lighthouse")
    assert image.prompt_params == {"prompt": "A lighthouse"}

    with pytest.raises(Forbidden):
        await use_case.execute("intruder", chunk.id)
    with pytest.raises(NotFound):
        await use_case.execute(AUTHOR, uuid4())


@pytest.mark.asyncio
async def test_generate_image_chunk_deleted_during_generation(
    fake_uow: FakeUnitOfWork, uow_factory, mock_image_generator
) -> None:
    manuscript, (chunk, _) = add_manuscript(fake_uow, ["Text.", "More."])

    async def _generate(prompt, settings, character_reference_url=None):
        await fake_uow.chunks.delete(chunk.id)
        return "/images/late.png"

    mock_image_generator.generate.side_effect = _generate

    with pytest.raises(NotFound):
        await GenerateImageUseCase(uow_factory, mock_image_generator).execute(AUTHOR, chunk.id)

    images, total = await fake_uow.images.list(manuscript_id=manuscript.id)
    assert (images, total) == ([], 0)
    assert manuscript.id in fake_uow.manuscripts.locked
    mock_image_generator.discard.assert_awaited_once_with("/images/late.png")


# --- GenerateImagesUseCase ---


@pytest.mark.asyncio
async def test_batch_generation_skips_illustrated_and_tolerates_failures(
    fake_uow: FakeUnitOfWork, uow_factory, mock_image_generator
) -> None:
    manuscript, (a, b, c, d) = add_manuscript(fake_uow, ["A", "B", "C", "D"])
    add_image(fake_uow, a, "a.png")

    async def _generate(prompt, settings, character_reference_url=None):
        if prompt == "C":
            raise UpstreamServiceError("rate limited")
        return f"/images/{prompt}.png"

    mock_image_generator.generate.side_effect = _generate

    result = await GenerateImagesUseCase(uow_factory, mock_image_generator).execute(
        AUTHOR, manuscript.id
    )

    assert (result.total_chunks, result.generated, result.failed) == (3, 2, 1)
    assert fake_uow.images.latest_for_chunk(b.id).local_path == "/images/B.png"
    assert fake_uow.images.latest_for_chunk(c.id) is None
    assert fake_uow.images.latest_for_chunk(d.id).local_path == "/images/D.png"


@pytest.mark.asyncio
async def test_batch_generation_continues_when_storing_fails(
    fake_uow: FakeUnitOfWork, uow_factory, mock_image_generator
) -> None:
    manuscript, (a, b, c) = add_manuscript(fake_uow, ["A", "B", "C"])
    create = fake_uow.images.create

    async def _create(image):
        if image.chunk_id == a.id:
            raise RuntimeError("insert or update on table image violates foreign key constraint")
        return await create(image)

    fake_uow.images.create = _create

    result = await GenerateImagesUseCase(uow_factory, mock_image_generator).execute(
        AUTHOR, manuscript.id
    )

    assert (result.total_chunks, result.generated, result.failed) == (3, 2, 1)
    assert fake_uow.images.latest_for_chunk(a.id) is None
    assert fake_uow.images.latest_for_chunk(b.id) is not None
    assert fake_uow.images.latest_for_chunk(c.id) is not None
    mock_image_generator.discard.assert_awaited_once_with("/images/generated-1.png")


@pytest.mark.asyncio
async def test_batch_generation_requires_author(
    fake_uow: FakeUnitOfWork, uow_factory, mock_image_generator
) -> None:
    manuscript, _ = add_manuscript(fake_uow, ["A"])
    with pytest.raises(Forbidden):
        await GenerateImagesUseCase(uow_factory, mock_image_generator).execute(
            "intruder", manuscript.id
        )
    mock_image_generator.generate.assert_not_awaited()


# --- DeleteImageUseCase ---


@pytest.mark.asyncio
async def test_delete_image_leaves_chunk(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    _, (chunk,) = add_manuscript(fake_uow, ["A"])
    image = add_image(fake_uow, chunk)

    await DeleteImageUseCase(uow_factory).execute(AUTHOR, image.id)

    assert await fake_uow.images.get_by_id(image.id) is None
    assert await fake_uow.chunks.get_by_id(chunk.id) is not None


@pytest.mark.asyncio
async def test_delete_image_not_found(uow_factory) -> None:
    with pytest.raises(NotFound):
        await DeleteImageUseCase(uow_factory).execute(AUTHOR, uuid4())


# --- ArchiveImagesUseCase ---


@pytest.mark.asyncio
async def test_archive_parts_paginate_by_chunk_index(
    fake_uow: FakeUnitOfWork, uow_factory
) -> None:
    manuscript, chunks = add_manuscript(fake_uow, ["A", "B", "C", "D", "E"])
    for chunk in (chunks[0], chunks[2], chunks[3], chunks[4]):
        add_image(fake_uow, chunk, f"{chunk.text}.png")
    use_case = ArchiveImagesUseCase(uow_factory, images_per_archive=2)

    first = await use_case.execute(manuscript.id)
    assert [e.chunk.text for e in first.entries] == ["A", "C"]
    assert first.total_parts == 2
    assert first.next_chunk == 3

    second = await use_case.execute(manuscript.id, start_chunk=first.next_chunk)
    assert [e.chunk.text for e in second.entries] == ["D", "E"]
    assert second.next_chunk is None


@pytest.mark.asyncio
async def test_archive_rejects_negative_start(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    manuscript, _ = add_manuscript(fake_uow, ["A"])
    with pytest.raises(ValidationError):
        await ArchiveImagesUseCase(uow_factory).execute(manuscript.id, start_chunk=-1)


@pytest.mark.asyncio
async def test_archive_unknown_manuscript(uow_factory) -> None:
    with pytest.raises(NotFound):
        await ArchiveImagesUseCase(uow_factory).execute(uuid4())


# --- SynthesizeSpeechUseCase ---


@pytest.mark.asyncio
async def test_speech_returns_audio(mock_speech_synthesizer) -> None:
    audio = await SynthesizeSpeechUseCase(mock_speech_synthesizer).execute("Read me.")

    assert audio == b"ID3fake-mp3"
    mock_speech_synthesizer.synthesize.assert_awaited_once_with("Read me.")


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", None, "x" * (MAX_SPEECH_CHARS + 1)])
async def test_speech_validates_text(mock_speech_synthesizer, text) -> None:
    with pytest.raises(ValidationError):
        await SynthesizeSpeechUseCase(mock_speech_synthesizer).execute(text)
    mock_speech_synthesizer.synthesize.assert_not_awaited()
