"""Fixtures for API tests."""

from pathlib import Path

import pytest
from falcon.testing import TestClient

from quire.application.use_cases.chunk.delete_chunk import DeleteChunkUseCase
from quire.application.use_cases.chunk.edit_chunk import EditChunkUseCase
from quire.application.use_cases.chunk.merge_chunks import MergeChunksUseCase
from quire.application.use_cases.chunk.reorder_chunk import ReorderChunkUseCase
from quire.application.use_cases.chunk.split_chunk import SplitChunkUseCase
from quire.application.use_cases.export.export_manuscript import ExportManuscriptUseCase
from quire.application.use_cases.image.archive_images import ArchiveImagesUseCase
from quire.application.use_cases.image.delete_image import DeleteImageUseCase
from quire.application.use_cases.image.generate_image import GenerateImageUseCase
from quire.application.use_cases.image.generate_images import GenerateImagesUseCase
from quire.application.use_cases.manuscript.delete_manuscript import DeleteManuscriptUseCase
from quire.application.use_cases.manuscript.update_manuscript import UpdateManuscriptUseCase
from quire.application.use_cases.manuscript.upload_manuscript import UploadManuscriptUseCase
from quire.application.use_cases.speech.synthesize_speech import SynthesizeSpeechUseCase
from quire.infrastructure.export import create_writers
from quire.infrastructure.segmentation.markdown_segmenter import MarkdownSegmenter
from quire.interfaces.api.app import ApiResources, create_app
from quire.interfaces.api.middleware.auth import RequestUser
from quire.interfaces.api.resources.chunks import (
    ChunkMergeResource,
    ChunkMoveResource,
    ChunkResource,
    ChunkSplitResource,
    ChunksResource,
)
from quire.interfaces.api.resources.export import ExportResource
from quire.interfaces.api.resources.health import HealthResource
from quire.interfaces.api.resources.images import (
    ChunkImageResource,
    ImageArchiveResource,
    ImageResource,
    ImagesResource,
    ManuscriptImagesGenerateResource,
    ManuscriptImagesResource,
)
from quire.interfaces.api.resources.manuscripts import (
    ManuscriptResource,
    ManuscriptSettingsResource,
    ManuscriptsResource,
)
from quire.interfaces.api.resources.speech import SpeechResource
from quire.interfaces.api.resources.users import DisplayNameResource

IMAGES_PER_ARCHIVE = 2


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing.

    The user id comes from the X-Test-User header (default ``author-1``);
    ``X-Test-User: anonymous`` leaves the request unauthenticated.
    """

    async def process_request(self, req, resp):
        user_id = req.get_header("X-Test-User") or "author-1"
        if user_id == "anonymous":
            req.context.user = None
        else:
            req.context.user = RequestUser(user_id=user_id, email=f"{user_id}@example.com")


@pytest.fixture
def images_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "images"
    directory.mkdir()
    return directory


@pytest.fixture
def app(uow_factory, images_dir, mock_image_generator, mock_speech_synthesizer):
    """Falcon ASGI app with API resources for testing."""
    update_manuscript = UpdateManuscriptUseCase(uow_factory)
    resources = ApiResources(
        health=HealthResource(),
        manuscripts=ManuscriptsResource(
            UploadManuscriptUseCase(uow_factory, MarkdownSegmenter()), uow_factory
        ),
        manuscript=ManuscriptResource(
            update_manuscript, DeleteManuscriptUseCase(uow_factory), uow_factory
        ),
        manuscript_settings=ManuscriptSettingsResource(update_manuscript),
        chunks=ChunksResource(uow_factory),
        chunk=ChunkResource(EditChunkUseCase(uow_factory), DeleteChunkUseCase(uow_factory)),
        chunk_move=ChunkMoveResource(ReorderChunkUseCase(uow_factory)),
        chunk_merge=ChunkMergeResource(MergeChunksUseCase(uow_factory)),
        chunk_split=ChunkSplitResource(SplitChunkUseCase(uow_factory)),
        export=ExportResource(
            ExportManuscriptUseCase(
                uow_factory, create_writers(images_dir, "https://quire.test")
            )
        ),
        image_archive=ImageArchiveResource(
            ArchiveImagesUseCase(uow_factory, IMAGES_PER_ARCHIVE), images_dir
        ),
        manuscript_images=ManuscriptImagesResource(uow_factory),
        manuscript_images_generate=ManuscriptImagesGenerateResource(
            GenerateImagesUseCase(uow_factory, mock_image_generator)
        ),
        chunk_image=ChunkImageResource(GenerateImageUseCase(uow_factory, mock_image_generator)),
        images=ImagesResource(uow_factory),
        image=ImageResource(DeleteImageUseCase(uow_factory)),
        speech=SpeechResource(SynthesizeSpeechUseCase(mock_speech_synthesizer)),
        display_name=DisplayNameResource(uow_factory),
    )
    return create_app(resources, middleware=[AuthBypassMiddleware()])


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
