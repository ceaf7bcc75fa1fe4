"""Application entry point and composition root."""

import logging

import falcon
import falcon.asgi

from quire import __version__
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
from quire.config import Settings, get_settings
from quire.infrastructure.auth.keycloak_provider import KeycloakProvider
from quire.infrastructure.export import create_writers
from quire.infrastructure.image_generation.replicate_provider import ReplicateImageProvider
from quire.infrastructure.persistence.postgres.connection import create_pool
from quire.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from quire.infrastructure.segmentation import MarkdownSegmenter
from quire.infrastructure.speech.openai_provider import OpenAISpeechProvider
from quire.interfaces.api.app import ApiResources, create_app
from quire.interfaces.api.middleware.auth import AuthMiddleware
from quire.interfaces.api.middleware.cors import CORSMiddleware
from quire.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings.log_level."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point - run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    logger.info("Quire v%s (%s)", __version__, settings.environment)
    uvicorn.run(create_quire_app(), host="0.0.0.0", port=8000, log_level=settings.log_level.lower())


def create_quire_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)
    images_dir = settings.images_dir
    images_dir.mkdir(parents=True, exist_ok=True)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; every request is anonymous")

    segmenter = MarkdownSegmenter(
        chapter_level=settings.segment_chapter_level,
        section_level=settings.segment_section_level,
    )
    image_generator = ReplicateImageProvider(
        api_token=settings.replicate_api_token,
        images_dir=images_dir,
        model=settings.replicate_model,
        base_url=settings.replicate_api_url,
        poll_interval=settings.replicate_poll_interval,
    )
    speech_synthesizer = OpenAISpeechProvider(
        api_key=settings.openai_api_key,
        model=settings.tts_model,
        voice=settings.tts_voice,
    )

    update_manuscript = UpdateManuscriptUseCase(uow_factory)
    resources = ApiResources(
        health=HealthResource(pool),
        manuscripts=ManuscriptsResource(
            UploadManuscriptUseCase(uow_factory, segmenter), uow_factory
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
                uow_factory, create_writers(images_dir, settings.public_url)
            )
        ),
        image_archive=ImageArchiveResource(
            ArchiveImagesUseCase(uow_factory, settings.images_per_archive), images_dir
        ),
        manuscript_images=ManuscriptImagesResource(uow_factory),
        manuscript_images_generate=ManuscriptImagesGenerateResource(
            GenerateImagesUseCase(uow_factory, image_generator)
        ),
        chunk_image=ChunkImageResource(GenerateImageUseCase(uow_factory, image_generator)),
        images=ImagesResource(uow_factory),
        image=ImageResource(DeleteImageUseCase(uow_factory)),
        speech=SpeechResource(SynthesizeSpeechUseCase(speech_synthesizer)),
        display_name=DisplayNameResource(uow_factory),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app = create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, settings.database_pool_wait_timeout),
            AuthMiddleware(keycloak),
        ],
    )

    async def log_exception(req, resp, ex, params):
        logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
        resp.status = falcon.HTTP_500
        resp.media = {"title": "500 Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    # Generated images are served from /images/<file>, the path stored on Image.local_path.
    app.add_static_route("/images", str(images_dir.resolve()))
    return app
