"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

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


@dataclass
class ApiResources:
    """Every resource the API routes to."""

    health: HealthResource
    manuscripts: ManuscriptsResource
    manuscript: ManuscriptResource
    manuscript_settings: ManuscriptSettingsResource
    chunks: ChunksResource
    chunk: ChunkResource
    chunk_move: ChunkMoveResource
    chunk_merge: ChunkMergeResource
    chunk_split: ChunkSplitResource
    export: ExportResource
    image_archive: ImageArchiveResource
    manuscript_images: ManuscriptImagesResource
    manuscript_images_generate: ManuscriptImagesGenerateResource
    chunk_image: ChunkImageResource
    images: ImagesResource
    image: ImageResource
    speech: SpeechResource
    display_name: DisplayNameResource


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/manuscripts", resources.manuscripts)
    app.add_route("/v1/manuscripts/{manuscript_id}", resources.manuscript)
    app.add_route("/v1/manuscripts/{manuscript_id}/settings", resources.manuscript_settings)
    app.add_route("/v1/manuscripts/{manuscript_id}/chunks", resources.chunks)
    app.add_route("/v1/manuscripts/{manuscript_id}/chunks/merge", resources.chunk_merge)
    app.add_route("/v1/manuscripts/{manuscript_id}/chunks/{chunk_id}", resources.chunk)
    app.add_route("/v1/manuscripts/{manuscript_id}/chunks/{chunk_id}/move", resources.chunk_move)
    app.add_route(
        "/v1/manuscripts/{manuscript_id}/chunks/{chunk_id}/split", resources.chunk_split
    )
    app.add_route("/v1/manuscripts/{manuscript_id}/export", resources.export)
    app.add_route("/v1/manuscripts/{manuscript_id}/download-images", resources.image_archive)
    app.add_route("/v1/manuscripts/{manuscript_id}/images", resources.manuscript_images)
    app.add_route(
        "/v1/manuscripts/{manuscript_id}/images/generate", resources.manuscript_images_generate
    )
    app.add_route("/v1/chunks/{chunk_id}/image", resources.chunk_image)
    app.add_route("/v1/images", resources.images)
    app.add_route("/v1/images/{image_id}", resources.image)
    app.add_route("/v1/tts", resources.speech)
    app.add_route("/v1/users/me/display-name", resources.display_name)
    return app
