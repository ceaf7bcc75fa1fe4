"""Image API resources - generation, gallery, deletion and zip download."""

import asyncio
from pathlib import Path
from uuid import UUID

import falcon.asgi

from quire.application.use_cases.export.export_manuscript import sanitize_title
from quire.application.use_cases.image.archive_images import ArchiveImagesUseCase
from quire.application.use_cases.image.delete_image import DeleteImageUseCase
from quire.application.use_cases.image.generate_image import GenerateImageUseCase
from quire.application.use_cases.image.generate_images import GenerateImagesUseCase
from quire.domain.entities import Image
from quire.domain.exceptions import Forbidden, NotFound, UpstreamServiceError, ValidationError
from quire.infrastructure.archive.zip_stream import build_image_archive


def _image_to_dict(image: Image) -> dict:
    return {
        "id": str(image.id),
        "manuscript_id": str(image.manuscript_id),
        "chunk_id": str(image.chunk_id),
        "url": image.local_path,
        "prompt_params": image.prompt_params,
        "character_reference_url": image.character_reference_url,
        "created_at": image.created_at.isoformat(),
    }


def _page_params(req: falcon.asgi.Request) -> tuple[int, int]:
    page = max(req.get_param_as_int("page") or 1, 1)
    limit = min(max(req.get_param_as_int("limit") or 12, 1), 100)
    return page, limit


def _pagination(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": -(-total // limit),
    }


class ImagesResource:
    """GET /v1/images - gallery of all images, newest first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            page, limit = _page_params(req)
        except falcon.HTTPBadRequest:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "page and limit must be integers"}
            return

        async with self._uow_factory() as uow:
            images, total = await uow.images.list(page=page, limit=limit)

        resp.media = {
            "images": [_image_to_dict(i) for i in images],
            "pagination": _pagination(page, limit, total),
        }
        resp.status = falcon.HTTP_200


class ImageResource:
    """DELETE /v1/images/{image_id} - remove an image record (owner only)."""

    def __init__(self, delete_image: DeleteImageUseCase) -> None:
        self._delete_image = delete_image

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, image_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            i_id = UUID(image_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid image ID"}
            return

        try:
            await self._delete_image.execute(user.user_id, i_id)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except Forbidden as e:
            resp.status = falcon.HTTP_403
            resp.media = {"error": str(e)}
            return

        resp.status = falcon.HTTP_204


class ManuscriptImagesResource:
    """GET /v1/manuscripts/{manuscript_id}/images - paginated, with total_chunks."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, manuscript_id: str
    ) -> None:
        try:
            m_id = UUID(manuscript_id)
            page, limit = _page_params(req)
        except (ValueError, falcon.HTTPBadRequest):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid manuscript ID or pagination"}
            return

        async with self._uow_factory() as uow:
            if not await uow.manuscripts.get_by_id(m_id):
                resp.status = falcon.HTTP_404
                resp.media = {"error": "Manuscript not found"}
                return
            images, total = await uow.images.list(manuscript_id=m_id, page=page, limit=limit)
            total_chunks = await uow.chunks.count_by_manuscript(m_id)

        resp.media = {
            "images": [_image_to_dict(i) for i in images],
            "total_chunks": total_chunks,
            "pagination": _pagination(page, limit, total),
        }
        resp.status = falcon.HTTP_200


class ManuscriptImagesGenerateResource:
    """POST /v1/manuscripts/{manuscript_id}/images/generate - illustrate chunks without images."""

    def __init__(self, generate_images: GenerateImagesUseCase) -> None:
        self._generate_images = generate_images

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, manuscript_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            m_id = UUID(manuscript_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid manuscript ID"}
            return

        try:
            result = await self._generate_images.execute(user.user_id, m_id)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except Forbidden as e:
            resp.status = falcon.HTTP_403
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "total_chunks": result.total_chunks,
            "generated": result.generated,
            "failed": result.failed,
        }
        resp.status = falcon.HTTP_200


class ChunkImageResource:
    """POST /v1/chunks/{chunk_id}/image - generate (or regenerate) one chunk's image."""

    def __init__(self, generate_image: GenerateImageUseCase) -> None:
        self._generate_image = generate_image

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, chunk_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            c_id = UUID(chunk_id)
            body = await req.get_media(default_when_empty={}) or {}
            prompt = body.get("prompt")
            character_reference_url = body.get("character_reference_url")
        except (AttributeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            image = await self._generate_image.execute(
                user.user_id, c_id, prompt=prompt, character_reference_url=character_reference_url
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except Forbidden as e:
            resp.status = falcon.HTTP_403
            resp.media = {"error": str(e)}
            return
        except UpstreamServiceError as e:
            resp.status = falcon.HTTP_502
            resp.media = {"error": str(e)}
            return

        resp.media = _image_to_dict(image)
        resp.status = falcon.HTTP_201


class ImageArchiveResource:
    """GET /v1/manuscripts/{manuscript_id}/download-images?chunk=n - one zip part."""

    def __init__(self, archive_images: ArchiveImagesUseCase, images_dir: Path) -> None:
        self._archive_images = archive_images
        self._images_dir = images_dir

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, manuscript_id: str
    ) -> None:
        try:
            m_id = UUID(manuscript_id)
            start_chunk = req.get_param_as_int("chunk") or 0
        except (ValueError, falcon.HTTPBadRequest):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid manuscript ID or chunk"}
            return

        try:
            part = await self._archive_images.execute(m_id, start_chunk)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        if not part.entries:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "No images to download"}
            return

        loop = asyncio.get_running_loop()
        stream = await loop.run_in_executor(
            None, build_image_archive, part.entries, self._images_dir
        )

        filename = f"{sanitize_title(part.title)}_images_{start_chunk}.zip"
        resp.content_type = "application/zip"
        resp.set_header("Content-Disposition", f'attachment; filename="{filename}"')
        if part.next_chunk is not None:
            resp.set_header("X-Total-Parts", str(part.total_parts))
            resp.set_header("X-Next-Chunk", str(part.next_chunk))
        resp.stream = stream
        resp.status = falcon.HTTP_200
