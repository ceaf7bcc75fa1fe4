"""Chunk API resources - listing, editing and order mutations."""

from uuid import UUID

import falcon.asgi

from quire.application.dto.chunk_dto import ChunkEditInput, ChunkWithImage, MergeInput
from quire.application.use_cases.chunk.delete_chunk import DeleteChunkUseCase
from quire.application.use_cases.chunk.edit_chunk import EditChunkUseCase
from quire.application.use_cases.chunk.merge_chunks import MergeChunksUseCase
from quire.application.use_cases.chunk.reorder_chunk import ReorderChunkUseCase
from quire.application.use_cases.chunk.split_chunk import SplitChunkUseCase
from quire.domain.entities import Chunk
from quire.domain.exceptions import Forbidden, NotFound, ValidationError
from quire.domain.value_objects import Direction


def chunk_to_dict(chunk: Chunk) -> dict:
    return {
        "id": str(chunk.id),
        "manuscript_id": str(chunk.manuscript_id),
        "order": chunk.order,
        "heading_level1": chunk.heading_level1,
        "heading_level2": chunk.heading_level2,
        "text": chunk.text,
        "updated_at": chunk.updated_at.isoformat() if chunk.updated_at else None,
    }


def _entry_to_dict(entry: ChunkWithImage) -> dict:
    data = chunk_to_dict(entry.chunk)
    data["image_url"] = entry.image.local_path if entry.image else None
    return data


def _parse_ids(*values: str) -> list[UUID] | None:
    try:
        return [UUID(v) for v in values]
    except ValueError:
        return None


class ChunksResource:
    """GET /v1/manuscripts/{manuscript_id}/chunks - chunks in reading order."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, manuscript_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        ids = _parse_ids(manuscript_id)
        if ids is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid manuscript ID"}
            return

        async with self._uow_factory() as uow:
            manuscript = await uow.manuscripts.get_by_id(ids[0])
            if not manuscript:
                resp.status = falcon.HTTP_404
                resp.media = {"error": "Manuscript not found"}
                return
            entries = await uow.chunks.list_with_latest_image(ids[0])

        resp.media = {"items": [_entry_to_dict(e) for e in entries]}
        resp.status = falcon.HTTP_200


class ChunkResource:
    """PATCH/DELETE /v1/manuscripts/{manuscript_id}/chunks/{chunk_id}."""

    def __init__(self, edit_chunk: EditChunkUseCase, delete_chunk: DeleteChunkUseCase) -> None:
        self._edit_chunk = edit_chunk
        self._delete_chunk = delete_chunk

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        manuscript_id: str,
        chunk_id: str,
    ) -> None:
        """Edit text and heading labels. The order field is ignored."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        ids = _parse_ids(manuscript_id, chunk_id)
        if ids is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid ID"}
            return
        try:
            body = await req.get_media()
            input_data = ChunkEditInput(
                text=body.get("text"),
                heading_level1=body.get("heading_level1"),
                heading_level2=body.get("heading_level2"),
            )
        except (AttributeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            chunk = await self._edit_chunk.execute(user.user_id, ids[0], ids[1], input_data)
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

        resp.media = chunk_to_dict(chunk)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        manuscript_id: str,
        chunk_id: str,
    ) -> None:
        """Delete chunk; later chunks move up by one."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        ids = _parse_ids(manuscript_id, chunk_id)
        if ids is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid ID"}
            return

        try:
            await self._delete_chunk.execute(user.user_id, ids[0], ids[1])
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except Forbidden as e:
            resp.status = falcon.HTTP_403
            resp.media = {"error": str(e)}
            return

        resp.status = falcon.HTTP_204


class ChunkMoveResource:
    """POST /v1/manuscripts/{manuscript_id}/chunks/{chunk_id}/move - {direction: up|down}."""

    def __init__(self, reorder_chunk: ReorderChunkUseCase) -> None:
        self._reorder_chunk = reorder_chunk

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        manuscript_id: str,
        chunk_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        ids = _parse_ids(manuscript_id, chunk_id)
        if ids is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid ID"}
            return
        try:
            body = await req.get_media()
            direction = Direction(body["direction"])
        except (KeyError, TypeError, ValueError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "direction must be 'up' or 'down'"}
            return

        try:
            chunk = await self._reorder_chunk.execute(user.user_id, ids[0], ids[1], direction)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except Forbidden as e:
            resp.status = falcon.HTTP_403
            resp.media = {"error": str(e)}
            return

        resp.media = chunk_to_dict(chunk)
        resp.status = falcon.HTTP_200


class ChunkMergeResource:
    """POST /v1/manuscripts/{manuscript_id}/chunks/merge - merge a chunk into its predecessor."""

    def __init__(self, merge_chunks: MergeChunksUseCase) -> None:
        self._merge_chunks = merge_chunks

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
            body = await req.get_media()
            input_data = MergeInput(
                first_chunk_id=UUID(body["first_chunk_id"]),
                second_chunk_id=UUID(body["second_chunk_id"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            merged = await self._merge_chunks.execute(user.user_id, m_id, input_data)
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

        resp.media = chunk_to_dict(merged)
        resp.status = falcon.HTTP_200


class ChunkSplitResource:
    """POST /v1/manuscripts/{manuscript_id}/chunks/{chunk_id}/split - {split_point: int}."""

    def __init__(self, split_chunk: SplitChunkUseCase) -> None:
        self._split_chunk = split_chunk

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        manuscript_id: str,
        chunk_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        ids = _parse_ids(manuscript_id, chunk_id)
        if ids is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid ID"}
            return
        try:
            body = await req.get_media()
            split_point = body["split_point"]
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            result = await self._split_chunk.execute(user.user_id, ids[0], ids[1], split_point)
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

        resp.media = {
            "first": chunk_to_dict(result.first),
            "second": chunk_to_dict(result.second),
        }
        resp.status = falcon.HTTP_201
