"""Manuscript API resources."""

from uuid import UUID

import falcon.asgi

from quire.application.dto.manuscript_dto import ManuscriptCreateInput, ManuscriptOutput
from quire.application.use_cases.manuscript.delete_manuscript import DeleteManuscriptUseCase
from quire.application.use_cases.manuscript.update_manuscript import UpdateManuscriptUseCase
from quire.application.use_cases.manuscript.upload_manuscript import UploadManuscriptUseCase
from quire.domain.entities import Manuscript
from quire.domain.exceptions import Forbidden, NotFound, ValidationError


def _manuscript_to_dict(m: Manuscript | ManuscriptOutput, chunk_count: int | None = None) -> dict:
    settings = m.image_settings if isinstance(m, ManuscriptOutput) else m.image_settings.to_dict()
    data = {
        "id": str(m.id),
        "title": m.title,
        "author_id": m.author_id,
        "image_settings": settings,
        "created_at": m.created_at.isoformat(),
        "updated_at": m.updated_at.isoformat(),
    }
    if chunk_count is None and isinstance(m, ManuscriptOutput):
        chunk_count = m.chunk_count
    if chunk_count is not None:
        data["chunk_count"] = chunk_count
    return data


class ManuscriptsResource:
    """GET/POST /v1/manuscripts - list and upload manuscripts."""

    def __init__(self, upload_manuscript: UploadManuscriptUseCase, unit_of_work_factory: type) -> None:
        self._upload_manuscript = upload_manuscript
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List manuscripts; ?mine=true restricts to the caller's own."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        cursor = req.get_param("cursor")
        limit = req.get_param_as_int("limit") or 20
        limit = min(max(limit, 1), 100)
        author_id = user.user_id if req.get_param_as_bool("mine") else None

        try:
            async with self._uow_factory() as uow:
                items, next_cursor = await uow.manuscripts.list(
                    author_id=author_id,
                    cursor=cursor,
                    limit=limit,
                )
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid cursor"}
            return

        resp.media = {
            "items": [_manuscript_to_dict(m) for m in items],
            "next_cursor": next_cursor,
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Upload a markdown manuscript; it is segmented into chunks."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            title = body["title"]
            markdown = body["markdown"]
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            result = await self._upload_manuscript.execute(
                user.user_id,
                user.email,
                ManuscriptCreateInput(title=title, markdown=markdown),
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = _manuscript_to_dict(result)
        resp.status = falcon.HTTP_201


class ManuscriptResource:
    """GET/PATCH/DELETE /v1/manuscripts/{manuscript_id}."""

    def __init__(
        self,
        update_manuscript: UpdateManuscriptUseCase,
        delete_manuscript: DeleteManuscriptUseCase,
        unit_of_work_factory: type,
    ) -> None:
        self._update_manuscript = update_manuscript
        self._delete_manuscript = delete_manuscript
        self._uow_factory = unit_of_work_factory

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, manuscript_id: str
    ) -> None:
        """Get manuscript with its chunk count."""
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

        async with self._uow_factory() as uow:
            manuscript = await uow.manuscripts.get_by_id(m_id)
            if not manuscript:
                resp.status = falcon.HTTP_404
                resp.media = {"error": "Manuscript not found"}
                return
            chunk_count = await uow.chunks.count_by_manuscript(m_id)

        resp.media = _manuscript_to_dict(manuscript, chunk_count=chunk_count)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, manuscript_id: str
    ) -> None:
        """Rename manuscript (owner only)."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            m_id = UUID(manuscript_id)
            body = await req.get_media()
            title = body["title"]
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            result = await self._update_manuscript.rename(user.user_id, m_id, title)
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

        resp.media = _manuscript_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, manuscript_id: str
    ) -> None:
        """Delete manuscript with its chunks and images (owner only)."""
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
            await self._delete_manuscript.execute(user.user_id, m_id)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except Forbidden as e:
            resp.status = falcon.HTTP_403
            resp.media = {"error": str(e)}
            return

        resp.status = falcon.HTTP_204


class ManuscriptSettingsResource:
    """PUT /v1/manuscripts/{manuscript_id}/settings - replace image settings."""

    def __init__(self, update_manuscript: UpdateManuscriptUseCase) -> None:
        self._update_manuscript = update_manuscript

    async def on_put(
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
            settings = body["image_settings"]
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            result = await self._update_manuscript.update_image_settings(
                user.user_id, m_id, settings
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

        resp.media = _manuscript_to_dict(result)
        resp.status = falcon.HTTP_200
