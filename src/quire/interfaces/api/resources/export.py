"""Manuscript export endpoint."""

from uuid import UUID

import falcon.asgi

from quire.application.use_cases.export.export_manuscript import ExportManuscriptUseCase
from quire.domain.exceptions import ConversionError, NotFound, ValidationError


class ExportResource:
    """GET /v1/manuscripts/{manuscript_id}/export?format=markdown|epub|docx."""

    def __init__(self, export_manuscript: ExportManuscriptUseCase) -> None:
        self._export_manuscript = export_manuscript

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, manuscript_id: str
    ) -> None:
        """Compile the manuscript and return it as an attachment."""
        try:
            m_id = UUID(manuscript_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid manuscript ID"}
            return

        export_format = req.get_param("format") or ""
        try:
            result = await self._export_manuscript.execute(m_id, export_format)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except ConversionError as e:
            resp.status = falcon.HTTP_500
            resp.media = {"error": str(e)}
            return

        resp.content_type = result.content_type
        resp.set_header("Content-Disposition", f'attachment; filename="{result.filename}"')
        resp.data = result.data
        resp.status = falcon.HTTP_200
