"""User profile endpoint."""

from datetime import UTC, datetime

import falcon.asgi

from quire.domain.entities import User

MAX_DISPLAY_NAME_LENGTH = 100


class DisplayNameResource:
    """PUT /v1/users/me/display-name - {display_name}."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            display_name = body["display_name"]
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return
        if not isinstance(display_name, str) or not display_name.strip():
            resp.status = falcon.HTTP_400
            resp.media = {"error": "display_name is required"}
            return
        if len(display_name.strip()) > MAX_DISPLAY_NAME_LENGTH:
            resp.status = falcon.HTTP_400
            resp.media = {
                "error": f"display_name must be at most {MAX_DISPLAY_NAME_LENGTH} characters"
            }
            return

        async with self._uow_factory() as uow:
            await uow.users.upsert(
                User(id=user.user_id, email=user.email or "", created_at=datetime.now(UTC))
            )
            updated = await uow.users.update_display_name(user.user_id, display_name.strip())
        if not updated:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "User not found"}
            return

        resp.media = {
            "id": updated.id,
            "email": updated.email,
            "display_name": updated.display_name,
        }
        resp.status = falcon.HTTP_200
