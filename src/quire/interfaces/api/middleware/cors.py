"""CORS middleware - answers preflight requests and decorates responses."""

import falcon.asgi

ALLOWED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
ALLOWED_HEADERS = "Authorization, Content-Type"
# Download metadata the reader client needs to see.
EXPOSED_HEADERS = "Content-Disposition, X-Total-Parts, X-Next-Chunk"


class CORSMiddleware:
    """Echo the Origin back when it is allowed; ``*`` allows every origin."""

    def __init__(self, origins: list[str]) -> None:
        self._allow_any = "*" in origins
        self._origins = frozenset(o for o in origins if o != "*")

    def _allowed_origin(self, origin: str | None) -> str | None:
        if not origin:
            return None
        if self._allow_any or origin in self._origins:
            return origin
        return None

    def _decorate(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.append_header("Vary", "Origin")
        origin = self._allowed_origin(req.get_header("Origin"))
        if origin is None:
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header("Access-Control-Expose-Headers", EXPOSED_HEADERS)

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit OPTIONS preflight."""
        if req.method != "OPTIONS":
            return
        resp.set_header("Access-Control-Allow-Methods", ALLOWED_METHODS)
        resp.set_header("Access-Control-Allow-Headers", ALLOWED_HEADERS)
        resp.set_header("Access-Control-Max-Age", "86400")
        resp.status = falcon.HTTP_204
        resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        self._decorate(req, resp)
