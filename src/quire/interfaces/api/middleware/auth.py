"""Auth middleware - resolves the bearer token to a user, or leaves the request anonymous."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that introspects the bearer token and sets req.context.user.

    ``req.context.user`` is None when the header is missing, the token is
    rejected or no identity provider is configured. Resources decide whether
    that is acceptable.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        user = self._keycloak.decode_token(auth[7:])
        if user:
            req.context.user = RequestUser(
                user_id=user.user_id,
                email=user.email,
                username=user.username,
            )
