"""Middleware tests - CORS, bearer auth and pool lifespan."""

from unittest.mock import AsyncMock, MagicMock

import falcon
import falcon.asgi
import pytest
from falcon.testing import TestClient

from quire.infrastructure.auth.keycloak_provider import OIDCUser
from quire.interfaces.api.middleware.auth import AuthMiddleware
from quire.interfaces.api.middleware.cors import CORSMiddleware
from quire.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware


class WhoAmIResource:
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = req.context.user
        resp.media = {"user_id": user.user_id if user else None}


def _client(*middleware) -> TestClient:
    app = falcon.asgi.App(middleware=list(middleware))
    app.add_route("/whoami", WhoAmIResource())
    return TestClient(app)


class TestCORS:
    def test_allowed_origin_is_echoed(self) -> None:
        client = _client(CORSMiddleware(["https://reader.test"]), AuthMiddleware())

        result = client.simulate_get("/whoami", headers={"Origin": "https://reader.test"})

        assert result.headers["access-control-allow-origin"] == "https://reader.test"
        assert "X-Next-Chunk" in result.headers["access-control-expose-headers"]

    def test_unknown_origin_gets_no_grant(self) -> None:
        client = _client(CORSMiddleware(["https://reader.test"]), AuthMiddleware())

        result = client.simulate_get("/whoami", headers={"Origin": "https://evil.test"})

        assert result.status_code == 200
        assert "access-control-allow-origin" not in result.headers

    def test_preflight(self) -> None:
        client = _client(CORSMiddleware(["*"]), AuthMiddleware())

        result = client.simulate_options(
            "/whoami",
            headers={"Origin": "https://any.test", "Access-Control-Request-Method": "PUT"},
        )

        assert result.status_code == 204
        assert result.headers["access-control-allow-origin"] == "https://any.test"
        assert "PUT" in result.headers["access-control-allow-methods"]


class TestAuth:
    def test_valid_bearer_token(self) -> None:
        keycloak = MagicMock()
        keycloak.decode_token.return_value = OIDCUser("user-9", "u@example.com", "u")
        client = _client(AuthMiddleware(keycloak))

        result = client.simulate_get("/whoami", headers={"Authorization": "Bearer tok"})

        assert result.json == {"user_id": "user-9"}
        keycloak.decode_token.assert_called_once_with("tok")

    def test_rejected_token(self) -> None:
        keycloak = MagicMock()
        keycloak.decode_token.return_value = None
        client = _client(AuthMiddleware(keycloak))

        result = client.simulate_get("/whoami", headers={"Authorization": "Bearer bad"})

        assert result.json == {"user_id": None}

    def test_without_provider_or_header(self) -> None:
        assert _client(AuthMiddleware()).simulate_get(
            "/whoami", headers={"Authorization": "Bearer tok"}
        ).json == {"user_id": None}

        keycloak = MagicMock()
        assert _client(AuthMiddleware(keycloak)).simulate_get("/whoami").json == {"user_id": None}
        keycloak.decode_token.assert_not_called()


class TestPoolLifespan:
    @pytest.mark.asyncio
    async def test_opens_and_closes_pool(self) -> None:
        pool = MagicMock(name="pool", min_size=2, max_size=10)
        pool.open = AsyncMock()
        pool.close = AsyncMock()
        middleware = PoolLifespanMiddleware(pool)

        await middleware.process_startup({}, {})
        await middleware.process_shutdown({}, {})

        pool.open.assert_awaited_once_with()
        pool.close.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_waits_for_database_when_configured(self) -> None:
        pool = MagicMock(min_size=2, max_size=10)
        pool.open = AsyncMock()
        middleware = PoolLifespanMiddleware(pool, wait_timeout=5.0)

        await middleware.process_startup({}, {})

        pool.open.assert_awaited_once_with(wait=True, timeout=5.0)
