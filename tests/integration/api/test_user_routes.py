"""
Integration tests for registration, login and session handling.

Usage:
    pytest tests/integration/api/test_user_routes.py
"""

from httpx import AsyncClient


class TestUserRoutes:
    """Integration tests for /api/user/register and /api/user/login."""

    # ================================================================
    # Register
    # ================================================================

    async def test_register_sets_session_cookie(self, client: AsyncClient):
        response = await client.post(
            "/api/user/register", json={"login": "alice", "password": "secret"}
        )

        assert response.status_code == 200
        assert response.json() == {"login": "alice"}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("gomart_auth=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=3600" in set_cookie

    async def test_register_duplicate_login(self, client: AsyncClient):
        payload = {"login": "alice", "password": "secret"}
        await client.post("/api/user/register", json=payload)

        response = await client.post("/api/user/register", json=payload)

        assert response.status_code == 409

    async def test_register_malformed_body(self, client: AsyncClient):
        response = await client.post("/api/user/register", json={"login": "alice"})
        assert response.status_code == 400

    async def test_register_not_json(self, client: AsyncClient):
        response = await client.post(
            "/api/user/register",
            content="login=alice",
            headers={"Content-Type": "text/plain"},
        )
        assert response.status_code == 400

    async def test_register_blank_login(self, client: AsyncClient):
        response = await client.post(
            "/api/user/register", json={"login": "   ", "password": "secret"}
        )
        assert response.status_code == 400

    # ================================================================
    # Login
    # ================================================================

    async def test_login(self, client: AsyncClient):
        await client.post(
            "/api/user/register", json={"login": "alice", "password": "secret"}
        )
        client.cookies.clear()

        response = await client.post(
            "/api/user/login", json={"login": "alice", "password": "secret"}
        )

        assert response.status_code == 200
        assert "gomart_auth" in response.cookies

        balance = await client.get("/api/user/balance")
        assert balance.status_code == 200

    async def test_login_wrong_password(self, client: AsyncClient):
        await client.post(
            "/api/user/register", json={"login": "alice", "password": "secret"}
        )
        client.cookies.clear()

        response = await client.post(
            "/api/user/login", json={"login": "alice", "password": "nope"}
        )

        assert response.status_code == 401
        assert "gomart_auth" not in response.cookies

    async def test_login_unknown_user(self, client: AsyncClient):
        response = await client.post(
            "/api/user/login", json={"login": "ghost", "password": "secret"}
        )
        assert response.status_code == 401

    # ================================================================
    # Session Guard
    # ================================================================

    async def test_protected_routes_need_session(self, client: AsyncClient):
        for method, path in [
            ("GET", "/api/user/orders"),
            ("GET", "/api/user/balance"),
            ("GET", "/api/user/withdrawals"),
        ]:
            response = await client.request(method, path)
            assert response.status_code == 401, path
            assert response.json()["error"] == "AUTHENTICATION_ERROR"

    async def test_forged_cookie_rejected(self, client: AsyncClient):
        client.cookies.set("gomart_auth", "forged")

        response = await client.get("/api/user/balance")

        assert response.status_code == 401

    # ================================================================
    # Probes
    # ================================================================

    async def test_ping(self, client: AsyncClient):
        response = await client.get("/ping")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["components"]["accrual"]["enabled"] is False

    async def test_metrics(self, client: AsyncClient):
        await client.get("/ping")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "comptable_http_requests_total" in response.text

    async def test_request_id_echoed(self, client: AsyncClient):
        response = await client.get("/ping", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"

    async def test_request_id_generated_when_absent(self, client: AsyncClient):
        first = await client.get("/ping")
        second = await client.get("/ping")

        assert first.headers["X-Request-ID"]
        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]
