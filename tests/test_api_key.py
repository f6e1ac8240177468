"""Evidence Manager - API Key and Error Handling Tests"""

import pytest
from httpx import ASGITransport, AsyncClient

from tests.conftest import API_KEY, OFFICER_PASSWORD


@pytest.mark.asyncio
class TestApiKey:
    """Test the static API key required outside development."""

    async def test_missing_key_is_rejected(self, client: AsyncClient, auth_headers: dict):
        response = await client.get(
            "/api/v1/authorization/me", headers={**auth_headers, "X-Api-Key": ""}
        )
        assert response.status_code == 401
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "UserIsNotAuthenticated"

    async def test_wrong_key_is_rejected(self, client: AsyncClient, officer):
        response = await client.post(
            "/api/v1/authorization/login",
            json={"username": "investigator", "password": OFFICER_PASSWORD},
            headers={"X-Api-Key": "wrong-key"},
        )
        assert response.status_code == 401

    async def test_valid_key_is_accepted(self, client: AsyncClient, officer):
        response = await client.post(
            "/api/v1/authorization/login",
            json={"username": "investigator", "password": OFFICER_PASSWORD},
            headers={"X-Api-Key": API_KEY},
        )
        assert response.status_code == 200

    async def test_health_endpoints_are_exempt(self, client: AsyncClient):
        for path in ("/", "/health", "/live"):
            response = await client.get(path, headers={"X-Api-Key": ""})
            assert response.status_code == 200, path

    async def test_rejection_carries_cors_headers(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/authorization/me",
            headers={"X-Api-Key": "", "Origin": "http://localhost:3000"},
        )
        assert response.status_code == 401
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    async def test_unset_key_rejects_everything(self):
        """With no key configured the middleware fails closed."""
        from fastapi import FastAPI

        from api.middleware import ApiKeyMiddleware

        app = FastAPI()
        app.add_middleware(ApiKeyMiddleware, api_key="")

        @app.get("/protected")
        async def protected():
            return {"ok": True}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/protected", headers={"X-Api-Key": ""})
        assert response.status_code == 401


class BrokenCaseLookup:
    async def run(self, case_id):
        raise RuntimeError("database exploded with secret detail")


@pytest.mark.asyncio
class TestUnhandledErrors:
    """Test the global exception handler."""

    async def test_unexpected_error_is_generic_500(self, db_session, auth_headers: dict):
        from api.dependencies import get_case_by_id
        from api.main import app
        from core.database.session import get_db

        async def override_get_db():
            yield db_session

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_case_by_id] = lambda: BrokenCaseLookup()

        try:
            async with AsyncClient(
                transport=ASGITransport(app=app, raise_app_exceptions=False),
                base_url="http://test",
                headers={"X-Api-Key": API_KEY},
            ) as ac:
                response = await ac.get(
                    "/api/v1/cases/00000000-0000-0000-0000-000000000001", headers=auth_headers
                )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "GenericError"
        assert "secret detail" not in response.text
