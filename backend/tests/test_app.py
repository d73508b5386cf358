"""
Noteful Backend: Application Wiring Tests
===========================================

What we test:
    ✅ Health endpoint (reachable and unreachable database)
    ✅ X-Request-ID generated or echoed, and present in error bodies
    ✅ Malformed JSON and wrong field types map to 400
    ✅ Unknown routes and wrong methods use the standard error body
    ✅ Commit failures surface as 500 and leave data unchanged
    ✅ Settings normalization (api_prefix, log_level)
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError as SettingsError
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.config import Settings
from noteful.database import Database
from noteful.main import create_app
from noteful.seed import SEED_NOTES, SEED_TAGS

BREED_ID = str(SEED_TAGS[0]["id"])
LESSONS_NOTE_ID = str(SEED_NOTES[0]["id"])


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_database_unreachable(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'noteful.db'}"
        database = Database(url)
        app = create_app(Settings(database_url=url), database=database)

        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/health")
        finally:
            await database.dispose()

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated(self, test_client):
        response = await test_client.get("/api/folders")

        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_echoed_and_in_error_body(self, test_client):
        response = await test_client.get(
            "/api/folders/NOT-A-VALID-ID", headers={"X-Request-ID": "trace-123"}
        )

        assert response.headers["x-request-id"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"
        assert response.json()["details"] == {"field": "id"}


class TestRequestValidation:

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client):
        response = await test_client.post(
            "/api/folders",
            content=b'{"name": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert response.json()["message"] == "Request body is not valid JSON"

    @pytest.mark.asyncio
    async def test_wrong_field_type(self, test_client):
        response = await test_client.post("/api/notes", json={"title": "x", "tags": "breed"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestSettings:

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("/api", "/api"), ("api/", "/api"), ("/v1/api/", "/v1/api"), ("", "")],
    )
    def test_api_prefix_normalized(self, raw, expected):
        assert Settings(api_prefix=raw).api_prefix == expected

    def test_log_level_uppercased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(SettingsError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    @pytest.mark.asyncio
    async def test_routes_follow_prefix(self, database):
        app = create_app(
            Settings(database_url=database.url, api_prefix="/v2"), database=database
        )

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            moved = await client.get("/v2/folders")
            old = await client.get("/api/folders")

        assert moved.status_code == 200
        assert old.status_code == 404


class TestRoutingErrors:

    @pytest.mark.asyncio
    async def test_unknown_path(self, test_client):
        response = await test_client.get("/api/shelves", headers={"X-Request-ID": "r-404"})

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "Not Found"
        assert body["request_id"] == "r-404"

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, test_client):
        response = await test_client.patch("/api/folders", json={"name": "x"})

        assert response.status_code == 405
        body = response.json()
        assert body["error"] == "method_not_allowed"
        assert body["message"] == "Method Not Allowed"
        assert body["request_id"]
        assert "GET" in response.headers["allow"]


class TestCommitFailures:
    """A write the database refuses to commit is never reported as a success."""

    def setup_method(self):
        self.failing_commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )

    @pytest.mark.asyncio
    async def test_create_reports_500(self, test_client):
        with patch.object(AsyncSession, "commit", self.failing_commit):
            response = await test_client.post("/api/folders", json={"name": "Recipes"})

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"

        names = [f["name"] for f in (await test_client.get("/api/folders")).json()]
        assert "Recipes" not in names

    @pytest.mark.asyncio
    async def test_tag_delete_reports_500_and_keeps_links(self, test_client):
        with patch.object(AsyncSession, "commit", self.failing_commit):
            response = await test_client.delete(f"/api/tags/{BREED_ID}")

        assert response.status_code == 500

        assert (await test_client.get(f"/api/tags/{BREED_ID}")).status_code == 200
        note = (await test_client.get(f"/api/notes/{LESSONS_NOTE_ID}")).json()
        assert note["tags"] == [BREED_ID]
