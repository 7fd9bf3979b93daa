"""
Trazure Backend — Upload and Health API Tests
===============================================

What:  /uploads round trips and the /health probe through the FastAPI app.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from trazure.main import create_app


class TestUploads:

    @pytest.mark.asyncio
    async def test_upload_then_fetch(self, test_client, web_config, sample_image_bytes):
        response = await test_client.post(
            "/uploads", files={"file": ("sunset.png", sample_image_bytes, "image/png")}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["url"] == f"/uploads/{body['path']}"
        assert (web_config.uploads_dir / body["path"]).is_file()

        fetched = await test_client.get(body["url"])
        assert fetched.status_code == 200
        assert fetched.content == sample_image_bytes

    @pytest.mark.asyncio
    async def test_upload_rejects_unsupported_type(self, test_client):
        response = await test_client.post(
            "/uploads", files={"file": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_upload_rejects_html_renamed_to_png(self, test_client, web_config):
        response = await test_client.post(
            "/uploads",
            files={"file": ("evil.png", b"<html><script>alert(1)</script></html>", "image/png")},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["mime_type"] == "text/html"
        assert not web_config.uploads_dir.exists() or not any(web_config.uploads_dir.rglob("*.png"))

    @pytest.mark.asyncio
    async def test_upload_over_size_limit(self, web_config, seeded_users, sample_image_bytes):
        app = create_app(web_config.model_copy(update={"max_upload_size": 16}))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post(
                "/uploads", files={"file": ("sunset.png", sample_image_bytes, "image/png")}
            )

        assert response.status_code == 400
        assert response.json()["details"]["reported_size"] == len(sample_image_bytes)

    @pytest.mark.asyncio
    async def test_fetch_missing_upload(self, test_client):
        response = await test_client.get("/uploads/2025/01/01/nothing-here.png")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == "1.0.0"
        assert body["uptimeSeconds"] >= 0
