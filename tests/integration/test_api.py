"""Bookmarks, photo uploads, health probes and application-wide HTTP behavior."""

import io
from pathlib import Path

import pytest
from fastapi import HTTPException, UploadFile
from fastapi.testclient import TestClient
from starlette.datastructures import Headers

from src.sustainareview.api.http.routers.reviews import read_upload
from src.sustainareview.core.services import PhotoStorageService
from src.sustainareview.runtime.config.config_data import ConfigData
from src.sustainareview.runtime.context import with_context


class TestBookmarks:
    def test_bookmark_twice_conflicts(self, api_client: TestClient, auth_headers):
        first = api_client.post("/products/prod_004/bookmark", headers=auth_headers)
        second = api_client.post("/products/prod_004/bookmark", headers=auth_headers)

        assert first.status_code == 201
        assert first.json()["message"] == "Product bookmarked successfully"
        assert second.status_code == 409

        bookmarks = api_client.get("/users/me/bookmarks", headers=auth_headers).json()
        assert bookmarks[0]["product_id"] == "prod_004"
        assert bookmarks[0]["category_name"] == "Electronics"

    def test_remove_bookmark(self, api_client: TestClient, auth_headers):
        removed = api_client.delete("/products/prod_001/bookmark", headers=auth_headers)
        again = api_client.delete("/products/prod_001/bookmark", headers=auth_headers)

        assert removed.status_code == 204
        assert again.status_code == 404
        bookmarks = api_client.get("/users/me/bookmarks", headers=auth_headers).json()
        assert [b["product_id"] for b in bookmarks] == ["prod_008"]

    def test_unknown_product(self, api_client: TestClient, auth_headers):
        response = api_client.post("/products/prod_999/bookmark", headers=auth_headers)

        assert response.status_code == 404

    def test_requires_login(self, api_client: TestClient):
        assert api_client.post("/products/prod_004/bookmark").status_code == 401


class TestPhotoUpload:
    def test_upload(self, api_client: TestClient, auth_headers, photo_storage: PhotoStorageService):
        response = api_client.post(
            "/upload/photo",
            files={"file": ("leaf.gif", b"GIF89a-fake", "image/gif")},
            headers=auth_headers,
        )

        assert response.status_code == 201
        url = response.json()["photo_url"]
        assert url.startswith("/uploads/")
        assert url.endswith(".gif")
        assert (Path(photo_storage.directory) / url.rsplit("/", 1)[1]).read_bytes() == b"GIF89a-fake"

    def test_wrong_type(self, api_client: TestClient, auth_headers):
        response = api_client.post(
            "/upload/photo",
            files={"file": ("doc.pdf", b"%PDF-1.4", "application/pdf")},
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_too_large(self, api_client: TestClient, auth_headers, configured):
        data = b"\0" * (configured.uploads.max_bytes + 1)

        response = api_client.post(
            "/upload/photo", files={"file": ("big.jpg", data, "image/jpeg")}, headers=auth_headers
        )

        assert response.status_code == 400
        assert "limit" in response.json()["error"]

    def test_read_stops_past_the_limit(self, configured):
        override = ConfigData()
        override.uploads.max_bytes = 10
        upload = UploadFile(
            file=io.BytesIO(b"x" * 1000),
            filename="big.jpg",
            headers=Headers({"content-type": "image/jpeg"}),
        )

        with with_context(override):
            photo = read_upload(upload)

            assert len(photo.data) == 11
            with pytest.raises(HTTPException) as exc_info:
                PhotoStorageService().validate(photo)
        assert exc_info.value.status_code == 400

    def test_missing_file(self, api_client: TestClient, auth_headers):
        response = api_client.post("/upload/photo", headers=auth_headers)

        assert response.status_code == 400

    def test_requires_login(self, api_client: TestClient):
        response = api_client.post(
            "/upload/photo", files={"file": ("leaf.jpg", b"\xff\xd8", "image/jpeg")}
        )

        assert response.status_code == 401


class TestHealth:
    def test_liveness(self, api_client: TestClient):
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness(self, api_client: TestClient):
        response = api_client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "healthy"

    def test_readiness_reports_database_outage(self, api_client: TestClient, monkeypatch):
        database_service = api_client.app.state.app_dependencies.database_service
        monkeypatch.setattr(database_service, "health_check", lambda: False)

        response = api_client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"


class TestApplication:
    def test_request_id_echoed(self, api_client: TestClient):
        response = api_client.get("/categories", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_error_body_shape(self, api_client: TestClient):
        response = api_client.get("/products/prod_999", headers={"X-Request-ID": "req-456"})

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found", "request_id": "req-456"}

    def test_unknown_route(self, api_client: TestClient):
        response = api_client.get("/no-such-route")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_security_headers(self, api_client: TestClient):
        response = api_client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
