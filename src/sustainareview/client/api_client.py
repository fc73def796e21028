"""Async HTTP client for the SustainaReview REST API."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from src.sustainareview.client.settings import ClientSettings


class ApiError(Exception):
    """Error body returned by the API, or a transport failure (status 0)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


PhotoFile = tuple[str, bytes, str]


class SustainaReviewClient:
    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        access_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or ClientSettings()
        self.access_token = access_token
        self._http = httpx.AsyncClient(
            base_url=self._settings.api_base_url,
            timeout=self._settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> SustainaReviewClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self, auth: bool) -> dict[str, str]:
        if not auth:
            return {}
        if not self.access_token:
            raise ApiError(401, "Not logged in")
        return {"Authorization": f"Bearer {self.access_token}"}

    async def _request(self, method: str, path: str, *, auth: bool = False, **kwargs) -> Any:
        try:
            response = await self._http.request(
                method, path, headers=self._headers(auth), **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning("{} {} failed: {}", method, path, e)
            raise ApiError(0, f"Could not reach the server: {e}") from e

        if response.is_error:
            try:
                message = response.json().get("error") or response.reason_phrase
            except ValueError:
                message = response.text or response.reason_phrase
            raise ApiError(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # --- Auth and account ---
    async def register(self, username: str, email: str, password: str) -> dict:
        return await self._request(
            "POST", "/users", json={"username": username, "email": email, "password": password}
        )

    async def login(self, email: str, password: str) -> dict:
        data = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        self.access_token = data["access_token"]
        return data

    async def request_password_reset(self, email: str) -> dict:
        return await self._request(
            "POST", "/auth/reset-password-request", json={"email": email}
        )

    async def reset_password(self, reset_token: str, new_password: str) -> dict:
        return await self._request(
            "POST",
            "/auth/reset-password",
            json={"reset_token": reset_token, "new_password": new_password},
        )

    async def get_me(self) -> dict:
        return await self._request("GET", "/users/me", auth=True)

    async def change_password(self, current_password: str, new_password: str) -> dict:
        return await self._request(
            "PUT",
            "/users/me",
            auth=True,
            json={"current_password": current_password, "new_password": new_password},
        )

    async def my_reviews(self) -> list[dict]:
        return await self._request("GET", "/users/me/reviews", auth=True)

    async def my_bookmarks(self) -> list[dict]:
        return await self._request("GET", "/users/me/bookmarks", auth=True)

    # --- Catalog ---
    async def list_categories(self) -> list[dict]:
        return await self._request("GET", "/categories")

    async def list_attributes(self, attribute_type: str | None = None) -> list[dict]:
        params = {"type": attribute_type} if attribute_type else None
        return await self._request("GET", "/attributes", params=params)

    async def search_products(self, params: dict[str, str]) -> dict:
        return await self._request("GET", "/products", params=params)

    async def get_product(self, product_id: str) -> dict:
        return await self._request("GET", f"/products/{product_id}")

    # --- Reviews ---
    async def submit_review(
        self,
        product_id: str,
        fields: dict[str, Any],
        confirmation: bool,
        photos: list[PhotoFile] | None = None,
    ) -> dict:
        data = {k: str(v) for k, v in fields.items() if v is not None}
        data["confirmation_checkbox"] = "true" if confirmation else "false"
        files = [("photos", photo) for photo in photos or []]
        return await self._request(
            "POST",
            f"/products/{product_id}/reviews",
            auth=True,
            data=data,
            files=files or None,
        )

    async def update_review(self, review_id: str, fields: dict[str, Any]) -> dict:
        return await self._request("PUT", f"/reviews/{review_id}", auth=True, json=fields)

    async def delete_review(self, review_id: str) -> None:
        await self._request("DELETE", f"/reviews/{review_id}", auth=True)

    async def vote_helpful(self, review_id: str) -> dict:
        return await self._request(
            "POST", f"/reviews/{review_id}/vote", auth=True, json={"vote_type": "helpful"}
        )

    # --- Bookmarks and uploads ---
    async def bookmark(self, product_id: str) -> dict:
        return await self._request("POST", f"/products/{product_id}/bookmark", auth=True)

    async def remove_bookmark(self, product_id: str) -> None:
        await self._request("DELETE", f"/products/{product_id}/bookmark", auth=True)

    async def upload_photo(self, photo: PhotoFile) -> dict:
        return await self._request("POST", "/upload/photo", auth=True, files={"file": photo})
