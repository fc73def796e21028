"""Client state store and API client, against mocked and in-process servers."""

import asyncio
import json
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from src.sustainareview.api.http.app import app
from src.sustainareview.client import (
    ApiError,
    AppStore,
    CatalogFilters,
    DraftValidationError,
    SustainaReviewClient,
)
from src.sustainareview.client.settings import ClientSettings
from src.sustainareview.client.store import validate_review_draft
from src.sustainareview.runtime.seed import DEMO_PASSWORD
from tests.fixtures.api import DEMO_EMAIL

PROFILE = {"user_id": "user_abc", "username": "ecowoman_emily", "email": DEMO_EMAIL}
TOKEN = {
    "user_id": "user_abc",
    "username": "ecowoman_emily",
    "access_token": "header.payload.signature",
    "token_type": "Bearer",
    "expires_in": 3600,
}
CATEGORIES = [{"category_id": "cat_001", "name": "Electronics", "description": None}]
ATTRIBUTES = [
    {"attribute_id": "attr_002", "name": "Vegan", "attribute_type": "ethical", "description": None}
]


def _page(product_ids: list[str], page: int = 1) -> dict:
    return {
        "products": [{"product_id": pid, "name": pid} for pid in product_ids],
        "pagination": {
            "currentPage": page,
            "pageSize": 20,
            "totalPages": 1,
            "totalProducts": len(product_ids),
        },
    }


def _error(status: int, message: str) -> tuple[int, dict]:
    return status, {"error": message, "request_id": "req-1"}


class FakeApi:
    """Routes requests to canned responses and records them."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, object]] = {
            ("POST", "/auth/login"): (200, TOKEN),
            ("GET", "/users/me"): (200, PROFILE),
            ("GET", "/categories"): (200, CATEGORIES),
            ("GET", "/attributes"): (200, ATTRIBUTES),
            ("GET", "/products"): (200, _page(["prod_001"])),
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get((request.method, request.url.path), _error(404, "Not Found"))
        return httpx.Response(status, json=body)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
async def store(fake_api: FakeApi):
    client = SustainaReviewClient(
        ClientSettings(api_base_url="http://api.test"),
        transport=httpx.MockTransport(fake_api),
    )
    try:
        yield AppStore(client)
    finally:
        await client.aclose()


class TestValidateReviewDraft:
    def test_valid_draft(self):
        draft = {
            "title": "Great",
            "body": "Works well.",
            "overall_rating": 5,
            "ethical_rating": "4",
            "confirmation_checkbox": True,
        }

        assert validate_review_draft(draft) == {}

    def test_missing_confirmation(self):
        errors = validate_review_draft(
            {"title": "Great", "body": "Works well.", "overall_rating": 5}
        )

        assert list(errors) == ["confirmation_checkbox"]

    def test_field_errors(self):
        errors = validate_review_draft(
            {
                "title": "  ",
                "body": "",
                "overall_rating": 9,
                "durability_rating": "x",
                "confirmation_checkbox": True,
            }
        )

        assert set(errors) == {"title", "body", "overall_rating", "durability_rating"}


class TestStoreActions:
    async def test_filter_actions_delegate(self, store: AppStore):
        store.set_page(4)
        store.set_category_filter("cat_002")
        store.toggle_attribute_filter("attr_007")
        store.set_score_filter("sustainability", 4.5)

        assert store.filters.page == 1
        assert store.filters.category_id == "cat_002"
        assert store.filters.attribute_ids == ["attr_007"]

        store.set_search_term("shirt")
        assert store.filters.category_id is None

        store.set_sort("name", "asc")
        store.set_page_size(5)
        store.clear_all_filters()
        assert store.filters == CatalogFilters(page_size=5)

    async def test_url_sync(self, store: AppStore):
        store.set_search_term("coffee")
        store.set_score_filter("ethical", 4.5)
        store.set_attribute_filters(["attr_003", "attr_009"])
        store.set_page(2)
        url = store.to_url()

        other = AppStore(store.client)
        other.sync_from_url(f"http://localhost:5173{url}")

        assert url.startswith("/products?")
        assert other.filters == store.filters

    async def test_sync_from_bare_query_string(self, store: AppStore):
        store.sync_from_url("q=boots&sort_by=durability_score&page=3&pageSize=10")

        assert store.filters.search_term == "boots"
        assert store.filters.sort_by == "durability_score"
        assert store.filters.page == 3
        assert store.filters.page_size == 10

    async def test_notifications(self, store: AppStore):
        store.show_notification("Saved", "success")
        assert (store.notifications.message, store.notifications.visible) == ("Saved", True)

        store.hide_notification()
        assert store.notifications.visible is False
        assert store.notifications.message is None

    async def test_set_auth_user_rejects_unknown_fields(self, store: AppStore):
        with pytest.raises(AttributeError):
            store.set_auth_user(favourite_color="green")


class TestStoreFlows:
    async def test_login(self, store: AppStore, fake_api: FakeApi):
        assert await store.login(DEMO_EMAIL, DEMO_PASSWORD) is True

        assert store.auth.is_authenticated
        assert store.auth.username == "ecowoman_emily"
        assert store.auth.email == DEMO_EMAIL
        assert store.auth.token_valid()
        assert store.client.access_token == TOKEN["access_token"]
        me = next(r for r in fake_api.requests if r.url.path == "/users/me")
        assert me.headers["Authorization"] == f"Bearer {TOKEN['access_token']}"

    async def test_failed_login(self, store: AppStore, fake_api: FakeApi):
        fake_api.routes[("POST", "/auth/login")] = _error(401, "Invalid email or password")

        assert await store.login(DEMO_EMAIL, "nope") is False

        assert not store.auth.is_authenticated
        assert store.auth.access_token is None
        assert store.auth.error == "Invalid email or password"
        assert store.notifications.type == "error"

    async def test_logout(self, store: AppStore):
        await store.login(DEMO_EMAIL, DEMO_PASSWORD)

        store.logout()

        assert not store.auth.is_authenticated
        assert store.client.access_token is None

    async def test_initialize_with_valid_token(self, store: AppStore, fake_api: FakeApi):
        store.auth.access_token = "stored-token"
        store.auth.token_expiration = time.time() + 600

        await store.initialize_app()

        assert store.auth.is_authenticated
        assert store.auth.user_id == "user_abc"
        assert store.categories.items == CATEGORIES
        assert store.attributes.items == ATTRIBUTES
        assert store.auth.loading is False

    async def test_initialize_with_rejected_token(self, store: AppStore, fake_api: FakeApi):
        fake_api.routes[("GET", "/users/me")] = _error(401, "Invalid or expired token")
        store.auth.access_token = "stored-token"
        store.auth.token_expiration = time.time() + 600

        await store.initialize_app()

        assert not store.auth.is_authenticated
        assert store.auth.access_token is None
        assert store.notifications.type == "warning"
        assert store.categories.items == CATEGORIES

    async def test_initialize_with_expired_token_skips_check(
        self, store: AppStore, fake_api: FakeApi
    ):
        store.auth.access_token = "stored-token"
        store.auth.token_expiration = time.time() - 1

        await store.initialize_app()

        assert "/users/me" not in fake_api.paths()
        assert store.auth.access_token is None

    async def test_initialize_skips_loaded_lists(self, store: AppStore, fake_api: FakeApi):
        store.categories.items = CATEGORIES
        store.attributes.items = ATTRIBUTES

        await store.initialize_app()

        assert fake_api.paths() == []

    async def test_fetch_products_sends_filters(self, store: AppStore, fake_api: FakeApi):
        store.set_score_filter("sustainability", 4.5)

        assert await store.fetch_products() is True

        params = fake_api.requests[-1].url.params
        assert params["min_sustainability_score"] == "4.5"
        assert params["pageSize"] == "20"
        assert [p["product_id"] for p in store.products.items] == ["prod_001"]
        assert store.products.loading is False

    async def test_fetch_products_failure(self, store: AppStore, fake_api: FakeApi):
        fake_api.routes[("GET", "/products")] = _error(400, "pageSize must be between 1 and 100")

        assert await store.fetch_products() is False

        assert store.products.error == "pageSize must be between 1 and 100"
        assert store.products.loading is False
        assert store.notifications.type == "error"

    async def test_stale_fetch_does_not_overwrite_newer(self, store: AppStore):
        release_first = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params["page"])
            if page == 1:
                await release_first.wait()
            return httpx.Response(200, json=_page([f"page_{page}"], page))

        store.client = SustainaReviewClient(
            ClientSettings(api_base_url="http://api.test"), transport=httpx.MockTransport(handler)
        )
        try:
            first = asyncio.create_task(store.fetch_products())
            await asyncio.sleep(0)

            store.set_page(2)
            assert await store.fetch_products() is True

            release_first.set()
            assert await first is False
        finally:
            await store.client.aclose()

        assert [p["product_id"] for p in store.products.items] == ["page_2"]
        assert store.products.pagination["currentPage"] == 2

    async def test_transport_failure(self, store: AppStore, fake_api: FakeApi):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        store.client = SustainaReviewClient(
            ClientSettings(api_base_url="http://api.test"), transport=httpx.MockTransport(refuse)
        )
        try:
            with pytest.raises(ApiError) as exc_info:
                await store.client.list_categories()
        finally:
            await store.client.aclose()
        assert exc_info.value.status_code == 0


class TestStoreReviewSubmission:
    async def test_unconfirmed_draft_never_sent(self, store: AppStore, fake_api: FakeApi):
        await store.login(DEMO_EMAIL, DEMO_PASSWORD)
        sent_before = len(fake_api.requests)

        with pytest.raises(DraftValidationError) as exc_info:
            await store.submit_review(
                "prod_001", {"title": "Great", "body": "Works.", "overall_rating": 5}
            )

        assert "confirmation_checkbox" in exc_info.value.errors
        assert len(fake_api.requests) == sent_before
        assert store.notifications.type == "error"

    async def test_submit_sends_multipart(self, store: AppStore, fake_api: FakeApi):
        fake_api.routes[("POST", "/products/prod_001/reviews")] = (
            201,
            {"review_id": "rev_new", "message": "pending moderation"},
        )
        await store.login(DEMO_EMAIL, DEMO_PASSWORD)

        review_id = await store.submit_review(
            "prod_001",
            {
                "title": "Great",
                "body": "Works.",
                "overall_rating": 5,
                "confirmation_checkbox": True,
            },
            photos=[("leaf.jpg", b"jpeg-bytes", "image/jpeg")],
        )

        assert review_id == "rev_new"
        request = fake_api.requests[-1]
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="confirmation_checkbox"' in request.content
        assert b'filename="leaf.jpg"' in request.content
        assert store.notifications.type == "success"

    async def test_auth_required_calls_fail_without_token(self, store: AppStore):
        with pytest.raises(ApiError) as exc_info:
            await store.client.get_me()

        assert exc_info.value.status_code == 401


class TestStorePersistence:
    async def test_save_and_load(self, store: AppStore, tmp_path):
        await store.login(DEMO_EMAIL, DEMO_PASSWORD)
        await store.initialize_app()
        path = tmp_path / "state" / "client.json"

        store.save(path)
        restored = AppStore(store.client)
        restored.client.access_token = None

        assert restored.load(path) is True
        assert restored.auth.username == "ecowoman_emily"
        assert restored.auth.token_valid()
        assert restored.categories.items == CATEGORIES
        assert restored.client.access_token == TOKEN["access_token"]
        assert "loading" not in json.loads(path.read_text())["auth"]

    async def test_load_missing_or_corrupt(self, store: AppStore, tmp_path):
        assert store.load(tmp_path / "missing.json") is False

        corrupt = tmp_path / "corrupt.json"
        corrupt.write_text("{not json")
        assert store.load(corrupt) is False


class TestAgainstApplication:
    """The store driving the real application in-process."""

    async def test_login_and_filtered_fetch(self, api_client: TestClient):
        client = SustainaReviewClient(
            ClientSettings(api_base_url="http://testserver"),
            transport=httpx.ASGITransport(app=app),
        )
        store = AppStore(client)
        try:
            assert await store.login(DEMO_EMAIL, DEMO_PASSWORD) is True
            store.set_score_filter("sustainability", 4.5)
            assert await store.fetch_products() is True
            bookmarks = await client.my_bookmarks()
        finally:
            await client.aclose()

        assert store.products.pagination["totalProducts"] == 7
        assert all(p["sustainability_score"] >= 4.5 for p in store.products.items)
        assert [b["product_id"] for b in bookmarks] == ["prod_008", "prod_001"]
