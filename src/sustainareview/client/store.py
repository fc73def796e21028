"""Client-side application state.

``AppStore`` holds the auth, products, filters, categories, attributes and
notification slices of the UI, keeps the filters in step with the listing URL
and talks to the API through ``SustainaReviewClient``.
"""

from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Literal
from urllib.parse import parse_qsl, urlencode, urlsplit

from loguru import logger

from src.sustainareview.client.api_client import ApiError, PhotoFile, SustainaReviewClient
from src.sustainareview.client.filters import DEFAULT_PAGE_SIZE, CatalogFilters

NotificationType = Literal["info", "success", "warning", "error"]

_RATING_FIELDS = ("sustainability_rating", "ethical_rating", "durability_rating")


def _empty_pagination(page_size: int = DEFAULT_PAGE_SIZE) -> dict[str, int]:
    return {"currentPage": 1, "pageSize": page_size, "totalPages": 0, "totalProducts": 0}


@dataclass
class AuthState:
    is_authenticated: bool = False
    user_id: str | None = None
    username: str | None = None
    email: str | None = None
    access_token: str | None = None
    token_expiration: float | None = None
    loading: bool = False
    error: str | None = None

    def token_valid(self, now: float | None = None) -> bool:
        return bool(
            self.access_token
            and self.token_expiration
            and self.token_expiration > (now if now is not None else time.time())
        )


@dataclass
class ProductsState:
    items: list[dict[str, Any]] = field(default_factory=list)
    pagination: dict[str, int] = field(default_factory=_empty_pagination)
    loading: bool = False
    error: str | None = None


@dataclass
class ListState:
    items: list[dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: str | None = None


@dataclass
class NotificationState:
    message: str | None = None
    type: NotificationType = "info"
    visible: bool = False


class DraftValidationError(ValueError):
    """A review draft failed the checks made before submission."""

    def __init__(self, errors: dict[str, str]):
        super().__init__(next(iter(errors.values())))
        self.errors = errors


def _rating_error(value: Any, required: bool) -> str | None:
    if value is None or value == "":
        return "Rating is required" if required else None
    try:
        rating = int(value)
    except (TypeError, ValueError):
        return "Rating must be a whole number"
    if not 1 <= rating <= 5:
        return "Rating must be between 1 and 5"
    return None


def validate_review_draft(draft: dict[str, Any]) -> dict[str, str]:
    """Field errors of a review draft; an empty dict means it can be sent."""
    errors: dict[str, str] = {}
    if not str(draft.get("title") or "").strip():
        errors["title"] = "Title is required"
    if not str(draft.get("body") or "").strip():
        errors["body"] = "Review text is required"
    overall = _rating_error(draft.get("overall_rating"), required=True)
    if overall:
        errors["overall_rating"] = overall
    for name in _RATING_FIELDS:
        problem = _rating_error(draft.get(name), required=False)
        if problem:
            errors[name] = problem
    if not draft.get("confirmation_checkbox"):
        errors["confirmation_checkbox"] = (
            "Please confirm that this review reflects your own experience"
        )
    return errors


class AppStore:
    def __init__(self, client: SustainaReviewClient, filters: CatalogFilters | None = None):
        self.client = client
        self.auth = AuthState()
        self.products = ProductsState()
        self.filters = filters or CatalogFilters()
        self.categories = ListState()
        self.attributes = ListState()
        self.notifications = NotificationState()
        self._fetch_generation = 0

    # --- Auth actions ---
    def set_auth_user(self, **user_data: Any) -> None:
        for name, value in user_data.items():
            if not hasattr(self.auth, name):
                raise AttributeError(f"AuthState has no field {name!r}")
            setattr(self.auth, name, value)
        self.auth.loading = False
        self.auth.error = None
        self.client.access_token = self.auth.access_token

    def clear_auth_state(self) -> None:
        self.auth = AuthState(loading=self.auth.loading)
        self.client.access_token = None

    # --- Filter actions ---
    def set_search_term(self, term: str | None) -> None:
        self.filters.set_search_term(term)

    def set_category_filter(self, category_id: str | None) -> None:
        self.filters.set_category(category_id)

    def set_brand_filter(self, brand_name: str | None) -> None:
        self.filters.set_brand(brand_name)

    def set_score_filter(self, score_type: str, value: float | None) -> None:
        self.filters.set_score(score_type, value)

    def toggle_attribute_filter(self, attribute_id: str) -> None:
        self.filters.toggle_attribute(attribute_id)

    def set_attribute_filters(self, attribute_ids: list[str]) -> None:
        self.filters.set_attributes(attribute_ids)

    def set_sort(self, sort_by: str | None, sort_order: str | None) -> None:
        self.filters.set_sort(sort_by, sort_order)

    def set_page(self, page: int) -> None:
        self.filters.set_page(page)

    def set_page_size(self, page_size: int) -> None:
        self.filters.set_page_size(page_size)

    def clear_all_filters(self) -> None:
        self.filters.clear()

    # --- Notifications ---
    def show_notification(self, message: str, type: NotificationType = "info") -> None:
        self.notifications = NotificationState(message=message, type=type, visible=True)

    def hide_notification(self) -> None:
        self.notifications = NotificationState(type=self.notifications.type)

    # --- URL sync ---
    def sync_from_url(self, url: str) -> None:
        """Replace the filters with the ones encoded in a listing URL or query string."""
        if "?" in url or url.startswith("/") or "://" in url:
            query = urlsplit(url).query
        else:
            query = url
        self.filters = CatalogFilters.from_query_params(dict(parse_qsl(query)))

    def to_url(self, path: str = "/products") -> str:
        return f"{path}?{urlencode(self.filters.to_query_params())}"

    def validate_review_draft(self, draft: dict[str, Any]) -> dict[str, str]:
        """Check a draft before any request is made; the first problem is shown."""
        errors = validate_review_draft(draft)
        if errors:
            self.show_notification(next(iter(errors.values())), "error")
        return errors

    # --- Async flows ---
    async def initialize_app(self) -> None:
        """Validate a stored token and load the category and attribute lists."""
        self.auth.loading = True
        try:
            if self.auth.token_valid():
                self.client.access_token = self.auth.access_token
                try:
                    me = await self.client.get_me()
                    self.set_auth_user(
                        is_authenticated=True,
                        user_id=me["user_id"],
                        username=me["username"],
                        email=me["email"],
                        access_token=self.auth.access_token,
                        token_expiration=self.auth.token_expiration,
                    )
                except ApiError as e:
                    logger.info("Stored token rejected: {}", e.message)
                    self.clear_auth_state()
                    self.show_notification("Session expired. Please log in again.", "warning")
            else:
                self.clear_auth_state()

            if not self.categories.items:
                self.categories.loading = True
                try:
                    self.categories = ListState(items=await self.client.list_categories())
                except ApiError as e:
                    logger.warning("Failed to fetch categories: {}", e.message)
                    self.categories = ListState(error="Could not load categories.")
                    self.show_notification("Failed to load categories.", "error")

            if not self.attributes.items:
                self.attributes.loading = True
                try:
                    self.attributes = ListState(items=await self.client.list_attributes())
                except ApiError as e:
                    logger.warning("Failed to fetch attributes: {}", e.message)
                    self.attributes = ListState(error="Could not load attributes.")
                    self.show_notification("Failed to load attributes.", "error")
        finally:
            self.auth.loading = False

    async def login(self, email: str, password: str) -> bool:
        self.auth.loading = True
        try:
            token = await self.client.login(email, password)
            expiration = time.time() + token["expires_in"]
            self.set_auth_user(
                is_authenticated=True,
                user_id=token["user_id"],
                username=token["username"],
                access_token=token["access_token"],
                token_expiration=expiration,
            )
            me = await self.client.get_me()
            self.auth.email = me["email"]
        except ApiError as e:
            self.clear_auth_state()
            self.auth.error = e.message
            self.show_notification(e.message, "error")
            return False
        finally:
            self.auth.loading = False
        self.show_notification(f"Welcome back, {self.auth.username}!", "success")
        return True

    def logout(self) -> None:
        self.clear_auth_state()
        self.show_notification("You have been logged out.", "info")

    async def fetch_products(self) -> bool:
        """Load the page selected by the current filters.

        Only the most recently started fetch may write its result; returns
        False when this call was superseded or failed.
        """
        self._fetch_generation += 1
        generation = self._fetch_generation
        params = self.filters.to_query_params()
        self.products.loading = True
        self.products.error = None
        try:
            page = await self.client.search_products(params)
        except ApiError as e:
            if generation != self._fetch_generation:
                return False
            self.products.loading = False
            self.products.error = e.message
            self.show_notification(f"Failed to load products: {e.message}", "error")
            return False

        if generation != self._fetch_generation:
            logger.debug("Discarding stale product page for {}", params)
            return False
        self.products = ProductsState(items=page["products"], pagination=page["pagination"])
        return True

    async def submit_review(
        self,
        product_id: str,
        draft: dict[str, Any],
        photos: list[PhotoFile] | None = None,
    ) -> str:
        """Check the draft locally, then send it; returns the new review id."""
        errors = self.validate_review_draft(draft)
        if errors:
            raise DraftValidationError(errors)

        fields = {k: draft.get(k) for k in ("title", "body", "overall_rating", *_RATING_FIELDS)}
        try:
            result = await self.client.submit_review(
                product_id, fields, confirmation=True, photos=photos
            )
        except ApiError as e:
            self.show_notification(e.message, "error")
            raise
        self.show_notification(result["message"], "success")
        return result["review_id"]

    # --- Persistence ---
    def snapshot(self) -> dict[str, Any]:
        """The parts of the state that outlive a session."""
        auth = asdict(self.auth)
        auth.pop("loading")
        auth.pop("error")
        return {
            "auth": auth,
            "categories": {"items": self.categories.items},
            "attributes": {"items": self.attributes.items},
        }

    def restore(self, data: dict[str, Any]) -> None:
        self.auth = AuthState(**data.get("auth", {}))
        self.categories = ListState(items=data.get("categories", {}).get("items", []))
        self.attributes = ListState(items=data.get("attributes", {}).get("items", []))
        self.client.access_token = self.auth.access_token

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.snapshot(), indent=2))

    def load(self, path: str | Path) -> bool:
        path = Path(path)
        if not path.exists():
            return False
        try:
            self.restore(json.loads(path.read_text()))
        except (ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable client state {}: {}", path, e)
            return False
        return True
