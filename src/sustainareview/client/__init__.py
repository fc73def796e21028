"""Python client for the SustainaReview API."""

from .api_client import ApiError, SustainaReviewClient
from .filters import CatalogFilters
from .settings import ClientSettings
from .store import AppStore, DraftValidationError, validate_review_draft

__all__ = [
    "ApiError",
    "AppStore",
    "CatalogFilters",
    "ClientSettings",
    "DraftValidationError",
    "SustainaReviewClient",
    "validate_review_draft",
]
