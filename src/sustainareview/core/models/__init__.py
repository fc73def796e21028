"""Token, catalog and review read models."""

from .auth import AccessToken, TokenClaims
from .catalog import (
    AttributeOut,
    BookmarkListItem,
    CatalogQuery,
    CategoryOut,
    PaginationInfo,
    ProductDetail,
    ProductImage,
    ProductPage,
    ProductScores,
    ProductSummary,
    ReviewListItem,
    UserReviewListItem,
)
from .review import ReviewDraft, ReviewUpdate, VoteRequest

__all__ = [
    "AccessToken",
    "TokenClaims",
    "AttributeOut",
    "BookmarkListItem",
    "CatalogQuery",
    "CategoryOut",
    "PaginationInfo",
    "ProductDetail",
    "ProductImage",
    "ProductPage",
    "ProductScores",
    "ProductSummary",
    "ReviewListItem",
    "UserReviewListItem",
    "ReviewDraft",
    "ReviewUpdate",
    "VoteRequest",
]
