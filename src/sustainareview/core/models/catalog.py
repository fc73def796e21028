"""Catalog query parameters and read models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SortField = Literal[
    "overall_score",
    "sustainability_score",
    "ethical_score",
    "durability_score",
    "name",
    "brand_name",
    "created_at",
]
SortOrder = Literal["asc", "desc"]

SCORE_FIELDS = ("overall_score", "sustainability_score", "ethical_score", "durability_score")


class CatalogQuery(BaseModel):
    """Filter, sort and pagination parameters for the product listing."""

    model_config = ConfigDict(populate_by_name=True)

    q: str | None = None
    category_id: str | None = None
    brand_name: str | None = None
    min_sustainability_score: float | None = Field(default=None, ge=0, le=5)
    min_ethical_score: float | None = Field(default=None, ge=0, le=5)
    min_durability_score: float | None = Field(default=None, ge=0, le=5)
    attribute_ids: list[str] = Field(default_factory=list)
    sort_by: SortField | None = None
    sort_order: SortOrder | None = None
    page: int = 1
    page_size: int | None = Field(default=None, alias="pageSize")

    @field_validator("q", "category_id", "brand_name", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("attribute_ids", mode="before")
    @classmethod
    def _split_attribute_ids(cls, value):
        """Accept the comma-separated wire form as well as a list."""
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        seen: list[str] = []
        for item in value:
            item = item.strip()
            if item and item not in seen:
                seen.append(item)
        return seen

    def effective_sort_order(self) -> SortOrder:
        if self.sort_order is not None:
            return self.sort_order
        if self.sort_by in ("name", "brand_name"):
            return "asc"
        return "desc"


class ProductSummary(BaseModel):
    product_id: str
    name: str
    brand_name: str
    primary_image_url: str
    overall_score: float | None = None
    sustainability_score: float | None = None
    ethical_score: float | None = None
    durability_score: float | None = None


class PaginationInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    page_size: int = Field(alias="pageSize")
    total_pages: int = Field(alias="totalPages")
    total_products: int = Field(alias="totalProducts")


class ProductPage(BaseModel):
    products: list[ProductSummary]
    pagination: PaginationInfo


class CategoryOut(BaseModel):
    category_id: str
    name: str
    description: str | None = None


class AttributeOut(BaseModel):
    attribute_id: str
    name: str
    attribute_type: str
    description: str | None = None


class ProductImage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    is_primary: bool = Field(alias="isPrimary")


class ProductScores(BaseModel):
    overall: float | None = None
    sustainability: float | None = None
    ethical: float | None = None
    durability: float | None = None


class ReviewListItem(BaseModel):
    review_id: str
    user_id: str
    username: str
    title: str
    body: str
    overall_rating: int
    sustainability_rating: int | None = None
    ethical_rating: int | None = None
    durability_rating: int | None = None
    helpful_votes: int
    created_at: datetime
    photos: list[str] = Field(default_factory=list)


class ProductDetail(BaseModel):
    product_id: str
    name: str
    brand_name: str
    description: str
    images: list[ProductImage]
    category: CategoryOut | None
    scores: ProductScores
    attributes: list[AttributeOut]
    reviews: list[ReviewListItem]


class BookmarkListItem(BaseModel):
    product_id: str
    name: str
    brand_name: str
    primary_image_url: str
    overall_score: float | None = None
    category_name: str


class UserReviewListItem(BaseModel):
    review_id: str
    product_id: str
    product_name: str
    title: str
    body: str
    overall_rating: int
    moderation_status: str
    created_at: datetime
