"""Entity: Review."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from src.sustainareview.entities._base import Entity, TimestampedEntity, utcnow


class ModerationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Review(TimestampedEntity):
    """A user's review of a product.

    New and edited reviews wait in ``pending`` until a moderator approves or
    rejects them; only approved reviews are public.
    """

    product_id: str
    user_id: str
    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    overall_rating: int = Field(ge=1, le=5)
    sustainability_rating: int | None = Field(default=None, ge=1, le=5)
    ethical_rating: int | None = Field(default=None, ge=1, le=5)
    durability_rating: int | None = Field(default=None, ge=1, le=5)
    helpful_votes: int = Field(default=0, ge=0)
    moderation_status: ModerationStatus = ModerationStatus.PENDING


class ReviewPhoto(Entity):
    review_id: str
    photo_url: str
    uploaded_at: datetime = Field(default_factory=utcnow)
