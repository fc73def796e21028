"""Review database table models."""

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from src.sustainareview.entities._base import EntityTable, TimestampedEntityTable, utcnow


class ReviewTable(TimestampedEntityTable, table=True):
    """Database persistence model for reviews."""

    __tablename__ = "reviews"
    __table_args__ = (
        sa.CheckConstraint(
            "overall_rating >= 1 AND overall_rating <= 5", name="ck_reviews_overall"
        ),
        sa.CheckConstraint(
            "sustainability_rating IS NULL OR (sustainability_rating >= 1 AND sustainability_rating <= 5)",
            name="ck_reviews_sustainability",
        ),
        sa.CheckConstraint(
            "ethical_rating IS NULL OR (ethical_rating >= 1 AND ethical_rating <= 5)",
            name="ck_reviews_ethical",
        ),
        sa.CheckConstraint(
            "durability_rating IS NULL OR (durability_rating >= 1 AND durability_rating <= 5)",
            name="ck_reviews_durability",
        ),
        sa.CheckConstraint(
            "moderation_status IN ('pending', 'approved', 'rejected')",
            name="ck_reviews_moderation_status",
        ),
    )

    product_id: str = Field(foreign_key="products.id", ondelete="CASCADE", index=True)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=255)
    body: str
    overall_rating: int
    sustainability_rating: int | None = None
    ethical_rating: int | None = None
    durability_rating: int | None = None
    helpful_votes: int = Field(default=0)
    moderation_status: str = Field(default="pending", max_length=20, index=True)


class ReviewPhotoTable(EntityTable, table=True):
    """Photos uploaded with a review."""

    __tablename__ = "review_photos"

    review_id: str = Field(foreign_key="reviews.id", ondelete="CASCADE", index=True)
    photo_url: str = Field(max_length=255)
    uploaded_at: datetime = Field(default_factory=utcnow)


class ReviewVoteTable(SQLModel, table=True):
    """One helpful vote per user per review."""

    __tablename__ = "review_votes"

    review_id: str = Field(foreign_key="reviews.id", ondelete="CASCADE", primary_key=True)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True)
    vote_type: str = Field(default="helpful", max_length=20)
    created_at: datetime = Field(default_factory=utcnow)
