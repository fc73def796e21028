"""Bookmark database table model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.sustainareview.entities._base import utcnow


class BookmarkTable(SQLModel, table=True):
    """Join table of users and the products they bookmarked."""

    __tablename__ = "user_bookmarks"

    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True)
    product_id: str = Field(foreign_key="products.id", ondelete="CASCADE", primary_key=True)
    bookmarked_at: datetime = Field(default_factory=utcnow)
