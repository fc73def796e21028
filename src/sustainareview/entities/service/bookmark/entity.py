"""Entity: Bookmark."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.sustainareview.entities._base import utcnow


class Bookmark(BaseModel):
    """A user's saved reference to a product, keyed by (user_id, product_id)."""

    user_id: str
    product_id: str
    bookmarked_at: datetime = Field(default_factory=utcnow)
