"""Entity: Product."""

from typing import Any

from pydantic import Field

from src.sustainareview.entities._base import TimestampedEntity


class Product(TimestampedEntity):
    """Product entity representing a reviewed product.

    Scores run from 0 to 5 and stay null until the product has been rated on
    that axis.
    """

    name: str
    brand_name: str
    description: str
    primary_image_url: str
    category_id: str
    overall_score: float | None = Field(default=None, ge=0, le=5)
    sustainability_score: float | None = Field(default=None, ge=0, le=5)
    ethical_score: float | None = Field(default=None, ge=0, le=5)
    durability_score: float | None = Field(default=None, ge=0, le=5)

    def __eq__(self, other: Any) -> bool:
        """Compare products by identity and name, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return self.id == other.id and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.id, self.name))
