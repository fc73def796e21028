"""Product database table models."""

from sqlmodel import Field, SQLModel

from src.sustainareview.entities._base import TimestampedEntityTable


class ProductTable(TimestampedEntityTable, table=True):
    """Database persistence model for products."""

    __tablename__ = "products"

    name: str = Field(max_length=255, index=True)
    brand_name: str = Field(max_length=255, index=True)
    description: str
    primary_image_url: str = Field(max_length=255)
    category_id: str = Field(foreign_key="categories.id", ondelete="CASCADE", index=True)
    overall_score: float | None = None
    sustainability_score: float | None = None
    ethical_score: float | None = None
    durability_score: float | None = None


class ProductAttributeLinkTable(SQLModel, table=True):
    """Join table linking products to their attributes."""

    __tablename__ = "product_to_attribute"

    product_id: str = Field(foreign_key="products.id", ondelete="CASCADE", primary_key=True)
    attribute_id: str = Field(
        foreign_key="product_attributes.id", ondelete="CASCADE", primary_key=True
    )
