"""ProductAttribute database table model."""

import sqlalchemy as sa
from sqlmodel import Field

from src.sustainareview.entities._base import EntityTable


class ProductAttributeTable(EntityTable, table=True):
    """Database persistence model for product attributes."""

    __tablename__ = "product_attributes"
    __table_args__ = (
        sa.CheckConstraint(
            "attribute_type IN ('sustainability', 'ethical', 'durability')",
            name="ck_product_attributes_type",
        ),
    )

    name: str = Field(max_length=255, unique=True)
    attribute_type: str = Field(max_length=50, index=True)
    description: str | None = None
