"""Entity: ProductAttribute."""

from enum import Enum

from pydantic import Field

from src.sustainareview.entities._base import Entity


class AttributeType(str, Enum):
    SUSTAINABILITY = "sustainability"
    ETHICAL = "ethical"
    DURABILITY = "durability"


class ProductAttribute(Entity):
    """A tag such as "Vegan" or "Fair Trade Certified", classified by axis."""

    name: str = Field(description="Unique attribute name")
    attribute_type: AttributeType
    description: str | None = None
