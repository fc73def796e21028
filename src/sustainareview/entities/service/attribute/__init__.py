"""Entity package: ProductAttribute."""

from .entity import AttributeType, ProductAttribute
from .repository import ProductAttributeRepository
from .table import ProductAttributeTable

__all__ = [
    "AttributeType",
    "ProductAttribute",
    "ProductAttributeRepository",
    "ProductAttributeTable",
]
