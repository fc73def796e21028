"""Product repository for data access operations."""

from sqlmodel import Session, select

from src.sustainareview.entities.service.attribute import ProductAttribute, ProductAttributeTable
from src.sustainareview.entities.service.product.entity import Product
from src.sustainareview.entities.service.product.table import (
    ProductAttributeLinkTable,
    ProductTable,
)


class ProductRepository:
    """Data-access layer for products and their attribute links."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def exists(self, product_id: str) -> bool:
        return self._session.get(ProductTable, product_id) is not None

    def create(self, product: Product, attribute_ids: list[str] | None = None) -> Product:
        row = ProductTable.model_validate(product, from_attributes=True)
        self._session.add(row)
        for attribute_id in attribute_ids or []:
            self._session.add(
                ProductAttributeLinkTable(product_id=row.id, attribute_id=attribute_id)
            )
        self._session.flush()
        return Product.model_validate(row, from_attributes=True)

    def get_attributes(self, product_id: str) -> list[ProductAttribute]:
        statement = (
            select(ProductAttributeTable)
            .join(
                ProductAttributeLinkTable,
                ProductAttributeLinkTable.attribute_id == ProductAttributeTable.id,
            )
            .where(ProductAttributeLinkTable.product_id == product_id)
            .order_by(ProductAttributeTable.name)
        )
        rows = self._session.exec(statement).all()
        return [ProductAttribute.model_validate(row, from_attributes=True) for row in rows]
