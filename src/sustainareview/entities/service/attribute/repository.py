"""ProductAttribute repository for data access operations."""

from sqlmodel import Session, select

from src.sustainareview.entities.service.attribute.entity import AttributeType, ProductAttribute
from src.sustainareview.entities.service.attribute.table import ProductAttributeTable


class ProductAttributeRepository:
    """Data-access layer for product attributes."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self, attribute_type: AttributeType | None = None) -> list[ProductAttribute]:
        statement = select(ProductAttributeTable)
        if attribute_type is not None:
            statement = statement.where(
                ProductAttributeTable.attribute_type == attribute_type.value
            )
        rows = self._session.exec(statement.order_by(ProductAttributeTable.name)).all()
        return [ProductAttribute.model_validate(row, from_attributes=True) for row in rows]

    def create(self, attribute: ProductAttribute) -> ProductAttribute:
        row = ProductAttributeTable(
            id=attribute.id,
            name=attribute.name,
            attribute_type=attribute.attribute_type.value,
            description=attribute.description,
        )
        self._session.add(row)
        self._session.flush()
        return ProductAttribute.model_validate(row, from_attributes=True)
