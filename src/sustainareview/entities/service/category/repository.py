"""Category repository for data access operations."""

from sqlmodel import Session, select

from src.sustainareview.entities.service.category.entity import Category
from src.sustainareview.entities.service.category.table import CategoryTable


class CategoryRepository:
    """Data-access layer for categories."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, category_id: str) -> Category | None:
        row = self._session.get(CategoryTable, category_id)
        if row is None:
            return None
        return Category.model_validate(row, from_attributes=True)

    def list_all(self) -> list[Category]:
        rows = self._session.exec(select(CategoryTable).order_by(CategoryTable.name)).all()
        return [Category.model_validate(row, from_attributes=True) for row in rows]

    def create(self, category: Category) -> Category:
        row = CategoryTable.model_validate(category, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return Category.model_validate(row, from_attributes=True)
