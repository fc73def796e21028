"""Bookmark repository for data access operations."""

from sqlmodel import Session, col, select

from src.sustainareview.entities.service.bookmark.entity import Bookmark
from src.sustainareview.entities.service.bookmark.table import BookmarkTable
from src.sustainareview.entities.service.category import CategoryTable
from src.sustainareview.entities.service.product import ProductTable


class BookmarkRepository:
    """Data-access layer for bookmarks."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: str, product_id: str) -> Bookmark | None:
        row = self._session.get(BookmarkTable, (user_id, product_id))
        if row is None:
            return None
        return Bookmark.model_validate(row, from_attributes=True)

    def create(self, bookmark: Bookmark) -> Bookmark:
        row = BookmarkTable.model_validate(bookmark, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return Bookmark.model_validate(row, from_attributes=True)

    def delete(self, user_id: str, product_id: str) -> bool:
        row = self._session.get(BookmarkTable, (user_id, product_id))
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def list_products_for_user(self, user_id: str) -> list[tuple[ProductTable, str]]:
        """Bookmarked products with their category name, most recent first."""
        statement = (
            select(ProductTable, CategoryTable.name)
            .join(BookmarkTable, BookmarkTable.product_id == ProductTable.id)
            .join(CategoryTable, CategoryTable.id == ProductTable.category_id)
            .where(BookmarkTable.user_id == user_id)
            .order_by(col(BookmarkTable.bookmarked_at).desc(), col(ProductTable.id))
        )
        return list(self._session.exec(statement).all())
