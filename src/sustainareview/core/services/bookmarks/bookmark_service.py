from fastapi import HTTPException
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.sustainareview.core.models.catalog import BookmarkListItem
from src.sustainareview.entities.core.user import User
from src.sustainareview.entities.service.bookmark import Bookmark, BookmarkRepository
from src.sustainareview.entities.service.product import ProductRepository


class BookmarkService:
    def __init__(self, db_session: Session):
        self._db_session = db_session
        self._bookmarks = BookmarkRepository(db_session)
        self._products = ProductRepository(db_session)

    def add(self, user: User, product_id: str) -> Bookmark:
        if not self._products.exists(product_id):
            raise HTTPException(status_code=404, detail="Product not found")
        if self._bookmarks.get(user.id, product_id) is not None:
            raise HTTPException(status_code=409, detail="Product already bookmarked")
        try:
            bookmark = self._bookmarks.create(Bookmark(user_id=user.id, product_id=product_id))
            self._db_session.commit()
        except IntegrityError as e:
            self._db_session.rollback()
            raise HTTPException(status_code=409, detail="Product already bookmarked") from e
        logger.info("User {} bookmarked product {}", user.id, product_id)
        return bookmark

    def remove(self, user: User, product_id: str) -> None:
        if not self._bookmarks.delete(user.id, product_id):
            raise HTTPException(status_code=404, detail="Bookmark not found")
        self._db_session.commit()

    def list_for_user(self, user: User) -> list[BookmarkListItem]:
        return [
            BookmarkListItem(
                product_id=product.id,
                name=product.name,
                brand_name=product.brand_name,
                primary_image_url=product.primary_image_url,
                overall_score=product.overall_score,
                category_name=category_name,
            )
            for product, category_name in self._bookmarks.list_products_for_user(user.id)
        ]
