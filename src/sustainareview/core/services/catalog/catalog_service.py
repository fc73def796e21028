"""Read side of the catalog: product search, product detail and lookups."""

import math

import sqlalchemy as sa
from fastapi import HTTPException
from loguru import logger
from sqlmodel import Session, col, func, select

from src.sustainareview.core.models.catalog import (
    AttributeOut,
    CatalogQuery,
    CategoryOut,
    PaginationInfo,
    ProductDetail,
    ProductImage,
    ProductPage,
    ProductScores,
    ProductSummary,
    ReviewListItem,
)
from src.sustainareview.entities.service.attribute import (
    AttributeType,
    ProductAttributeRepository,
)
from src.sustainareview.entities.service.category import CategoryRepository
from src.sustainareview.entities.service.product import (
    ProductAttributeLinkTable,
    ProductRepository,
    ProductTable,
)
from src.sustainareview.entities.service.review import ModerationStatus, ReviewRepository
from src.sustainareview.runtime.context import get_config


def _summary(row: ProductTable) -> ProductSummary:
    return ProductSummary(
        product_id=row.id,
        name=row.name,
        brand_name=row.brand_name,
        primary_image_url=row.primary_image_url,
        overall_score=row.overall_score,
        sustainability_score=row.sustainability_score,
        ethical_score=row.ethical_score,
        durability_score=row.durability_score,
    )


class CatalogService:
    def __init__(self, db_session: Session):
        self._db_session = db_session

    def _resolve_page_size(self, query: CatalogQuery) -> int:
        cfg = get_config().catalog
        page_size = query.page_size if query.page_size is not None else cfg.default_page_size
        if page_size < 1 or page_size > cfg.max_page_size:
            raise HTTPException(
                status_code=400,
                detail=f"pageSize must be between 1 and {cfg.max_page_size}",
            )
        if query.page < 1:
            raise HTTPException(status_code=400, detail="page must be 1 or greater")
        return page_size

    @staticmethod
    def _conditions(query: CatalogQuery) -> list:
        conditions = []
        if query.q:
            needle = query.q.strip().lower()
            conditions.append(
                sa.or_(
                    func.lower(ProductTable.name).contains(needle, autoescape=True),
                    func.lower(ProductTable.brand_name).contains(needle, autoescape=True),
                    func.lower(ProductTable.description).contains(needle, autoescape=True),
                )
            )
        if query.category_id:
            conditions.append(ProductTable.category_id == query.category_id)
        if query.brand_name:
            conditions.append(ProductTable.brand_name == query.brand_name)

        for column, threshold in (
            (ProductTable.sustainability_score, query.min_sustainability_score),
            (ProductTable.ethical_score, query.min_ethical_score),
            (ProductTable.durability_score, query.min_durability_score),
        ):
            if threshold is not None:
                conditions.append(col(column).is_not(None))
                conditions.append(column >= threshold)

        # Every listed attribute must be present
        for attribute_id in query.attribute_ids:
            conditions.append(
                col(ProductTable.id).in_(
                    select(ProductAttributeLinkTable.product_id).where(
                        ProductAttributeLinkTable.attribute_id == attribute_id
                    )
                )
            )
        return conditions

    @staticmethod
    def _ordering(query: CatalogQuery) -> list:
        sort_by = query.sort_by or "created_at"
        column = getattr(ProductTable, sort_by)
        direction = query.effective_sort_order()
        ordered = col(column).asc() if direction == "asc" else col(column).desc()
        return [
            # Nulls last regardless of direction
            sa.case((col(column).is_(None), 1), else_=0),
            ordered,
            col(ProductTable.id).asc(),
        ]

    def search_products(self, query: CatalogQuery) -> ProductPage:
        page_size = self._resolve_page_size(query)
        conditions = self._conditions(query)

        total = self._db_session.exec(
            select(func.count()).select_from(ProductTable).where(*conditions)
        ).one()

        statement = (
            select(ProductTable)
            .where(*conditions)
            .order_by(*self._ordering(query))
            .offset((query.page - 1) * page_size)
            .limit(page_size)
        )
        rows = self._db_session.exec(statement).all()

        logger.debug(
            "Catalog query matched {} products, returning page {} ({} rows)",
            total,
            query.page,
            len(rows),
        )
        return ProductPage(
            products=[_summary(row) for row in rows],
            pagination=PaginationInfo(
                current_page=query.page,
                page_size=page_size,
                total_pages=math.ceil(total / page_size) if total else 0,
                total_products=total,
            ),
        )

    def get_product_detail(self, product_id: str) -> ProductDetail:
        product = ProductRepository(self._db_session).get(product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found")

        category = CategoryRepository(self._db_session).get(product.category_id)
        attributes = ProductRepository(self._db_session).get_attributes(product_id)

        review_repo = ReviewRepository(self._db_session)
        reviews = review_repo.list_for_product(product_id, ModerationStatus.APPROVED)
        photos = review_repo.photos_for([review.id for review, _ in reviews])

        images = [ProductImage(url=product.primary_image_url, is_primary=True)]
        review_items = []
        for review, username in reviews:
            review_photos = [photo.photo_url for photo in photos.get(review.id, [])]
            images.extend(ProductImage(url=url, is_primary=False) for url in review_photos)
            review_items.append(
                ReviewListItem(
                    review_id=review.id,
                    user_id=review.user_id,
                    username=username,
                    title=review.title,
                    body=review.body,
                    overall_rating=review.overall_rating,
                    sustainability_rating=review.sustainability_rating,
                    ethical_rating=review.ethical_rating,
                    durability_rating=review.durability_rating,
                    helpful_votes=review.helpful_votes,
                    created_at=review.created_at,
                    photos=review_photos,
                )
            )

        return ProductDetail(
            product_id=product.id,
            name=product.name,
            brand_name=product.brand_name,
            description=product.description,
            images=images,
            category=(
                CategoryOut(
                    category_id=category.id,
                    name=category.name,
                    description=category.description,
                )
                if category
                else None
            ),
            scores=ProductScores(
                overall=product.overall_score,
                sustainability=product.sustainability_score,
                ethical=product.ethical_score,
                durability=product.durability_score,
            ),
            attributes=[
                AttributeOut(
                    attribute_id=attribute.id,
                    name=attribute.name,
                    attribute_type=attribute.attribute_type.value,
                    description=attribute.description,
                )
                for attribute in attributes
            ],
            reviews=review_items,
        )

    def list_categories(self) -> list[CategoryOut]:
        return [
            CategoryOut(category_id=c.id, name=c.name, description=c.description)
            for c in CategoryRepository(self._db_session).list_all()
        ]

    def list_attributes(self, attribute_type: str | None = None) -> list[AttributeOut]:
        kind = None
        if attribute_type:
            try:
                kind = AttributeType(attribute_type)
            except ValueError as e:
                raise HTTPException(
                    status_code=400,
                    detail="type must be one of: sustainability, ethical, durability",
                ) from e
        return [
            AttributeOut(
                attribute_id=a.id,
                name=a.name,
                attribute_type=a.attribute_type.value,
                description=a.description,
            )
            for a in ProductAttributeRepository(self._db_session).list_all(kind)
        ]
