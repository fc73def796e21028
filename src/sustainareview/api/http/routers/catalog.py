"""Public catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from src.sustainareview.api.http.deps import get_catalog_service
from src.sustainareview.core.models.catalog import (
    AttributeOut,
    CatalogQuery,
    CategoryOut,
    ProductDetail,
    ProductPage,
)
from src.sustainareview.core.services import CatalogService
from src.sustainareview.core.validation import first_validation_message

router = APIRouter(tags=["catalog"])


@router.get("/categories", response_model=list[CategoryOut])
def list_categories(
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[CategoryOut]:
    return catalog.list_categories()


@router.get("/attributes", response_model=list[AttributeOut])
def list_attributes(
    attribute_type: str | None = Query(default=None, alias="type"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[AttributeOut]:
    return catalog.list_attributes(attribute_type)


@router.get("/products", response_model=ProductPage)
def search_products(
    q: str | None = None,
    category_id: str | None = None,
    brand_name: str | None = None,
    min_sustainability_score: float | None = None,
    min_ethical_score: float | None = None,
    min_durability_score: float | None = None,
    attribute_ids: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    page: int = 1,
    page_size: int | None = Query(default=None, alias="pageSize"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProductPage:
    """Search, filter, sort and paginate the product catalog."""
    try:
        query = CatalogQuery(
            q=q,
            category_id=category_id,
            brand_name=brand_name,
            min_sustainability_score=min_sustainability_score,
            min_ethical_score=min_ethical_score,
            min_durability_score=min_durability_score,
            attribute_ids=attribute_ids,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            page_size=page_size,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=first_validation_message(e)) from e
    return catalog.search_products(query)


@router.get("/products/{product_id}", response_model=ProductDetail)
def get_product(
    product_id: str, catalog: CatalogService = Depends(get_catalog_service)
) -> ProductDetail:
    return catalog.get_product_detail(product_id)
