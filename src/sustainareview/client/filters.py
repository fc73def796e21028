"""Catalog filter state and its mapping to URL query parameters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

SCORE_TYPES = ("sustainability", "ethical", "durability")
SORT_FIELDS = (
    "overall_score",
    "sustainability_score",
    "ethical_score",
    "durability_score",
    "name",
    "brand_name",
    "created_at",
)
SORT_ORDERS = ("asc", "desc")
DEFAULT_PAGE_SIZE = 20


def _parse_float(value: str | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_int(value: str | None, default: int) -> int:
    try:
        parsed = int(value) if value not in (None, "") else default
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def _format_score(value: float) -> str:
    # Shortest exact form; whole numbers drop the ".0"
    return str(int(value)) if float(value).is_integer() else repr(float(value))


@dataclass
class CatalogFilters:
    """Filter, sort and page selection of the product listing.

    Every filter change sends the listing back to page 1; a new search term
    also clears the other filters while keeping the sort.
    """

    search_term: str | None = None
    category_id: str | None = None
    brand_name: str | None = None
    min_sustainability_score: float | None = None
    min_ethical_score: float | None = None
    min_durability_score: float | None = None
    attribute_ids: list[str] = field(default_factory=list)
    sort_by: str | None = None
    sort_order: str | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def set_search_term(self, term: str | None) -> None:
        self.search_term = term or None
        self.category_id = None
        self.brand_name = None
        self.min_sustainability_score = None
        self.min_ethical_score = None
        self.min_durability_score = None
        self.attribute_ids = []
        self.page = 1

    def set_category(self, category_id: str | None) -> None:
        self.category_id = category_id or None
        self.page = 1

    def set_brand(self, brand_name: str | None) -> None:
        self.brand_name = brand_name or None
        self.page = 1

    def set_score(self, score_type: str, value: float | None) -> None:
        if score_type not in SCORE_TYPES:
            raise ValueError(f"Unknown score type {score_type!r}")
        setattr(self, f"min_{score_type}_score", value)
        self.page = 1

    def toggle_attribute(self, attribute_id: str) -> None:
        if attribute_id in self.attribute_ids:
            self.attribute_ids = [a for a in self.attribute_ids if a != attribute_id]
        else:
            self.attribute_ids = [*self.attribute_ids, attribute_id]
        self.page = 1

    def set_attributes(self, attribute_ids: list[str]) -> None:
        self.attribute_ids = list(dict.fromkeys(attribute_ids))
        self.page = 1

    def set_sort(self, sort_by: str | None, sort_order: str | None) -> None:
        if sort_by is not None and sort_by not in SORT_FIELDS:
            raise ValueError(f"Unknown sort field {sort_by!r}")
        if sort_order is not None and sort_order not in SORT_ORDERS:
            raise ValueError(f"Unknown sort order {sort_order!r}")
        self.sort_by = sort_by
        self.sort_order = sort_order
        self.page = 1

    def set_page(self, page: int) -> None:
        if page < 1:
            raise ValueError("page must be 1 or greater")
        self.page = page

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page size must be 1 or greater")
        self.page_size = page_size
        self.page = 1

    def clear(self) -> None:
        """Drop every filter and the sort; the page size is kept."""
        page_size = self.page_size
        for name, value in vars(CatalogFilters(page_size=page_size)).items():
            setattr(self, name, value)

    def copy(self) -> CatalogFilters:
        return replace(self, attribute_ids=list(self.attribute_ids))

    def to_query_params(self) -> dict[str, str]:
        """Query parameters understood by ``GET /products``.

        Unset filters are omitted; page and pageSize are always present.
        """
        params: dict[str, str] = {}
        if self.search_term:
            params["q"] = self.search_term
        if self.category_id:
            params["category_id"] = self.category_id
        if self.brand_name:
            params["brand_name"] = self.brand_name
        for score_type in SCORE_TYPES:
            value = getattr(self, f"min_{score_type}_score")
            if value is not None:
                params[f"min_{score_type}_score"] = _format_score(value)
        if self.attribute_ids:
            params["attribute_ids"] = ",".join(self.attribute_ids)
        if self.sort_by:
            params["sort_by"] = self.sort_by
        if self.sort_order:
            params["sort_order"] = self.sort_order
        params["page"] = str(self.page)
        params["pageSize"] = str(self.page_size)
        return params

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> CatalogFilters:
        """Rebuild filters from URL parameters, ignoring values that do not parse."""
        attribute_ids = [a.strip() for a in (params.get("attribute_ids") or "").split(",")]
        sort_by = params.get("sort_by") or None
        sort_order = params.get("sort_order") or None
        return cls(
            search_term=params.get("q") or None,
            category_id=params.get("category_id") or None,
            brand_name=params.get("brand_name") or None,
            min_sustainability_score=_parse_float(params.get("min_sustainability_score")),
            min_ethical_score=_parse_float(params.get("min_ethical_score")),
            min_durability_score=_parse_float(params.get("min_durability_score")),
            attribute_ids=list(dict.fromkeys(a for a in attribute_ids if a)),
            sort_by=sort_by if sort_by in SORT_FIELDS else None,
            sort_order=sort_order if sort_order in SORT_ORDERS else None,
            page=_parse_int(params.get("page"), 1),
            page_size=_parse_int(params.get("pageSize"), DEFAULT_PAGE_SIZE),
        )
