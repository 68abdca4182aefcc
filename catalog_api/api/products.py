"""Product API endpoints."""

from fastapi import APIRouter, Query

from catalog_api.dependencies import AppSettings, DbSession
from catalog_api.schemas.common import Pagination
from catalog_api.schemas.product import ProductListResponse
from catalog_api.services.product_service import ProductService, SORT_FIELDS
from catalog_api.services.query_helpers import SORT_ORDERS, total_pages
from catalog_api.utils.params import parse_choice, parse_id_list, parse_positive_int

router = APIRouter()


@router.get("", response_model=ProductListResponse)
def list_products(
    db: DbSession,
    settings: AppSettings,
    category_id: list[str] | None = Query(
        None, alias="categoryId", description="Category ID(s), comma-separated"
    ),
    keyword: str | None = Query(None, description="Search in product name"),
    page: str | None = Query(None, description="Page number (default 1)"),
    limit: str | None = Query(None, description="Page size"),
    sort_by: str | None = Query(None, alias="sortBy", description="Sort field (name, category, created_at)"),
    sort_order: str | None = Query(None, alias="sortOrder", description="Sort order (asc/desc)"),
):
    """List products in the selected categories and all their descendants.

    Without a category filter every product is listed.
    """
    page_number = parse_positive_int(page, 1)
    page_size = parse_positive_int(limit, settings.default_page_size, settings.max_page_size)

    service = ProductService(db)
    items, total = service.list_products(
        category_ids=parse_id_list(category_id),
        keyword=keyword.strip() if keyword else None,
        page=page_number,
        limit=page_size,
        sort_by=parse_choice(sort_by, SORT_FIELDS, "name"),
        sort_order=parse_choice(sort_order, SORT_ORDERS, "asc"),
    )

    return ProductListResponse(
        data=items,
        pagination=Pagination(
            page=page_number,
            limit=page_size,
            total=total,
            total_pages=total_pages(total, page_size),
        ),
    )
