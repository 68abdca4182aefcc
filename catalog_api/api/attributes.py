"""Attribute API endpoints."""

from fastapi import APIRouter, Query

from catalog_api.dependencies import AppSettings, DbSession
from catalog_api.models.attribute import LINK_TYPES
from catalog_api.schemas.attribute import AttributeListResponse
from catalog_api.schemas.common import Pagination
from catalog_api.services.attribute_service import AttributeService, SORT_FIELDS
from catalog_api.services.query_helpers import SORT_ORDERS, total_pages
from catalog_api.utils.params import (
    parse_bool,
    parse_choice,
    parse_choice_list,
    parse_id_list,
    parse_positive_int,
)

router = APIRouter()


@router.get("", response_model=AttributeListResponse, response_model_exclude_none=True)
def list_attributes(
    db: DbSession,
    settings: AppSettings,
    category_nodes: list[str] | None = Query(
        None, alias="categoryNodes", description="Selected category IDs"
    ),
    category_nodes_bracketed: list[str] | None = Query(
        None, alias="categoryNodes[]", include_in_schema=False
    ),
    link_type: list[str] | None = Query(
        None, alias="linkType", description="Link types to keep (direct, inherited, global)"
    ),
    link_type_bracketed: list[str] | None = Query(
        None, alias="linkType[]", include_in_schema=False
    ),
    not_applicable: str | None = Query(
        None, alias="notApplicable", description="Return attributes NOT applicable to the selection"
    ),
    keyword: str | None = Query(None, description="Search in name, description and type"),
    page: str | None = Query(None, description="Page number (default 1)"),
    limit: str | None = Query(None, description="Page size"),
    sort_by: str | None = Query(
        None, alias="sortBy", description="Sort field (name, type, created_at, product_count)"
    ),
    sort_order: str | None = Query(None, alias="sortOrder", description="Sort order (asc/desc)"),
):
    """List attributes resolved against the selected categories.

    Global attributes apply to every selection. Links on a selected category
    resolve as direct, links on its ancestors as inherited.
    """
    page_number = parse_positive_int(page, 1)
    page_size = parse_positive_int(limit, settings.default_page_size, settings.max_page_size)

    service = AttributeService(db)
    items, total = service.list_attributes(
        category_ids=parse_id_list((category_nodes or []) + (category_nodes_bracketed or [])),
        link_types=parse_choice_list((link_type or []) + (link_type_bracketed or []), LINK_TYPES),
        not_applicable=parse_bool(not_applicable),
        keyword=keyword.strip() if keyword else None,
        page=page_number,
        limit=page_size,
        sort_by=parse_choice(sort_by, SORT_FIELDS, "name"),
        sort_order=parse_choice(sort_order, SORT_ORDERS, "asc"),
    )

    return AttributeListResponse(
        data=items,
        pagination=Pagination(
            page=page_number,
            limit=page_size,
            total=total,
            total_pages=total_pages(total, page_size),
        ),
    )
