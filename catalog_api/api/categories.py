"""Category API endpoints."""

from fastapi import APIRouter, Query

from catalog_api.dependencies import DbSession
from catalog_api.schemas.category import CategoryTreeResponse
from catalog_api.services.category_service import CategoryService
from catalog_api.utils.params import parse_bool

router = APIRouter()


@router.get("/tree", response_model=CategoryTreeResponse, response_model_exclude_unset=True)
def get_category_tree(
    db: DbSession,
    include_attribute_count: str | None = Query(
        None, alias="includeAttributeCount", description="Include direct attribute counts"
    ),
    include_product_count: str | None = Query(
        None, alias="includeProductCount", description="Include product counts"
    ),
):
    """Get the full category tree, children sorted by name."""
    service = CategoryService(db)
    roots, total = service.get_tree(
        include_attribute_count=parse_bool(include_attribute_count),
        include_product_count=parse_bool(include_product_count),
    )
    return {"data": roots, "total": total}
