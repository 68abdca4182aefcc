"""Pydantic schemas for Product."""

from datetime import datetime

from catalog_api.schemas.common import CamelModel, Pagination


class ProductAttributeValueResponse(CamelModel):
    """Attribute value carried by a product."""

    attribute_id: int
    attribute_name: str
    value: str


class ProductResponse(CamelModel):
    """Schema for product response."""

    id: int
    name: str
    description: str | None = None
    category_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Denormalized category fields
    category_name: str | None = None
    category_path: str | None = None

    attribute_values: list[ProductAttributeValueResponse] = []


class ProductListResponse(CamelModel):
    """Schema for paginated product list response."""

    data: list[ProductResponse]
    pagination: Pagination
