"""Pydantic schemas for Attribute."""

from datetime import datetime
from typing import Literal

from catalog_api.schemas.common import CamelModel, Pagination

AttributeType = Literal["text", "number", "boolean", "select", "multi-select"]
LinkType = Literal["direct", "inherited", "global"]


class AttributeResponse(CamelModel):
    """Attribute resolved against a category selection."""

    id: int
    name: str
    type: AttributeType
    description: str | None = None
    options: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    link_type: LinkType | None = None
    category_path: str | None = None
    product_count: int = 0


class AttributeListResponse(CamelModel):
    """Schema for paginated attribute list response."""

    data: list[AttributeResponse]
    pagination: Pagination
