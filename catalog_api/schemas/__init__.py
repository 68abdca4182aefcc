"""Pydantic schemas for request/response validation."""

from catalog_api.schemas.common import CamelModel, Pagination
from catalog_api.schemas.category import CategoryTreeNode, CategoryTreeResponse
from catalog_api.schemas.attribute import AttributeResponse, AttributeListResponse
from catalog_api.schemas.product import (
    ProductAttributeValueResponse,
    ProductResponse,
    ProductListResponse,
)

__all__ = [
    "CamelModel",
    "Pagination",
    "CategoryTreeNode",
    "CategoryTreeResponse",
    "AttributeResponse",
    "AttributeListResponse",
    "ProductAttributeValueResponse",
    "ProductResponse",
    "ProductListResponse",
]
