"""Business logic services."""

from catalog_api.services.attribute_service import AttributeService
from catalog_api.services.category_service import CategoryService
from catalog_api.services.product_service import ProductService

__all__ = [
    "AttributeService",
    "CategoryService",
    "ProductService",
]
