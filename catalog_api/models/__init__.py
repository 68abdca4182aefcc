"""Database models."""

from catalog_api.models.database import Base, Database, get_db
from catalog_api.models.category import Category
from catalog_api.models.attribute import (
    Attribute,
    AttributeOptionsError,
    CategoryAttribute,
    LINK_TYPES,
)
from catalog_api.models.product import Product, ProductAttributeValue

__all__ = [
    "Base",
    "Database",
    "get_db",
    "Category",
    "Attribute",
    "AttributeOptionsError",
    "CategoryAttribute",
    "LINK_TYPES",
    "Product",
    "ProductAttributeValue",
]
