"""API routers."""

from catalog_api.api import attributes, categories, products

__all__ = ["attributes", "categories", "products"]
