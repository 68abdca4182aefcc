"""Seed data and bulk loading."""

from catalog_api.data.loader import export_catalog, load_catalog, clear_catalog
from catalog_api.data.sample_catalog import SAMPLE_CATALOG, ensure_sample_catalog

__all__ = [
    "SAMPLE_CATALOG",
    "clear_catalog",
    "ensure_sample_catalog",
    "export_catalog",
    "load_catalog",
]
