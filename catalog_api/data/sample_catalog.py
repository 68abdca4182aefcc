"""Sample catalog used to seed an empty database."""

import logging

from sqlalchemy.orm import Session

from catalog_api.data.loader import load_catalog
from catalog_api.models.category import Category

logger = logging.getLogger(__name__)

SAMPLE_CATALOG = {
    "categories": [
        {"id": 1, "name": "Beverages", "parent_id": None, "path": "/1", "level": 0},
        {"id": 2, "name": "Food", "parent_id": None, "path": "/2", "level": 0},
        {"id": 3, "name": "Drinks", "parent_id": 1, "path": "/1/3", "level": 1},
        {"id": 4, "name": "Hot Drinks", "parent_id": 3, "path": "/1/3/4", "level": 2},
        {"id": 5, "name": "Cold Drinks", "parent_id": 3, "path": "/1/3/5", "level": 2},
        {"id": 6, "name": "Flavoured Drinks", "parent_id": 5, "path": "/1/3/5/6", "level": 3},
        {"id": 7, "name": "Snacks", "parent_id": 2, "path": "/2/7", "level": 1},
        {"id": 8, "name": "Chips", "parent_id": 7, "path": "/2/7/8", "level": 2},
    ],
    "attributes": [
        {
            "id": 1,
            "name": "Color",
            "type": "select",
            "options": ["Red", "Blue", "Green", "Yellow", "Black", "White"],
        },
        {
            "id": 2,
            "name": "Flavour",
            "type": "select",
            "options": ["Vanilla", "Chocolate", "Strawberry", "Orange", "Lemon"],
        },
        {
            "id": 3,
            "name": "Size",
            "type": "select",
            "options": ["Small", "Medium", "Large", "Extra Large"],
        },
        {"id": 4, "name": "Weight", "type": "number", "description": "Net weight in grams"},
        {"id": 5, "name": "Brand", "type": "text"},
        {"id": 6, "name": "Organic", "type": "boolean"},
        {
            "id": 7,
            "name": "Temperature",
            "type": "select",
            "options": ["Hot", "Cold", "Room Temperature"],
        },
        {
            "id": 8,
            "name": "Sweetness Level",
            "type": "select",
            "options": ["No Sugar", "Low", "Medium", "High"],
        },
    ],
    "category_attributes": [
        {"category_id": 6, "attribute_id": 1, "link_type": "direct"},  # Flavoured Drinks -> Color
        {"category_id": 6, "attribute_id": 2, "link_type": "direct"},  # Flavoured Drinks -> Flavour
        {"category_id": 4, "attribute_id": 7, "link_type": "direct"},  # Hot Drinks -> Temperature
        {"category_id": 8, "attribute_id": 3, "link_type": "direct"},  # Chips -> Size
        {"category_id": 3, "attribute_id": 5, "link_type": "direct"},  # Drinks -> Brand
        {"category_id": 1, "attribute_id": 6, "link_type": "direct"},  # Beverages -> Organic
        {"category_id": 1, "attribute_id": 4, "link_type": "global"},  # Weight
    ],
    "products": [
        {"id": 1, "name": "Orange Juice", "category_id": 6},
        {"id": 2, "name": "Lemon Soda", "category_id": 6},
        {"id": 3, "name": "Coffee", "category_id": 4},
        {"id": 4, "name": "Tea", "category_id": 4},
        {"id": 5, "name": "Potato Chips", "category_id": 8},
        {"id": 6, "name": "Corn Chips", "category_id": 8},
    ],
    "product_attribute_values": [
        {"product_id": 1, "attribute_id": 1, "value": "Orange"},
        {"product_id": 1, "attribute_id": 2, "value": "Orange"},
        {"product_id": 1, "attribute_id": 4, "value": "500"},
        {"product_id": 2, "attribute_id": 1, "value": "Yellow"},
        {"product_id": 2, "attribute_id": 2, "value": "Lemon"},
        {"product_id": 5, "attribute_id": 3, "value": "Large"},
        {"product_id": 5, "attribute_id": 4, "value": "150"},
    ],
}


def ensure_sample_catalog(db: Session) -> bool:
    """Seed the sample catalog if the database has no categories.

    Args:
        db: Database session

    Returns:
        True if the sample data was loaded
    """
    if db.query(Category.id).first() is not None:
        logger.info("Catalog already seeded")
        return False

    logger.info("Seeding database with sample catalog")
    load_catalog(db, SAMPLE_CATALOG)
    return True
