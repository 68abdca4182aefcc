"""Bulk import and export of catalog data.

Seed documents are plain dicts with one list per table::

    {
        "categories": [{"id", "name", "parent_id", "path", "level"}, ...],
        "attributes": [{"id", "name", "type", "description", "options"}, ...],
        "category_attributes": [{"category_id", "attribute_id", "link_type"}, ...],
        "products": [{"id", "name", "category_id", "description"}, ...],
        "product_attribute_values": [{"product_id", "attribute_id", "value"}, ...],
    }

``path`` and ``level`` may be omitted for categories; they are then derived
from the parent, which must appear earlier in the list.
"""

import logging

from sqlalchemy.orm import Session

from catalog_api.models.attribute import Attribute, CategoryAttribute, ATTRIBUTE_TYPES, LINK_TYPES
from catalog_api.models.category import Category
from catalog_api.models.product import Product, ProductAttributeValue

logger = logging.getLogger(__name__)

TABLES = (
    "categories",
    "attributes",
    "category_attributes",
    "products",
    "product_attribute_values",
)


def export_catalog(db: Session) -> dict:
    """Export all catalog tables to a seed document."""
    categories = []
    for c in db.query(Category).order_by(Category.level, Category.id):
        categories.append({
            "id": c.id,
            "name": c.name,
            "parent_id": c.parent_id,
            "path": c.path,
            "level": c.level,
        })

    attributes = []
    for a in db.query(Attribute).order_by(Attribute.id):
        attributes.append({
            "id": a.id,
            "name": a.name,
            "type": a.type,
            "description": a.description,
            "options": a.options,
        })

    links = []
    for ca in db.query(CategoryAttribute).order_by(CategoryAttribute.id):
        links.append({
            "category_id": ca.category_id,
            "attribute_id": ca.attribute_id,
            "link_type": ca.link_type,
        })

    products = []
    for p in db.query(Product).order_by(Product.id):
        products.append({
            "id": p.id,
            "name": p.name,
            "category_id": p.category_id,
            "description": p.description,
        })

    values = []
    for v in db.query(ProductAttributeValue).order_by(ProductAttributeValue.id):
        values.append({
            "product_id": v.product_id,
            "attribute_id": v.attribute_id,
            "value": v.value,
        })

    return {
        "categories": categories,
        "attributes": attributes,
        "category_attributes": links,
        "products": products,
        "product_attribute_values": values,
    }


def clear_catalog(db: Session) -> None:
    """Delete all catalog rows, children before parents."""
    db.query(ProductAttributeValue).delete()
    db.query(Product).delete()
    db.query(CategoryAttribute).delete()
    db.query(Attribute).delete()
    # Deepest categories first so parent references never dangle
    for category in db.query(Category).order_by(Category.level.desc()):
        db.delete(category)
        db.flush()
    db.commit()


def load_catalog(db: Session, seed_data: dict, clear_existing: bool = False) -> dict:
    """Load a seed document into the database.

    Rows whose key already exists are skipped.

    Args:
        db: Database session
        seed_data: Seed document (see module docstring)
        clear_existing: If True, delete all existing data first

    Returns:
        Dict with counts of loaded rows per table plus ``skipped``

    Raises:
        ValueError: If a row references an unknown type, link type or parent
    """
    if clear_existing:
        logger.info("Clearing existing catalog data")
        clear_catalog(db)

    stats = {table: 0 for table in TABLES}
    stats["skipped"] = 0

    # Categories
    paths = {c.id: (c.path, c.level) for c in db.query(Category).all()}
    for c_data in seed_data.get("categories", []):
        if c_data["id"] in paths:
            stats["skipped"] += 1
            continue

        parent_id = c_data.get("parent_id")
        path = c_data.get("path")
        level = c_data.get("level")
        if path is None or level is None:
            if parent_id is not None and parent_id not in paths:
                raise ValueError(
                    f"Category {c_data['id']} references unknown parent {parent_id}"
                )
            parent_path, parent_level = paths.get(parent_id, (None, -1))
            path = path or Category.build_path(c_data["id"], parent_path)
            level = parent_level + 1 if level is None else level

        db.add(Category(
            id=c_data["id"],
            name=c_data["name"],
            parent_id=parent_id,
            path=path,
            level=level,
        ))
        paths[c_data["id"]] = (path, level)
        stats["categories"] += 1
    db.commit()

    # Attributes
    existing_attribute_ids = {a.id for a in db.query(Attribute).all()}
    for a_data in seed_data.get("attributes", []):
        if a_data["id"] in existing_attribute_ids:
            stats["skipped"] += 1
            continue
        if a_data["type"] not in ATTRIBUTE_TYPES:
            raise ValueError(f"Attribute {a_data['name']!r} has unknown type {a_data['type']!r}")

        attribute = Attribute(
            id=a_data["id"],
            name=a_data["name"],
            type=a_data["type"],
            description=a_data.get("description"),
        )
        attribute.options = a_data.get("options")
        db.add(attribute)
        stats["attributes"] += 1
    db.commit()

    # Category-attribute links
    existing_links = {
        (ca.category_id, ca.attribute_id) for ca in db.query(CategoryAttribute).all()
    }
    for l_data in seed_data.get("category_attributes", []):
        key = (l_data["category_id"], l_data["attribute_id"])
        if key in existing_links:
            stats["skipped"] += 1
            continue
        if l_data["link_type"] not in LINK_TYPES:
            raise ValueError(f"Unknown link type {l_data['link_type']!r} for link {key}")

        db.add(CategoryAttribute(
            category_id=l_data["category_id"],
            attribute_id=l_data["attribute_id"],
            link_type=l_data["link_type"],
        ))
        existing_links.add(key)
        stats["category_attributes"] += 1
    db.commit()

    # Products
    existing_product_ids = {p.id for p in db.query(Product).all()}
    for p_data in seed_data.get("products", []):
        if p_data["id"] in existing_product_ids:
            stats["skipped"] += 1
            continue

        db.add(Product(
            id=p_data["id"],
            name=p_data["name"],
            category_id=p_data["category_id"],
            description=p_data.get("description"),
        ))
        stats["products"] += 1
    db.commit()

    # Product attribute values
    existing_values = {
        (v.product_id, v.attribute_id) for v in db.query(ProductAttributeValue).all()
    }
    for v_data in seed_data.get("product_attribute_values", []):
        key = (v_data["product_id"], v_data["attribute_id"])
        if key in existing_values:
            stats["skipped"] += 1
            continue

        db.add(ProductAttributeValue(
            product_id=v_data["product_id"],
            attribute_id=v_data["attribute_id"],
            value=str(v_data["value"]),
        ))
        existing_values.add(key)
        stats["product_attribute_values"] += 1
    db.commit()

    logger.info(f"Loaded catalog data: {stats}")
    return stats
