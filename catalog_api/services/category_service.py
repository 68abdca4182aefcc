"""Category tree assembly."""

import logging

from sqlalchemy import and_, distinct, func, select
from sqlalchemy.orm import Session

from catalog_api.models.attribute import CategoryAttribute, LINK_DIRECT
from catalog_api.models.category import Category
from catalog_api.models.product import Product

logger = logging.getLogger(__name__)


def _name_key(node: dict) -> tuple[str, str]:
    return node["name"].casefold(), node["name"]


def sort_tree(nodes: list[dict]) -> None:
    """Sort ``nodes`` and every nested children list by name, in place."""
    nodes.sort(key=_name_key)
    for node in nodes:
        sort_tree(node["children"])


def build_tree(rows: list[dict]) -> list[dict]:
    """Assemble flat category rows into a sorted forest.

    Each row needs ``id``, ``name`` and ``parent_id``; every other key is
    carried into the node unchanged. A row whose parent is missing is an
    orphan: it is left out of the tree entirely rather than promoted to a root.

    Args:
        rows: Flat category rows in any order

    Returns:
        Root nodes, each with a recursively populated ``children`` list
    """
    nodes: dict[int, dict] = {}
    for row in rows:
        nodes[row["id"]] = {**row, "children": []}

    roots = []
    orphans = []
    for node in nodes.values():
        parent_id = node["parent_id"]
        if parent_id is None:
            roots.append(node)
        elif parent_id in nodes:
            nodes[parent_id]["children"].append(node)
        else:
            orphans.append(node["id"])

    if orphans:
        logger.warning(f"Skipping {len(orphans)} orphaned categories: {orphans}")

    sort_tree(roots)
    return roots


class CategoryService:
    """Service for reading the category hierarchy."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def get_tree(
        self,
        include_attribute_count: bool = False,
        include_product_count: bool = False,
    ) -> tuple[list[dict], int]:
        """Load every category and return the forest plus the category count.

        Args:
            include_attribute_count: Count distinct directly linked attributes per node
            include_product_count: Count products whose category is the node

        Returns:
            Tuple of (root nodes, total number of categories)
        """
        columns = [
            Category.id,
            Category.name,
            Category.parent_id,
            Category.level,
            Category.path,
        ]
        if include_attribute_count:
            columns.append(
                func.count(distinct(CategoryAttribute.attribute_id)).label("attribute_count")
            )
        if include_product_count:
            columns.append(func.count(distinct(Product.id)).label("product_count"))

        stmt = select(*columns)
        if include_attribute_count:
            stmt = stmt.outerjoin(
                CategoryAttribute,
                and_(
                    CategoryAttribute.category_id == Category.id,
                    CategoryAttribute.link_type == LINK_DIRECT,
                ),
            )
        if include_product_count:
            stmt = stmt.outerjoin(Product, Product.category_id == Category.id)

        stmt = stmt.group_by(*columns[:5]).order_by(Category.level, Category.name)

        rows = [dict(row._mapping) for row in self.db.execute(stmt)]
        return build_tree(rows), len(rows)
