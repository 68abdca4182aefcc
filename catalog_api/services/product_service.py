"""Product listing service."""

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, aliased

from catalog_api.models.attribute import Attribute
from catalog_api.models.category import Category
from catalog_api.models.product import Product, ProductAttributeValue
from catalog_api.services.query_helpers import (
    apply_sorting,
    execute_with_pagination,
    is_strict_descendant,
    keyword_filter,
)

SORT_FIELDS = ("name", "category", "created_at")


class ProductService:
    """Service for category-scoped product queries."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def list_products(
        self,
        category_ids: list[int] | None = None,
        keyword: str | None = None,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> tuple[list[dict], int]:
        """List products in a category subtree with search and pagination.

        Args:
            category_ids: Categories whose own and descendant products match
            keyword: Search term for the product name
            page: 1-based page number
            limit: Page size
            sort_by: Sort field (name, category, created_at)
            sort_order: Sort direction (asc, desc)

        Returns:
            Tuple of (product dicts for the page, total matching products)
        """
        stmt = select(
            Product,
            Category.name.label("category_name"),
            Category.path.label("category_path"),
        ).join(Category, Product.category_id == Category.id)

        if category_ids:
            stmt = stmt.where(self._in_subtree(category_ids))

        if keyword:
            stmt = stmt.where(keyword_filter(keyword, Product.name))

        sort_columns = {
            "name": Product.name,
            "category": Category.name,
            "created_at": Product.created_at,
        }
        column = sort_columns.get(sort_by, Product.name)
        stmt = apply_sorting(stmt, column, sort_order, Product.id)

        rows, total = execute_with_pagination(self.db, stmt, page, limit)
        values = self.get_attribute_values([product.id for product, _, _ in rows])

        items = [
            self.enrich_with_category(
                product, category_name, category_path, values.get(product.id, [])
            )
            for product, category_name, category_path in rows
        ]
        return items, total

    def _in_subtree(self, category_ids: list[int]):
        """Condition matching products under any of the selected categories."""
        selected = aliased(Category, name="selected")
        return (
            select(selected.id)
            .where(
                selected.id.in_(category_ids),
                or_(
                    selected.id == Category.id,
                    is_strict_descendant(Category.path, selected.path),
                ),
            )
            .exists()
        )

    def get_attribute_values(self, product_ids: list[int]) -> dict[int, list[dict]]:
        """Load attribute values for the given products, keyed by product id."""
        if not product_ids:
            return {}

        stmt = (
            select(
                ProductAttributeValue.product_id,
                ProductAttributeValue.attribute_id,
                Attribute.name,
                ProductAttributeValue.value,
            )
            .join(Attribute, Attribute.id == ProductAttributeValue.attribute_id)
            .where(ProductAttributeValue.product_id.in_(product_ids))
            .order_by(ProductAttributeValue.product_id, Attribute.name)
        )

        values: dict[int, list[dict]] = {}
        for product_id, attribute_id, attribute_name, value in self.db.execute(stmt):
            values.setdefault(product_id, []).append(
                {"attribute_id": attribute_id, "attribute_name": attribute_name, "value": value}
            )
        return values

    def enrich_with_category(
        self,
        product: Product,
        category_name: str | None,
        category_path: str | None,
        attribute_values: list[dict],
    ) -> dict:
        """Add category_name, category_path and attribute values to product data."""
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "category_id": product.category_id,
            "created_at": product.created_at,
            "updated_at": product.updated_at,
            "category_name": category_name,
            "category_path": category_path,
            "attribute_values": attribute_values,
        }
