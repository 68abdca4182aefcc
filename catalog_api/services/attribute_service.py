"""Effective attribute resolution for category selections."""

import logging

from sqlalchemy import and_, case, distinct, func, literal, or_, select, union_all
from sqlalchemy.orm import Session, aliased

from catalog_api.models.attribute import (
    Attribute,
    AttributeOptionsError,
    CategoryAttribute,
    LINK_DIRECT,
    LINK_GLOBAL,
    LINK_INHERITED,
)
from catalog_api.models.category import Category
from catalog_api.models.product import Product, ProductAttributeValue
from catalog_api.services.query_helpers import (
    apply_sorting,
    execute_with_pagination,
    is_strict_descendant,
    keyword_filter,
)

logger = logging.getLogger(__name__)

SORT_FIELDS = ("name", "type", "created_at", "product_count")

# Lower wins when an attribute matches through several links
LINK_PRECEDENCE = {LINK_GLOBAL: 0, LINK_DIRECT: 1, LINK_INHERITED: 2}


class AttributeService:
    """Service for listing attributes resolved against selected categories.

    A link row matches a selection when it is global, when it sits on a
    selected category, or when it sits on an ancestor of one (in which case
    it resolves as inherited). Inheritance flows downwards only: links on
    descendants of a selected category never match it.
    """

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def list_attributes(
        self,
        category_ids: list[int] | None = None,
        link_types: list[str] | None = None,
        not_applicable: bool = False,
        keyword: str | None = None,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> tuple[list[dict], int]:
        """List attributes for a category selection with pagination.

        Args:
            category_ids: Selected categories; empty means no restriction
            link_types: Keep only attributes whose resolved link type is listed
            not_applicable: Return the attributes that do not apply to the selection
            keyword: Search term for name, description and type
            page: 1-based page number
            limit: Page size
            sort_by: Sort field (name, type, created_at, product_count)
            sort_order: Sort direction (asc, desc)

        Returns:
            Tuple of (attribute dicts for the page, total matching attributes)
        """
        best = self._best_links(category_ids)
        product_counts = self._product_counts()
        product_count = func.coalesce(product_counts.c.product_count, 0)

        stmt = (
            select(
                Attribute,
                best.c.link_type,
                best.c.category_path,
                product_count.label("product_count"),
            )
            .outerjoin(best, best.c.attribute_id == Attribute.id)
            .outerjoin(product_counts, product_counts.c.attribute_id == Attribute.id)
        )

        if category_ids and not_applicable:
            stmt = stmt.where(best.c.attribute_id.is_(None))
        else:
            if category_ids:
                stmt = stmt.where(best.c.attribute_id.is_not(None))
            if link_types:
                stmt = stmt.where(best.c.link_type.in_(link_types))

        if keyword:
            stmt = stmt.where(
                keyword_filter(keyword, Attribute.name, Attribute.description, Attribute.type)
            )

        sort_columns = {
            "name": Attribute.name,
            "type": Attribute.type,
            "created_at": Attribute.created_at,
            "product_count": product_count,
        }
        column = sort_columns.get(sort_by, Attribute.name)
        stmt = apply_sorting(stmt, column, sort_order, Attribute.id)

        rows, total = execute_with_pagination(self.db, stmt, page, limit)
        return [self._to_dict(*row) for row in rows], total

    def _best_links(self, category_ids: list[int] | None):
        """Subquery with the single best matching link per attribute."""
        if category_ids:
            candidates = self._selection_links(category_ids)
        else:
            candidates = self._stored_links()

        link_rank = (
            func.row_number()
            .over(
                partition_by=candidates.c.attribute_id,
                order_by=(
                    candidates.c.precedence,
                    candidates.c.category_path,
                    candidates.c.category_id,
                ),
            )
            .label("link_rank")
        )
        ranked = select(
            candidates.c.attribute_id,
            candidates.c.link_type,
            candidates.c.category_path,
            link_rank,
        ).subquery("ranked_links")

        return (
            select(ranked.c.attribute_id, ranked.c.link_type, ranked.c.category_path)
            .where(ranked.c.link_rank == 1)
            .subquery("best_links")
        )

    def _stored_links(self):
        """Every link row with its stored type, for queries without a selection."""
        precedence = case(
            *((CategoryAttribute.link_type == link, rank) for link, rank in LINK_PRECEDENCE.items()),
            else_=len(LINK_PRECEDENCE),
        )
        return (
            select(
                CategoryAttribute.attribute_id.label("attribute_id"),
                CategoryAttribute.link_type.label("link_type"),
                precedence.label("precedence"),
                Category.path.label("category_path"),
                CategoryAttribute.category_id.label("category_id"),
            )
            .outerjoin(Category, Category.id == CategoryAttribute.category_id)
            .subquery("candidate_links")
        )

    def _selection_links(self, category_ids: list[int]):
        """Link rows that apply to the selected categories, with resolved types."""
        linked = aliased(Category, name="linked")
        selected = aliased(Category, name="selected")

        global_links = (
            select(
                CategoryAttribute.attribute_id.label("attribute_id"),
                literal(LINK_GLOBAL).label("link_type"),
                literal(LINK_PRECEDENCE[LINK_GLOBAL]).label("precedence"),
                linked.path.label("category_path"),
                CategoryAttribute.category_id.label("category_id"),
            )
            .outerjoin(linked, linked.id == CategoryAttribute.category_id)
            .where(CategoryAttribute.link_type == LINK_GLOBAL)
        )

        on_selected = linked.id == selected.id
        is_direct = and_(on_selected, CategoryAttribute.link_type == LINK_DIRECT)
        scoped_links = (
            select(
                CategoryAttribute.attribute_id.label("attribute_id"),
                case((is_direct, literal(LINK_DIRECT)), else_=literal(LINK_INHERITED)).label(
                    "link_type"
                ),
                case(
                    (is_direct, LINK_PRECEDENCE[LINK_DIRECT]),
                    else_=LINK_PRECEDENCE[LINK_INHERITED],
                ).label("precedence"),
                linked.path.label("category_path"),
                CategoryAttribute.category_id.label("category_id"),
            )
            .join(linked, linked.id == CategoryAttribute.category_id)
            .join(
                selected,
                or_(on_selected, is_strict_descendant(selected.path, linked.path)),
            )
            .where(
                CategoryAttribute.link_type.in_((LINK_DIRECT, LINK_INHERITED)),
                selected.id.in_(category_ids),
            )
        )

        return union_all(global_links, scoped_links).subquery("candidate_links")

    def _product_counts(self):
        """Distinct products holding a value, per attribute."""
        return (
            select(
                ProductAttributeValue.attribute_id.label("attribute_id"),
                func.count(distinct(Product.id)).label("product_count"),
            )
            .join(Product, Product.id == ProductAttributeValue.product_id)
            .group_by(ProductAttributeValue.attribute_id)
            .subquery("product_counts")
        )

    def _to_dict(
        self,
        attribute: Attribute,
        link_type: str | None,
        category_path: str | None,
        product_count: int,
    ) -> dict:
        """Flatten a result row into response data."""
        try:
            options = attribute.options
        except AttributeOptionsError:
            logger.error(
                f"Attribute {attribute.id} ({attribute.name}) has malformed options: "
                f"{attribute._options!r}"
            )
            raise

        return {
            "id": attribute.id,
            "name": attribute.name,
            "type": attribute.type,
            "description": attribute.description,
            "options": options,
            "created_at": attribute.created_at,
            "updated_at": attribute.updated_at,
            "link_type": link_type,
            "category_path": category_path,
            "product_count": product_count or 0,
        }
