"""Query building helpers shared by the listing services."""

import math

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from catalog_api.models.category import PATH_SEPARATOR

SORT_ORDERS = ("asc", "desc")
LIKE_ESCAPE = "\\"


def keyword_pattern(keyword: str) -> str:
    """Build a LIKE pattern matching ``keyword`` as a literal substring."""
    escaped = (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def keyword_filter(keyword: str, *columns) -> ColumnElement:
    """Case-insensitive substring match against any of ``columns``."""
    pattern = keyword_pattern(keyword)
    return or_(*(column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns))


def is_strict_descendant(path, ancestor_path) -> ColumnElement:
    """True when ``path`` lies strictly below ``ancestor_path``.

    The trailing separator keeps ``/1`` from matching ``/10``.
    """
    return path.like(ancestor_path.concat(f"{PATH_SEPARATOR}%"))


def apply_sorting(
    stmt: Select,
    column: ColumnElement,
    sort_order: str,
    tie_breaker: ColumnElement,
) -> Select:
    """Order by ``column`` then ``tie_breaker`` ascending for stable pages."""
    if sort_order == "desc":
        return stmt.order_by(column.desc(), tie_breaker.asc())
    return stmt.order_by(column.asc(), tie_breaker.asc())


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` rows."""
    return math.ceil(total / limit) if limit else 0


def execute_with_pagination(
    db: Session, stmt: Select, page: int = 1, limit: int = 10
) -> tuple[list, int]:
    """Execute a statement with pagination and return rows with the total count.

    Args:
        db: Database session
        stmt: Filtered and sorted select statement
        page: 1-based page number
        limit: Page size

    Returns:
        Tuple of (rows for the page, total matching rows)
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = db.execute(count_stmt).scalar_one()

    offset = (page - 1) * limit
    rows = db.execute(stmt.limit(limit).offset(offset)).all()
    return rows, total
