"""Category database model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from catalog_api.models.database import Base, utc_now

PATH_SEPARATOR = "/"


class Category(Base):
    """Category node in the catalog tree.

    ``path`` is the materialized ancestor chain ending in the node's own id,
    e.g. ``/1/3/6``; ``level`` is the depth with roots at 0.
    """

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    path = Column(String, nullable=False, index=True)
    level = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship("Category", back_populates="parent")
    products = relationship("Product", back_populates="category")
    attribute_links = relationship("CategoryAttribute", back_populates="category")

    @staticmethod
    def build_path(category_id: int, parent_path: str | None = None) -> str:
        """Materialized path for a node under ``parent_path`` (root if None)."""
        return f"{parent_path or ''}{PATH_SEPARATOR}{category_id}"

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}', path='{self.path}')>"
