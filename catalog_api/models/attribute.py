"""Attribute and category-attribute link database models."""

import json

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from catalog_api.models.database import Base, utc_now


ATTRIBUTE_TYPES = ("text", "number", "boolean", "select", "multi-select")

LINK_DIRECT = "direct"
LINK_INHERITED = "inherited"
LINK_GLOBAL = "global"
LINK_TYPES = (LINK_DIRECT, LINK_INHERITED, LINK_GLOBAL)


class AttributeOptionsError(ValueError):
    """Stored attribute options are not a JSON list of strings."""

    def __init__(self, attribute_id: int | None, reason: str):
        self.attribute_id = attribute_id
        super().__init__(f"Malformed options for attribute {attribute_id}: {reason}")


def decode_options(raw: str | None, attribute_id: int | None = None) -> list[str] | None:
    """Decode the stored options column into an ordered list of strings."""
    if raw is None or raw == "":
        return None

    try:
        options = json.loads(raw)
    except json.JSONDecodeError as e:
        raise AttributeOptionsError(attribute_id, str(e)) from e

    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise AttributeOptionsError(attribute_id, "expected a list of strings")

    return options


class Attribute(Base):
    """Typed attribute that can be attached to categories."""

    __tablename__ = "attributes"
    __table_args__ = (
        CheckConstraint(
            "type IN ('text', 'number', 'boolean', 'select', 'multi-select')",
            name="ck_attributes_type",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)
    type = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    # Ordered option list stored as JSON text
    _options = Column("options", Text, nullable=True)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    links = relationship("CategoryAttribute", back_populates="attribute")
    values = relationship("ProductAttributeValue", back_populates="attribute")

    @property
    def options(self) -> list[str] | None:
        """Get options as a list."""
        return decode_options(self._options, self.id)

    @options.setter
    def options(self, value: list[str] | None):
        """Set options from a list."""
        if value is not None:
            self._options = json.dumps(list(value))
        else:
            self._options = None

    def __repr__(self):
        return f"<Attribute(id={self.id}, name='{self.name}', type='{self.type}')>"


class CategoryAttribute(Base):
    """Link between a category and an attribute."""

    __tablename__ = "category_attributes"
    __table_args__ = (
        UniqueConstraint("category_id", "attribute_id", name="uq_category_attribute"),
        CheckConstraint(
            "link_type IN ('direct', 'inherited', 'global')",
            name="ck_category_attributes_link_type",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    attribute_id = Column(Integer, ForeignKey("attributes.id"), nullable=False, index=True)
    link_type = Column(String, nullable=False, default=LINK_DIRECT)
    created_at = Column(DateTime, default=utc_now)

    # Relationships
    category = relationship("Category", back_populates="attribute_links")
    attribute = relationship("Attribute", back_populates="links")

    def __repr__(self):
        return (
            f"<CategoryAttribute(category_id={self.category_id}, "
            f"attribute_id={self.attribute_id}, link_type='{self.link_type}')>"
        )
