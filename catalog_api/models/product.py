"""Product database models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from catalog_api.models.database import Base, utc_now


class Product(Base):
    """Product owned by exactly one category."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    category = relationship("Category", back_populates="products")
    attribute_values = relationship("ProductAttributeValue", back_populates="product")

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', category_id={self.category_id})>"


class ProductAttributeValue(Base):
    """String-encoded value of one attribute for one product."""

    __tablename__ = "product_attribute_values"
    __table_args__ = (
        UniqueConstraint("product_id", "attribute_id", name="uq_product_attribute"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    attribute_id = Column(Integer, ForeignKey("attributes.id"), nullable=False, index=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    product = relationship("Product", back_populates="attribute_values")
    attribute = relationship("Attribute", back_populates="values")

    def __repr__(self):
        return (
            f"<ProductAttributeValue(product_id={self.product_id}, "
            f"attribute_id={self.attribute_id}, value='{self.value}')>"
        )
