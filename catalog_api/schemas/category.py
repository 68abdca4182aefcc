"""Pydantic schemas for Category."""

from catalog_api.schemas.common import CamelModel


class CategoryTreeNode(CamelModel):
    """Category with its nested children.

    The count fields are only present when requested.
    """

    id: int
    name: str
    parent_id: int | None = None
    level: int
    path: str
    children: list["CategoryTreeNode"] = []
    attribute_count: int | None = None
    product_count: int | None = None


CategoryTreeNode.model_rebuild()


class CategoryTreeResponse(CamelModel):
    """Response for the category tree endpoint."""

    data: list[CategoryTreeNode]
    total: int
