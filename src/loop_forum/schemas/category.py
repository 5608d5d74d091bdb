# src/loop_forum/schemas/category.py
"""Category Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    id: int
    name: str
    slug: str
    icon: str | None
    description: str | None

    model_config = ConfigDict(from_attributes=True)


class CategoryWithCount(CategoryResponse):
    """Category plus the number of posts filed under it."""

    post_count: int = 0
