"""Read access to the category taxonomy."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from loop_forum.core.errors import NotFoundError
from loop_forum.models import Category, Post
from loop_forum.schemas.category import CategoryResponse, CategoryWithCount


def list_categories(db: Session) -> list[CategoryWithCount]:
    """Return every category with the number of posts filed under it."""
    post_counts = (
        db.query(Post.category_id.label("category_id"), func.count(Post.id).label("post_count"))
        .group_by(Post.category_id)
        .subquery()
    )
    rows = (
        db.query(Category, func.coalesce(post_counts.c.post_count, 0))
        .outerjoin(post_counts, post_counts.c.category_id == Category.id)
        .order_by(Category.id)
        .all()
    )
    return [
        CategoryWithCount(
            **CategoryResponse.model_validate(category).model_dump(),
            post_count=int(count),
        )
        for category, count in rows
    ]


def get_category(db: Session, slug: str) -> Category:
    """Return the category for ``slug``.

    Raises:
        NotFoundError: If no category has that slug.
    """
    category = db.query(Category).filter(Category.slug == slug).first()
    if category is None:
        raise NotFoundError("Category not found")
    return category
