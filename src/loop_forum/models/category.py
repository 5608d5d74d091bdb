# src/loop_forum/models/category.py
"""SQLAlchemy model for the fixed category taxonomy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from loop_forum.db.session import Base

if TYPE_CHECKING:
    from .post import Post


class Category(Base):
    """Taxonomy entry referenced by posts.

    Rows are seeded at startup and never mutated afterwards.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # Display glyph shown next to the name.
    icon: Mapped[str | None] = mapped_column(String(16), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    posts: Mapped[list[Post]] = relationship("Post", back_populates="category")

    def __repr__(self) -> str:
        return f"<Category {self.slug}>"
