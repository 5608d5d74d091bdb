# src/loop_forum/models/post.py
"""SQLAlchemy model for top-level discussion posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from loop_forum.db.session import Base
from loop_forum.db.time import utcnow

if TYPE_CHECKING:
    from .category import Category
    from .reply import Reply
    from .user import User


class Post(Base):
    """Discussion started by a user under one category."""

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_category_id", "category_id"),
        Index("ix_posts_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
    )

    # Cache of COUNT(post_upvotes) for this post; recomputed on every toggle.
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="posts")
    category: Mapped[Category] = relationship("Category", back_populates="posts")
    replies: Mapped[list[Reply]] = relationship(
        "Reply",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Post {self.id} {self.title[:30]!r}>"
