# src/loop_forum/models/reply.py
"""SQLAlchemy model for threaded replies."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from loop_forum.db.session import Base
from loop_forum.db.time import utcnow

if TYPE_CHECKING:
    from .post import Post
    from .user import User


class Reply(Base):
    """Reply to a post, optionally nested under another reply of the same post."""

    __tablename__ = "replies"
    __table_args__ = (
        Index("ix_replies_post_id", "post_id"),
        Index("ix_replies_parent_reply_id", "parent_reply_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Top-level replies have parent_reply_id = NULL.
    parent_reply_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("replies.id", ondelete="CASCADE"),
        nullable=True,
    )

    # Cache of COUNT(reply_upvotes) for this reply.
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="replies")
    post: Mapped[Post] = relationship("Post", back_populates="replies")
    parent: Mapped[Reply | None] = relationship(
        "Reply",
        remote_side=[id],
        back_populates="children",
    )
    children: Mapped[list[Reply]] = relationship(
        "Reply",
        back_populates="parent",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
