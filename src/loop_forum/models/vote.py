# src/loop_forum/models/vote.py
"""Models recording which users upvoted which posts and replies."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from loop_forum.db.session import Base
from loop_forum.db.time import utcnow


class PostUpvote(Base):
    """Per-user upvote on a post.

    Existence of the row is the only state; there is no vote weight.
    """

    __tablename__ = "post_upvotes"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_post_upvote"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class ReplyUpvote(Base):
    """Per-user upvote on a reply."""

    __tablename__ = "reply_upvotes"
    __table_args__ = (UniqueConstraint("user_id", "reply_id", name="uq_reply_upvote"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    reply_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("replies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
