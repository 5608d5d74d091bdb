# src/loop_forum/models/user.py
"""SQLAlchemy models for registered forum users."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from loop_forum.db.session import Base
from loop_forum.db.time import utcnow

if TYPE_CHECKING:
    from .post import Post
    from .reply import Reply


class User(Base):
    """Registered account identified by a unique username and email."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    posts: Mapped[list[Post]] = relationship("Post", back_populates="author")
    replies: Mapped[list[Reply]] = relationship("Reply", back_populates="author")

    def __repr__(self) -> str:
        return f"<User {self.username}>"
