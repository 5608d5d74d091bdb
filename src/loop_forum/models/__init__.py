# src/loop_forum/models/__init__.py
"""SQLAlchemy models for the Loop forum."""

from .bookmark import Bookmark
from .category import Category
from .follow import Follow
from .post import Post
from .reply import Reply
from .user import User
from .vote import PostUpvote, ReplyUpvote

__all__ = [
    "Bookmark",
    "Category",
    "Follow",
    "Post",
    "Reply",
    "User",
    "PostUpvote", "ReplyUpvote",
]
