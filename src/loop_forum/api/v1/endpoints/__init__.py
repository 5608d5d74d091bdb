# src/loop_forum/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .bookmarks import router as bookmarks_router
from .categories import router as categories_router
from .follows import router as follows_router
from .posts import router as posts_router
from .replies import router as replies_router

__all__ = [
    "auth_router",
    "bookmarks_router",
    "categories_router",
    "follows_router",
    "posts_router",
    "replies_router",
]
