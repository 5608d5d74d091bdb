# src/loop_forum/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    bookmarks_router,
    categories_router,
    follows_router,
    posts_router,
    replies_router,
)

__all__ = [
    "auth_router",
    "categories_router",
    "posts_router",
    "replies_router",
    "bookmarks_router",
    "follows_router",
]
