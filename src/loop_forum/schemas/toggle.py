# src/loop_forum/schemas/toggle.py
"""Responses for toggle endpoints (upvote, bookmark, follow)."""

from pydantic import BaseModel


class UpvoteToggleResponse(BaseModel):
    """Upvote state and count after a toggle."""

    upvotes: int
    has_upvoted: bool


class BookmarkToggleResponse(BaseModel):
    """Bookmark state after a toggle."""

    is_bookmarked: bool
    message: str


class FollowStatusResponse(BaseModel):
    """Follow state between the caller and another user."""

    is_following: bool
    follower_count: int


class FollowToggleResponse(FollowStatusResponse):
    """Follow state after a toggle."""

    message: str
