# src/loop_forum/schemas/follow.py
"""Schemas for the following feed."""

from datetime import datetime

from pydantic import BaseModel

from loop_forum.schemas.post import PostSummary


class FollowedUser(BaseModel):
    """A user the viewer follows, with activity counters."""

    id: int
    username: str
    user_since: datetime
    followed_at: datetime
    post_count: int
    follower_count: int


class FollowingFeedResponse(BaseModel):
    """Followed users and their most recent posts."""

    following: list[FollowedUser]
    recent_posts: list[PostSummary]
    total_following: int


class ProfileUser(BaseModel):
    """Minimal profile header for a user's post list."""

    id: int
    username: str
    is_following: bool


class UserPostsResponse(BaseModel):
    """One user's posts, paginated."""

    user: ProfileUser
    posts: list[PostSummary]
    total: int
