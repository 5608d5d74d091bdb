# src/loop_forum/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from loop_forum.schemas.category import CategoryResponse
from loop_forum.schemas.reply import ReplyNode

PostSort = Literal["newest", "upvotes"]


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., max_length=300, description="Post title")
    content: str = Field(..., max_length=20000, description="Post body")
    category_id: int | None = Field(
        None,
        description="Category ID; the post is auto-categorized when omitted",
    )


class PostSummary(BaseModel):
    """Post as shown in feeds, annotated for the viewing user."""

    id: int
    title: str
    content: str
    user_id: int
    username: str
    category_id: int
    category_name: str
    category_slug: str
    category_icon: str | None = None
    upvotes: int
    reply_count: int = 0
    created_at: datetime
    updated_at: datetime
    has_upvoted: bool = False
    is_bookmarked: bool = False
    is_following: bool = False


class BookmarkedPost(PostSummary):
    """Post listed in the viewer's bookmarks."""

    bookmarked_at: datetime


class PostDetail(PostSummary):
    """A single post with its threaded replies."""

    replies: list[ReplyNode] = Field(default_factory=list)


class TopPostsGroup(BaseModel):
    """Highest-voted posts of one category."""

    category: CategoryResponse
    posts: list[PostSummary]
