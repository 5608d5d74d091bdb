# src/loop_forum/schemas/reply.py
"""Reply-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ReplyCreate(BaseModel):
    """Schema for creating a reply, optionally nested under another reply."""

    post_id: int
    content: str = Field(..., max_length=10000, description="Reply text")
    parent_reply_id: int | None = Field(None, description="Parent reply ID for nesting")


class ReplyNode(BaseModel):
    """One reply in a threaded reply tree."""

    id: int
    post_id: int
    user_id: int
    username: str
    content: str
    parent_reply_id: int | None = None
    upvotes: int = 0
    created_at: datetime
    has_upvoted: bool = False
    # Nesting level, 0 for top-level replies.
    depth: int = 0
    # False once the reply sits at the maximum interactive depth.
    can_reply: bool = True
    children: list[ReplyNode] = Field(default_factory=list)
