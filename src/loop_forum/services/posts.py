"""Service-level helpers for posts and replies."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from loop_forum.core.errors import InvalidOperationError, NotFoundError, ValidationError
from loop_forum.core.settings import settings
from loop_forum.db.time import ensure_utc
from loop_forum.models import Category, Post, Reply, ReplyUpvote, User
from loop_forum.schemas.post import PostDetail, PostSort, PostSummary
from loop_forum.schemas.reply import ReplyNode
from loop_forum.services.categorizer import (
    DEFAULT_CATEGORY_KEYWORDS,
    KeywordCategorizer,
    resolve_category,
)
from loop_forum.services.feed import ViewerState, post_rows, to_summary
from loop_forum.services.reply_tree import build_reply_forest

logger = logging.getLogger(__name__)


def _require_length(value: str, minimum: int, label: str) -> str:
    """Return ``value`` stripped, or raise if it is shorter than ``minimum``."""
    stripped = value.strip()
    if len(stripped) < minimum:
        raise ValidationError(f"{label} must be at least {minimum} characters")
    return stripped


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def create_post(
    db: Session,
    author: User,
    title: str,
    content: str,
    category_id: int | None = None,
) -> PostSummary:
    """Create a post, auto-categorizing it when no category is given.

    Args:
        db: Database session.
        author: The posting user.
        title: Post title, at least ``MIN_TITLE_LENGTH`` characters.
        content: Post body, at least ``MIN_POST_CONTENT_LENGTH`` characters.
        category_id: Explicit category; when omitted the keyword categorizer
            picks one.

    Returns:
        The new post as a feed summary.

    Raises:
        ValidationError: If the title or content is too short.
        NotFoundError: If ``category_id`` names no category.
        ConfigurationError: If auto-categorization finds no usable category.
    """
    title = _require_length(title, settings.min_title_length, "Title")
    content = _require_length(content, settings.min_post_content_length, "Content")

    if category_id is not None:
        category = db.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")
    else:
        categorizer = KeywordCategorizer(
            DEFAULT_CATEGORY_KEYWORDS,
            settings.default_category_slug,
        )
        slug = categorizer.categorize(title, content)
        category = resolve_category(db, slug, settings.default_category_slug)
        logger.debug("Auto-categorized post %r as %s", title, category.slug)

    post = Post(title=title, content=content, user_id=author.id, category_id=category.id)
    db.add(post)
    _commit(db)
    db.refresh(post)

    logger.info("User %s created post %s in %s", author.id, post.id, category.slug)
    return to_summary(post, author.username, category, 0)


def _reply_depth(db: Session, reply: Reply) -> int:
    depth = 0
    parent_id = reply.parent_reply_id
    while parent_id is not None:
        depth += 1
        parent = db.get(Reply, parent_id)
        parent_id = parent.parent_reply_id if parent is not None else None
    return depth


def _to_node(reply: Reply, username: str, has_upvoted: bool = False) -> ReplyNode:
    return ReplyNode(
        id=reply.id,
        post_id=reply.post_id,
        user_id=reply.user_id,
        username=username,
        content=reply.content,
        parent_reply_id=reply.parent_reply_id,
        upvotes=reply.upvotes,
        created_at=ensure_utc(reply.created_at),
        has_upvoted=has_upvoted,
    )


def get_post_detail(
    db: Session,
    post_id: int,
    *,
    viewer_id: int | None,
    sort: PostSort = "upvotes",
) -> PostDetail:
    """Return a post with its replies arranged as a threaded forest.

    Raises:
        NotFoundError: If the post does not exist.
        DataIntegrityError: If stored reply parent links are inconsistent.
    """
    row = post_rows(db).filter(Post.id == post_id).first()
    if row is None:
        raise NotFoundError("Post not found")
    viewer = ViewerState.load(db, viewer_id)
    summary = viewer.annotate(to_summary(*row))

    query = (
        db.query(Reply, User.username)
        .join(User, Reply.user_id == User.id)
        .filter(Reply.post_id == post_id)
    )
    if sort == "newest":
        query = query.order_by(Reply.created_at.desc(), Reply.id.desc())
    else:
        query = query.order_by(Reply.upvotes.desc(), Reply.created_at.desc(), Reply.id.desc())

    upvoted: set[int] = set()
    if viewer_id is not None:
        upvoted = {
            reply_id
            for (reply_id,) in db.query(ReplyUpvote.reply_id)
            .join(Reply, Reply.id == ReplyUpvote.reply_id)
            .filter(Reply.post_id == post_id, ReplyUpvote.user_id == viewer_id)
        }

    nodes = [_to_node(reply, username, reply.id in upvoted) for reply, username in query.all()]
    forest = build_reply_forest(
        nodes,
        settings.max_reply_depth,
        max_nesting=settings.max_thread_depth,
    )
    return PostDetail(**summary.model_dump(), replies=forest)


def create_reply(
    db: Session,
    author: User,
    post_id: int,
    content: str,
    parent_reply_id: int | None = None,
) -> ReplyNode:
    """Add a reply to a post, optionally nested under another reply.

    Raises:
        ValidationError: If the content is too short, or the reply would sit
            deeper than ``MAX_THREAD_DEPTH``.
        NotFoundError: If the post or the parent reply does not exist.
        InvalidOperationError: If the parent reply belongs to a different post.
    """
    content = _require_length(content, settings.min_reply_length, "Reply")

    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found")

    depth = 0
    if parent_reply_id is not None:
        parent = db.get(Reply, parent_reply_id)
        if parent is None:
            raise NotFoundError("Parent reply not found")
        if parent.post_id != post_id:
            raise InvalidOperationError("Parent reply belongs to a different post")
        depth = _reply_depth(db, parent) + 1
        if depth > settings.max_thread_depth:
            raise ValidationError(
                f"Replies cannot be nested more than {settings.max_thread_depth} levels deep"
            )

    reply = Reply(
        content=content,
        user_id=author.id,
        post_id=post_id,
        parent_reply_id=parent_reply_id,
    )
    db.add(reply)
    _commit(db)
    db.refresh(reply)

    logger.info("User %s replied %s on post %s", author.id, reply.id, post_id)
    node = _to_node(reply, author.username)
    node.depth = depth
    node.can_reply = depth < settings.max_reply_depth
    return node


def delete_post(db: Session, author: User, post_id: int) -> None:
    """Delete a post with its replies, upvotes and bookmarks.

    Raises:
        NotFoundError: If the post does not exist.
        InvalidOperationError: If ``author`` did not write the post.
    """
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if post.user_id != author.id:
        raise InvalidOperationError("Only the author can delete this post")

    db.delete(post)
    _commit(db)
    logger.info("User %s deleted post %s", author.id, post_id)


def delete_reply(db: Session, author: User, reply_id: int) -> None:
    """Delete a reply together with its nested replies.

    Raises:
        NotFoundError: If the reply does not exist.
        InvalidOperationError: If ``author`` did not write the reply.
    """
    reply = db.get(Reply, reply_id)
    if reply is None:
        raise NotFoundError("Reply not found")
    if reply.user_id != author.id:
        raise InvalidOperationError("Only the author can delete this reply")

    db.delete(reply)
    _commit(db)
    logger.info("User %s deleted reply %s", author.id, reply_id)
