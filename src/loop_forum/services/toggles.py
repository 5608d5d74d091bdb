"""Toggle operations for upvotes, bookmarks and follows.

Each toggle flips the existence of one relation row between an actor and a
target. Counters cached on the target (post and reply upvotes) and the
follower count are recomputed from the relation table after the flip, inside
the same transaction, so they cannot drift from the row count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session

from loop_forum.core.errors import InvalidOperationError, NotFoundError
from loop_forum.models import Bookmark, Follow, Post, PostUpvote, Reply, ReplyUpvote, User

logger = logging.getLogger(__name__)

__all__ = [
    "ToggleResult",
    "follower_count",
    "is_following",
    "toggle_bookmark",
    "toggle_follow",
    "toggle_post_upvote",
    "toggle_reply_upvote",
]


@dataclass(frozen=True)
class ToggleResult:
    """Relation state after a toggle.

    Attributes:
        active: True if the relation exists after the toggle.
        count: Recomputed counter for the target, or None when the relation
            carries no counter (bookmarks).
    """

    active: bool
    count: int | None = None


def _find(db: Session, model: type[Any], keys: dict[str, int]) -> Any | None:
    return db.query(model).filter_by(**keys).first()


def _flip_once(db: Session, model: type[Any], keys: dict[str, int]) -> bool:
    existing = _find(db, model, keys)
    if existing is not None:
        db.delete(existing)
        db.flush()
        return False

    db.add(model(**keys))
    db.flush()
    return True


def _flip(db: Session, model: type[Any], **keys: int) -> bool:
    """Delete the relation row matching ``keys`` or insert it if missing.

    If a concurrent transaction inserted the same row between the lookup and
    our insert, the unique constraint rejects ours. The transaction is then
    rolled back and the flip is replayed once against the committed state, so
    two racing toggles behave as if they ran one after the other.

    Returns:
        True if the row exists afterwards.
    """
    try:
        return _flip_once(db, model, keys)
    except IntegrityError:
        db.rollback()
        logger.info("Concurrent toggle on %s %s, retrying", model.__tablename__, keys)
        return _flip_once(db, model, keys)


def _count(db: Session, column: InstrumentedAttribute[int], value: int) -> int:
    return db.query(func.count(column)).filter(column == value).scalar() or 0


def toggle_post_upvote(db: Session, user_id: int, post_id: int) -> ToggleResult:
    """Add or remove ``user_id``'s upvote on a post.

    Raises:
        NotFoundError: If the post does not exist.
    """
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")

    try:
        active = _flip(db, PostUpvote, user_id=user_id, post_id=post_id)
        post.upvotes = _count(db, PostUpvote.post_id, post_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("User %s %s post %s", user_id, "upvoted" if active else "unvoted", post_id)
    return ToggleResult(active=active, count=post.upvotes)


def toggle_reply_upvote(db: Session, user_id: int, reply_id: int) -> ToggleResult:
    """Add or remove ``user_id``'s upvote on a reply.

    Raises:
        NotFoundError: If the reply does not exist.
    """
    reply = db.get(Reply, reply_id)
    if reply is None:
        raise NotFoundError("Reply not found")

    try:
        active = _flip(db, ReplyUpvote, user_id=user_id, reply_id=reply_id)
        reply.upvotes = _count(db, ReplyUpvote.reply_id, reply_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("User %s %s reply %s", user_id, "upvoted" if active else "unvoted", reply_id)
    return ToggleResult(active=active, count=reply.upvotes)


def toggle_bookmark(db: Session, user_id: int, post_id: int) -> ToggleResult:
    """Save or unsave a post for ``user_id``.

    Raises:
        NotFoundError: If the post does not exist.
    """
    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found")

    try:
        active = _flip(db, Bookmark, user_id=user_id, post_id=post_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.debug("User %s bookmark on post %s is now %s", user_id, post_id, active)
    return ToggleResult(active=active)


def toggle_follow(db: Session, follower_id: int, following_id: int) -> ToggleResult:
    """Follow or unfollow a user.

    Raises:
        InvalidOperationError: If a user tries to follow themselves.
        NotFoundError: If the target user does not exist.
    """
    if follower_id == following_id:
        raise InvalidOperationError("You cannot follow yourself")
    if db.get(User, following_id) is None:
        raise NotFoundError("User not found")

    try:
        active = _flip(db, Follow, follower_id=follower_id, following_id=following_id)
        count = _count(db, Follow.following_id, following_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        "User %s %s user %s",
        follower_id,
        "followed" if active else "unfollowed",
        following_id,
    )
    return ToggleResult(active=active, count=count)


def is_following(db: Session, follower_id: int, following_id: int) -> bool:
    """Return True if ``follower_id`` follows ``following_id``."""
    return (
        db.query(Follow.id)
        .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
        .first()
        is not None
    )


def follower_count(db: Session, user_id: int) -> int:
    """Return the number of users following ``user_id``."""
    return _count(db, Follow.following_id, user_id)
