"""Feed assembly: post listings annotated for the viewing user.

Every listing is built from one joined query (post, author name, category,
reply count) so no per-post lookups happen. Viewer-specific flags come from a
``ViewerState`` loaded once per request and applied to response objects; ORM
rows are never modified here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from loop_forum.core.errors import NotFoundError
from loop_forum.db.time import ensure_utc
from loop_forum.models import Bookmark, Category, Follow, Post, PostUpvote, Reply, User
from loop_forum.schemas.category import CategoryResponse
from loop_forum.schemas.follow import (
    FollowedUser,
    FollowingFeedResponse,
    ProfileUser,
    UserPostsResponse,
)
from loop_forum.schemas.post import BookmarkedPost, PostSort, PostSummary, TopPostsGroup

logger = logging.getLogger(__name__)

SummaryT = TypeVar("SummaryT", bound=PostSummary)


@dataclass(frozen=True)
class ViewerState:
    """Relations of one viewer that personalize a feed.

    Anonymous viewers use the empty default, which leaves every flag false.
    """

    upvoted_post_ids: frozenset[int] = field(default_factory=frozenset)
    bookmarked_post_ids: frozenset[int] = field(default_factory=frozenset)
    followed_user_ids: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def load(cls, db: Session, viewer_id: int | None) -> ViewerState:
        """Fetch the viewer's upvotes, bookmarks and follows in three queries."""
        if viewer_id is None:
            return cls()

        upvoted = db.query(PostUpvote.post_id).filter(PostUpvote.user_id == viewer_id)
        bookmarked = db.query(Bookmark.post_id).filter(Bookmark.user_id == viewer_id)
        followed = db.query(Follow.following_id).filter(Follow.follower_id == viewer_id)
        return cls(
            upvoted_post_ids=frozenset(row[0] for row in upvoted),
            bookmarked_post_ids=frozenset(row[0] for row in bookmarked),
            followed_user_ids=frozenset(row[0] for row in followed),
        )

    def annotate(self, summary: SummaryT) -> SummaryT:
        """Return a copy of ``summary`` with the viewer flags filled in."""
        return summary.model_copy(
            update={
                "has_upvoted": summary.id in self.upvoted_post_ids,
                "is_bookmarked": summary.id in self.bookmarked_post_ids,
                "is_following": summary.user_id in self.followed_user_ids,
            }
        )


def post_rows(db: Session) -> Query[Any]:
    """Base query yielding ``(Post, username, Category, reply_count)`` rows."""
    reply_counts = (
        db.query(Reply.post_id.label("post_id"), func.count(Reply.id).label("reply_count"))
        .group_by(Reply.post_id)
        .subquery()
    )
    return (
        db.query(
            Post,
            User.username,
            Category,
            func.coalesce(reply_counts.c.reply_count, 0).label("reply_count"),
        )
        .join(User, Post.user_id == User.id)
        .join(Category, Post.category_id == Category.id)
        .outerjoin(reply_counts, reply_counts.c.post_id == Post.id)
    )


def apply_sort(query: Query[Any], sort: PostSort) -> Query[Any]:
    """Order a post query; ``id`` breaks timestamp ties so paging is stable."""
    if sort == "upvotes":
        return query.order_by(Post.upvotes.desc(), Post.created_at.desc(), Post.id.desc())
    return query.order_by(Post.created_at.desc(), Post.id.desc())


def to_summary(post: Post, username: str, category: Category, reply_count: int) -> PostSummary:
    """Convert one joined row into an unannotated ``PostSummary``."""
    return PostSummary(
        id=post.id,
        title=post.title,
        content=post.content,
        user_id=post.user_id,
        username=username,
        category_id=category.id,
        category_name=category.name,
        category_slug=category.slug,
        category_icon=category.icon,
        upvotes=post.upvotes,
        reply_count=int(reply_count),
        created_at=ensure_utc(post.created_at),
        updated_at=ensure_utc(post.updated_at),
    )


def _summaries(query: Query[Any], viewer: ViewerState) -> list[PostSummary]:
    return [viewer.annotate(to_summary(*row)) for row in query.all()]


def list_posts(
    db: Session,
    *,
    viewer_id: int | None,
    category_slug: str | None = None,
    sort: PostSort = "newest",
    limit: int = 20,
    offset: int = 0,
) -> list[PostSummary]:
    """List posts, optionally restricted to one category.

    Raises:
        NotFoundError: If ``category_slug`` names no category.
    """
    query = post_rows(db)
    if category_slug is not None:
        category = db.query(Category).filter(Category.slug == category_slug).first()
        if category is None:
            raise NotFoundError("Category not found")
        query = query.filter(Post.category_id == category.id)

    query = apply_sort(query, sort).offset(offset).limit(limit)
    return _summaries(query, ViewerState.load(db, viewer_id))


def top_posts_by_category(
    db: Session,
    *,
    viewer_id: int | None,
    per_category: int = 3,
) -> dict[str, TopPostsGroup]:
    """Return the most upvoted posts of every category, keyed by slug."""
    viewer = ViewerState.load(db, viewer_id)
    groups: dict[str, TopPostsGroup] = {}
    for category in db.query(Category).order_by(Category.id).all():
        query = apply_sort(
            post_rows(db).filter(Post.category_id == category.id),
            "upvotes",
        ).limit(per_category)
        groups[category.slug] = TopPostsGroup(
            category=CategoryResponse.model_validate(category),
            posts=_summaries(query, viewer),
        )
    return groups


def list_bookmarks(db: Session, *, viewer_id: int) -> list[BookmarkedPost]:
    """Return the viewer's bookmarked posts, most recently saved first."""
    viewer = ViewerState.load(db, viewer_id)
    rows = (
        post_rows(db)
        .add_columns(Bookmark.created_at)
        .join(Bookmark, Bookmark.post_id == Post.id)
        .filter(Bookmark.user_id == viewer_id)
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .all()
    )
    return [
        viewer.annotate(
            BookmarkedPost(
                **to_summary(post, username, category, reply_count).model_dump(),
                bookmarked_at=ensure_utc(bookmarked_at),
            )
        )
        for post, username, category, reply_count, bookmarked_at in rows
    ]


def user_posts(
    db: Session,
    *,
    viewer_id: int,
    user_id: int,
    limit: int = 20,
    offset: int = 0,
) -> UserPostsResponse:
    """Return one user's posts, newest first, with the total post count.

    Raises:
        NotFoundError: If the user does not exist.
    """
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    viewer = ViewerState.load(db, viewer_id)
    total = db.query(func.count(Post.id)).filter(Post.user_id == user_id).scalar() or 0
    query = apply_sort(post_rows(db).filter(Post.user_id == user_id), "newest")
    return UserPostsResponse(
        user=ProfileUser(
            id=user.id,
            username=user.username,
            is_following=user.id in viewer.followed_user_ids,
        ),
        posts=_summaries(query.offset(offset).limit(limit), viewer),
        total=total,
    )


def following_feed(db: Session, *, viewer_id: int, limit: int = 6) -> FollowingFeedResponse:
    """Return the users the viewer follows and their most recent posts.

    Post and follower counts for all followed users are fetched with one
    grouped query each.
    """
    followed = (
        db.query(User, Follow.created_at)
        .join(Follow, Follow.following_id == User.id)
        .filter(Follow.follower_id == viewer_id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
        .all()
    )
    if not followed:
        return FollowingFeedResponse(following=[], recent_posts=[], total_following=0)

    user_ids = [user.id for user, _ in followed]
    post_counts = dict(
        db.query(Post.user_id, func.count(Post.id))
        .filter(Post.user_id.in_(user_ids))
        .group_by(Post.user_id)
        .all()
    )
    follower_counts = dict(
        db.query(Follow.following_id, func.count(Follow.id))
        .filter(Follow.following_id.in_(user_ids))
        .group_by(Follow.following_id)
        .all()
    )

    viewer = ViewerState.load(db, viewer_id)
    query = apply_sort(post_rows(db).filter(Post.user_id.in_(user_ids)), "newest")
    recent = _summaries(query.limit(limit), viewer)

    logger.debug("Following feed for user %s: %d users", viewer_id, len(user_ids))
    return FollowingFeedResponse(
        following=[
            FollowedUser(
                id=user.id,
                username=user.username,
                user_since=ensure_utc(user.created_at),
                followed_at=ensure_utc(followed_at),
                post_count=post_counts.get(user.id, 0),
                follower_count=follower_counts.get(user.id, 0),
            )
            for user, followed_at in followed
        ],
        recent_posts=recent,
        total_following=len(followed),
    )
