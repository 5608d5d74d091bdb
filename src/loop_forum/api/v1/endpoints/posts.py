"""Post-related endpoints for the Loop API."""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from loop_forum.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from loop_forum.core.settings import settings
from loop_forum.models import User
from loop_forum.schemas.post import (
    PostCreate,
    PostDetail,
    PostSort,
    PostSummary,
    TopPostsGroup,
)
from loop_forum.schemas.toggle import UpvoteToggleResponse
from loop_forum.services import feed, posts
from loop_forum.services.toggles import toggle_post_upvote

router = APIRouter(prefix="/posts", tags=["posts"])


def _viewer_id(user: User | None) -> int | None:
    return user.id if user is not None else None


@router.get("/", response_model=list[PostSummary])
async def list_posts(
    db: SessionDep,
    current_user: OptionalUserDep,
    category: Annotated[str | None, Query(description="Category slug filter")] = None,
    sort: PostSort = "newest",
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_page_size,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[PostSummary]:
    """List posts, newest or most upvoted first."""
    return feed.list_posts(
        db,
        viewer_id=_viewer_id(current_user),
        category_slug=category,
        sort=sort,
        limit=limit,
        offset=offset,
    )


@router.get("/top", response_model=dict[str, TopPostsGroup])
async def top_posts(db: SessionDep, current_user: OptionalUserDep) -> dict[str, TopPostsGroup]:
    """Return the most upvoted posts of each category, keyed by category slug."""
    return feed.top_posts_by_category(
        db,
        viewer_id=_viewer_id(current_user),
        per_category=settings.top_posts_per_category,
    )


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(
    post_id: int,
    db: SessionDep,
    current_user: OptionalUserDep,
    sort: PostSort = "upvotes",
) -> PostDetail:
    """Get a post with its threaded replies."""
    return posts.get_post_detail(db, post_id, viewer_id=_viewer_id(current_user), sort=sort)


@router.post("/", response_model=PostSummary, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostSummary:
    """Create a new post; it is auto-categorized when no category is given."""
    return posts.create_post(
        db,
        current_user,
        post_data.title,
        post_data.content,
        post_data.category_id,
    )


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Delete one of the caller's posts along with its replies."""
    posts.delete_post(db, current_user, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/upvote", response_model=UpvoteToggleResponse)
async def upvote_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UpvoteToggleResponse:
    """Toggle the caller's upvote on a post."""
    result = toggle_post_upvote(db, current_user.id, post_id)
    return UpvoteToggleResponse(upvotes=result.count or 0, has_upvoted=result.active)
