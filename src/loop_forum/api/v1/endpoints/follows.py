"""Follow graph endpoints for the Loop API."""

from typing import Annotated

from fastapi import APIRouter, Query

from loop_forum.api.v1.dependencies import CurrentUserDep, SessionDep
from loop_forum.core.errors import NotFoundError
from loop_forum.core.settings import settings
from loop_forum.models import User
from loop_forum.schemas.follow import FollowingFeedResponse, UserPostsResponse
from loop_forum.schemas.toggle import FollowStatusResponse, FollowToggleResponse
from loop_forum.services.feed import following_feed, user_posts
from loop_forum.services.toggles import follower_count, is_following, toggle_follow

router = APIRouter(prefix="/follows", tags=["follows"])


@router.get("/", response_model=FollowingFeedResponse)
async def get_following(
    current_user: CurrentUserDep,
    db: SessionDep,
    expanded: bool = False,
) -> FollowingFeedResponse:
    """List followed users with their most recent posts."""
    limit = (
        settings.following_feed_expanded_limit if expanded else settings.following_feed_limit
    )
    return following_feed(db, viewer_id=current_user.id, limit=limit)


@router.get("/user/{user_id}/posts", response_model=UserPostsResponse)
async def get_user_posts(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_page_size,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> UserPostsResponse:
    """List one user's posts, newest first."""
    return user_posts(db, viewer_id=current_user.id, user_id=user_id, limit=limit, offset=offset)


@router.get("/check/{user_id}", response_model=FollowStatusResponse)
async def check_follow(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FollowStatusResponse:
    """Report whether the caller follows a user."""
    if db.get(User, user_id) is None:
        raise NotFoundError("User not found")
    return FollowStatusResponse(
        is_following=is_following(db, current_user.id, user_id),
        follower_count=follower_count(db, user_id),
    )


@router.post("/{user_id}", response_model=FollowToggleResponse)
async def follow_user(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FollowToggleResponse:
    """Follow or unfollow a user."""
    result = toggle_follow(db, current_user.id, user_id)
    return FollowToggleResponse(
        is_following=result.active,
        follower_count=result.count or 0,
        message="Followed user" if result.active else "Unfollowed user",
    )
