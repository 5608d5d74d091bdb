"""Bookmark endpoints for the Loop API."""

from fastapi import APIRouter

from loop_forum.api.v1.dependencies import CurrentUserDep, SessionDep
from loop_forum.schemas.post import BookmarkedPost
from loop_forum.schemas.toggle import BookmarkToggleResponse
from loop_forum.services.feed import list_bookmarks
from loop_forum.services.toggles import toggle_bookmark

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=list[BookmarkedPost])
async def get_bookmarks(current_user: CurrentUserDep, db: SessionDep) -> list[BookmarkedPost]:
    """List the caller's saved posts, most recently saved first."""
    return list_bookmarks(db, viewer_id=current_user.id)


@router.post("/{post_id}", response_model=BookmarkToggleResponse)
async def bookmark_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> BookmarkToggleResponse:
    """Save or unsave a post."""
    result = toggle_bookmark(db, current_user.id, post_id)
    return BookmarkToggleResponse(
        is_bookmarked=result.active,
        message="Post bookmarked" if result.active else "Bookmark removed",
    )
