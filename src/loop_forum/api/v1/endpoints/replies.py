"""Reply endpoints for the Loop API."""

from fastapi import APIRouter, Response, status

from loop_forum.api.v1.dependencies import CurrentUserDep, SessionDep
from loop_forum.schemas.reply import ReplyCreate, ReplyNode
from loop_forum.schemas.toggle import UpvoteToggleResponse
from loop_forum.services import posts
from loop_forum.services.toggles import toggle_reply_upvote

router = APIRouter(prefix="/replies", tags=["replies"])


@router.post("/", response_model=ReplyNode, status_code=status.HTTP_201_CREATED)
async def create_reply(
    reply_data: ReplyCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReplyNode:
    """Reply to a post, or to another reply on the same post."""
    return posts.create_reply(
        db,
        current_user,
        reply_data.post_id,
        reply_data.content,
        reply_data.parent_reply_id,
    )


@router.delete("/{reply_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reply(reply_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Delete one of the caller's replies and everything nested under it."""
    posts.delete_reply(db, current_user, reply_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{reply_id}/upvote", response_model=UpvoteToggleResponse)
async def upvote_reply(
    reply_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UpvoteToggleResponse:
    """Toggle the caller's upvote on a reply."""
    result = toggle_reply_upvote(db, current_user.id, reply_id)
    return UpvoteToggleResponse(upvotes=result.count or 0, has_upvoted=result.active)
