"""
Comments on announcements.

Anyone may comment. A valid token attributes the comment to the account;
without one the caller must give a name and email and the comment waits for
moderation. Only the authoring account can edit or delete a comment.
"""

from fastapi import APIRouter, status

from clubhub.api.deps import OptionalUserDep, SessionDep
from clubhub.core.logging import get_logger
from clubhub.schemas.content import CommentCreate, CommentResponse, CommentUpdate
from clubhub.services.announcement_service import AuthorSnapshot, CommentService

logger = get_logger(__name__)

router = APIRouter(prefix="/announcement-comments", tags=["announcement-comments"])


@router.get("/announcement/{announcement_id}")
def list_comments(announcement_id: str, session: SessionDep) -> dict:
    comments = CommentService(session).list_approved(announcement_id)
    return {
        "success": True,
        "count": len(comments),
        "data": [CommentResponse.model_validate(c) for c in comments],
    }


@router.get("/announcement/{announcement_id}/stats")
def comment_stats(announcement_id: str, session: SessionDep) -> dict:
    return {"success": True, "stats": CommentService(session).stats(announcement_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_comment(body: CommentCreate, session: SessionDep, user: OptionalUserDep) -> dict:
    if user is not None:
        author = AuthorSnapshot.from_user(user)
    else:
        author = AuthorSnapshot.for_guest(body.user_name, body.user_email)

    comment = CommentService(session).create(body.announcement_id, body.comment_text, author)
    logger.info(f"Comment {comment.id} added to announcement {comment.announcement_id} ({comment.status})")
    message = "Comment added successfully" if comment.status == "approved" else "Comment submitted for review"
    return {"success": True, "message": message, "data": CommentResponse.model_validate(comment)}


@router.put("/{comment_id}")
def update_comment(comment_id: str, body: CommentUpdate, session: SessionDep, user: OptionalUserDep) -> dict:
    comment = CommentService(session).update(comment_id, body.comment_text, user)
    return {"success": True, "message": "Comment updated successfully", "data": CommentResponse.model_validate(comment)}


@router.delete("/{comment_id}")
def delete_comment(comment_id: str, session: SessionDep, user: OptionalUserDep) -> dict:
    CommentService(session).delete(comment_id, user)
    return {"success": True, "message": "Comment deleted successfully"}
