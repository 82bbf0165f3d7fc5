"""
Likes on announcements, keyed by account when authenticated and by email for guests.
"""

from typing import Optional

from fastapi import APIRouter

from clubhub.api.deps import OptionalUserDep, SessionDep
from clubhub.schemas.content import LikeResponse, LikeToggle
from clubhub.services.announcement_service import AuthorSnapshot, LikeService

router = APIRouter(prefix="/announcement-likes", tags=["announcement-likes"])


@router.get("/announcement/{announcement_id}")
def like_count(announcement_id: str, session: SessionDep) -> dict:
    return {"success": True, "count": LikeService(session).count(announcement_id)}


@router.get("/announcement/{announcement_id}/check")
def check_liked(
    announcement_id: str,
    session: SessionDep,
    user: OptionalUserDep,
    email: Optional[str] = None,
) -> dict:
    service = LikeService(session)
    return {
        "success": True,
        "liked": service.has_liked(announcement_id, user, email),
        "count": service.count(announcement_id),
    }


@router.get("/announcement/{announcement_id}/details")
def like_details(announcement_id: str, session: SessionDep) -> dict:
    likes = LikeService(session).details(announcement_id)
    return {"success": True, "count": len(likes), "data": [LikeResponse.model_validate(like) for like in likes]}


@router.post("/toggle")
def toggle_like(body: LikeToggle, session: SessionDep, user: OptionalUserDep) -> dict:
    if user is not None:
        author = AuthorSnapshot.from_user(user)
    else:
        author = AuthorSnapshot.for_guest(body.user_name, body.user_email)

    service = LikeService(session)
    liked = service.toggle(body.announcement_id, author)
    return {
        "success": True,
        "message": "Announcement liked" if liked else "Like removed",
        "liked": liked,
        "count": service.count(body.announcement_id),
    }


@router.delete("/{like_id}")
def delete_like(like_id: str, session: SessionDep, user: OptionalUserDep) -> dict:
    LikeService(session).delete(like_id, user)
    return {"success": True, "message": "Like removed successfully"}
