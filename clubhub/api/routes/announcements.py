"""
Announcements, ordered by priority then newest publish date.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from clubhub.api.deps import ADMINS, STAFF, CurrentUserDep, SessionDep, get_current_user, require_role
from clubhub.models.announcement import Announcement
from clubhub.schemas.content import AnnouncementCreate, AnnouncementResponse, AnnouncementUpdate
from clubhub.services.announcement_service import AnnouncementService, announcement_ordering

router = APIRouter(prefix="/announcements", tags=["announcements"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]


def _responses(service: AnnouncementService, rows: List[Announcement]) -> List[AnnouncementResponse]:
    names = service.creator_names(rows)
    responses = []
    for row in rows:
        response = AnnouncementResponse.model_validate(row)
        response.created_by_name = names.get(row.created_by or "")
        responses.append(response)
    return responses


@router.get("")
def list_announcements(
    session: SessionDep,
    visibility: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    """Published, unexpired announcements: urgent first, newest first within a priority."""
    service = AnnouncementService(session)
    rows, total = service.list_public(visibility=visibility, limit=limit, offset=offset)
    return {"success": True, "count": total, "data": _responses(service, rows)}


@router.get("/admin/all", dependencies=staff)
def list_all_announcements(
    session: SessionDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    service = AnnouncementService(session)
    rows, total = service.list(
        filters={"status": status_filter, "priority": priority},
        search=search,
        order_by=announcement_ordering(),
        limit=limit,
        offset=offset,
    )
    return {"success": True, "count": total, "data": _responses(service, rows)}


@router.get("/admin/stats", dependencies=staff)
def announcement_stats(session: SessionDep) -> dict:
    return {"success": True, "stats": AnnouncementService(session).stats()}


@router.get("/{announcement_id}")
def get_announcement(announcement_id: str, session: SessionDep) -> dict:
    service = AnnouncementService(session)
    announcement = service.get_or_404(announcement_id)
    return {"success": True, "data": _responses(service, [announcement])[0]}


@router.post("", dependencies=staff, status_code=status.HTTP_201_CREATED)
def create_announcement(body: AnnouncementCreate, session: SessionDep, user: CurrentUserDep) -> dict:
    service = AnnouncementService(session)
    announcement = service.create({**body.model_dump(exclude_none=True), "created_by": user.id})
    return {
        "success": True,
        "message": "Announcement created successfully",
        "id": announcement.id,
        "data": _responses(service, [announcement])[0],
    }


@router.put("/{announcement_id}", dependencies=staff)
def update_announcement(announcement_id: str, body: AnnouncementUpdate, session: SessionDep) -> dict:
    service = AnnouncementService(session)
    announcement = service.update(announcement_id, body.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "Announcement updated successfully",
        "data": _responses(service, [announcement])[0],
    }


@router.delete("/{announcement_id}", dependencies=admins)
def delete_announcement(announcement_id: str, session: SessionDep) -> dict:
    AnnouncementService(session).delete_with_children(announcement_id)
    return {"success": True, "message": "Announcement deleted successfully"}
