"""
Leadership team profiles with optional photos.

Writes check the token and role only; the admin listing also re-reads the
account.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlmodel import Session

from clubhub.api.deps import ADMINS, STAFF, SessionDep, StorageDep, get_current_user, require_role, verify_token
from clubhub.core.errors import ClubHubError
from clubhub.core.logging import get_logger
from clubhub.models.media import LeadershipProfile
from clubhub.schemas.media import LeadershipResponse
from clubhub.services.collection_service import CollectionService
from clubhub.services.file_storage_service import LEADERSHIP_PHOTO, public_url

logger = get_logger(__name__)

router = APIRouter(prefix="/leadership", tags=["leadership"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(verify_token), Depends(require_role(*ADMINS))]

PROFILE_ORDER = [
    LeadershipProfile.display_order.is_(None),
    LeadershipProfile.display_order.asc(),
    LeadershipProfile.created_at.asc(),
]


def leadership_service(session: Session) -> CollectionService[LeadershipProfile]:
    return CollectionService(
        session,
        LeadershipProfile,
        "leader",
        search_fields=("name", "position", "sector"),
        required_fields=("name", "position"),
    )


def leadership_response(profile: LeadershipProfile) -> LeadershipResponse:
    response = LeadershipResponse.model_validate(profile)
    response.photo_url = public_url(profile.photo_path)
    return response


@router.get("")
def list_leadership(session: SessionDep, sector: Optional[str] = None) -> dict:
    profiles, total = leadership_service(session).list(
        filters={"status": "active", "sector": sector},
        order_by=PROFILE_ORDER,
    )
    return {"success": True, "count": total, "leadership": [leadership_response(p) for p in profiles]}


@router.get("/admin", dependencies=staff)
def list_leadership_admin(
    session: SessionDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    sector: Optional[str] = None,
    search: Optional[str] = None,
) -> dict:
    profiles, total = leadership_service(session).list(
        filters={"status": status_filter, "sector": sector},
        search=search,
        order_by=PROFILE_ORDER,
    )
    return {"success": True, "count": total, "leadership": [leadership_response(p) for p in profiles]}


@router.post("", dependencies=admins, status_code=status.HTTP_201_CREATED)
def create_leader(
    session: SessionDep,
    storage: StorageDep,
    name: Annotated[str, Form(min_length=1)],
    position: Annotated[str, Form(min_length=1)],
    sector: Annotated[str, Form()] = "Leadership Team",
    bio: Annotated[Optional[str], Form()] = None,
    phone: Annotated[Optional[str], Form()] = None,
    email: Annotated[Optional[str], Form()] = None,
    display_order: Annotated[Optional[int], Form(alias="displayOrder")] = None,
    profile_status: Annotated[str, Form(alias="status")] = "active",
    photo: Annotated[Optional[UploadFile], File()] = None,
) -> dict:
    stored = storage.save(photo, LEADERSHIP_PHOTO) if photo is not None and photo.filename else None
    try:
        profile = leadership_service(session).create(
            {
                "name": name,
                "position": position,
                "sector": sector,
                "bio": bio,
                "phone": phone,
                "email": email,
                "display_order": display_order,
                "status": profile_status,
                "photo_path": stored.path if stored else None,
            }
        )
    except ClubHubError:
        if stored:
            storage.delete(stored.path)
        raise
    return {
        "success": True,
        "message": "Leader created successfully",
        "id": profile.id,
        "data": leadership_response(profile),
    }


@router.put("/{profile_id}", dependencies=admins)
def update_leader(
    profile_id: str,
    session: SessionDep,
    storage: StorageDep,
    name: Annotated[Optional[str], Form()] = None,
    position: Annotated[Optional[str], Form()] = None,
    sector: Annotated[Optional[str], Form()] = None,
    bio: Annotated[Optional[str], Form()] = None,
    phone: Annotated[Optional[str], Form()] = None,
    email: Annotated[Optional[str], Form()] = None,
    display_order: Annotated[Optional[int], Form(alias="displayOrder")] = None,
    profile_status: Annotated[Optional[str], Form(alias="status")] = None,
    photo: Annotated[Optional[UploadFile], File()] = None,
) -> dict:
    """Update the provided fields; a new photo replaces the old file."""
    service = leadership_service(session)
    old_photo = service.get_or_404(profile_id).photo_path

    fields = {
        "name": name,
        "position": position,
        "sector": sector,
        "bio": bio,
        "phone": phone,
        "email": email,
        "display_order": display_order,
        "status": profile_status,
    }
    changes = {key: value for key, value in fields.items() if value is not None}

    stored = storage.save(photo, LEADERSHIP_PHOTO) if photo is not None and photo.filename else None
    if stored:
        changes["photo_path"] = stored.path
    try:
        profile = service.update(profile_id, changes)
    except ClubHubError:
        if stored:
            storage.delete(stored.path)
        raise
    if stored and old_photo:
        storage.delete(old_photo)
    return {"success": True, "message": "Leader updated successfully", "data": leadership_response(profile)}


@router.delete("/{profile_id}/image", dependencies=admins)
def delete_leader_image(profile_id: str, session: SessionDep, storage: StorageDep) -> dict:
    service = leadership_service(session)
    old_photo = service.get_or_404(profile_id).photo_path
    profile = service.update(profile_id, {"photo_path": None})
    storage.delete(old_photo)
    return {"success": True, "message": "Image removed successfully", "data": leadership_response(profile)}


@router.delete("/{profile_id}", dependencies=admins)
def delete_leader(profile_id: str, session: SessionDep, storage: StorageDep) -> dict:
    service = leadership_service(session)
    photo_path = service.get_or_404(profile_id).photo_path
    service.delete(profile_id)
    storage.delete(photo_path)
    return {"success": True, "message": "Leader deleted successfully"}
