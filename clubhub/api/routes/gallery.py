"""
Gallery of event photos and videos.
"""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlmodel import Session

from clubhub.api.deps import ADMINS, STAFF, CurrentUserDep, SessionDep, StorageDep, get_current_user, require_role
from clubhub.core.errors import ClubHubError, NotFoundError
from clubhub.core.logging import get_logger
from clubhub.models.base import as_utc
from clubhub.models.media import GalleryItem
from clubhub.schemas.media import GalleryResponse, GalleryUpdate
from clubhub.services.collection_service import CollectionService
from clubhub.services.file_storage_service import GALLERY_MEDIA, public_url
from clubhub.services.stats_service import gallery_stats

logger = get_logger(__name__)

router = APIRouter(prefix="/gallery", tags=["gallery"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]


def gallery_service(session: Session) -> CollectionService[GalleryItem]:
    return CollectionService(
        session,
        GalleryItem,
        "gallery item",
        search_fields=("title", "description"),
        required_fields=("title",),
    )


def gallery_response(item: GalleryItem) -> GalleryResponse:
    response = GalleryResponse.model_validate(item)
    response.media_url = public_url(item.file_path)
    return response


def _list(session: Session, filters: dict, search, limit, offset) -> dict:
    items, total = gallery_service(session).list(
        filters=filters,
        search=search,
        limit=limit,
        offset=offset,
    )
    return {"success": True, "count": total, "gallery": [gallery_response(i) for i in items]}


@router.get("")
def list_gallery(
    session: SessionDep,
    category: Optional[str] = None,
    media_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    return _list(session, {"status": "active", "category": category, "media_type": media_type}, search, limit, offset)


@router.get("/download/{item_id}")
def download_gallery_item(item_id: str, session: SessionDep, storage: StorageDep) -> FileResponse:
    """Serve the file as an attachment and count the download."""
    service = gallery_service(session)
    item = service.get_or_404(item_id)
    if item.status != "active":
        raise NotFoundError("Gallery item not found")
    path = storage.existing_path(item.file_path)
    service.increment(item.id, "download_count")
    return FileResponse(path, media_type=item.mime_type, filename=item.file_name or path.name)


@router.get("/admin", dependencies=staff)
def list_gallery_admin(
    session: SessionDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    return _list(session, {"status": status_filter, "category": category}, search, limit, offset)


@router.get("/stats", dependencies=staff)
def get_gallery_stats(session: SessionDep) -> dict:
    return {"success": True, "stats": gallery_stats(session)}


@router.post("/upload", dependencies=staff, status_code=status.HTTP_201_CREATED)
def upload_gallery_item(
    session: SessionDep,
    storage: StorageDep,
    user: CurrentUserDep,
    media: Annotated[UploadFile, File()],
    title: Annotated[str, Form(min_length=1)],
    description: Annotated[Optional[str], Form()] = None,
    category: Annotated[str, Form()] = "General",
    event_date: Annotated[Optional[datetime], Form(alias="eventDate")] = None,
) -> dict:
    stored = storage.save(media, GALLERY_MEDIA)
    media_type = "video" if (stored.content_type or "").startswith("video/") else "image"
    try:
        item = gallery_service(session).create(
            {
                "title": title,
                "description": description,
                "category": category,
                "event_date": as_utc(event_date),
                "media_type": media_type,
                "file_path": stored.path,
                "file_name": stored.original_name,
                "file_size": stored.size,
                "mime_type": stored.content_type,
                "uploaded_by": user.id,
            }
        )
    except ClubHubError:
        storage.delete(stored.path)
        raise
    logger.info(f"Gallery item {item.id} uploaded by {user.username}")
    return {
        "success": True,
        "message": "Media uploaded successfully",
        "id": item.id,
        "data": gallery_response(item),
    }


@router.put("/{item_id}", dependencies=staff)
def update_gallery_item(item_id: str, body: GalleryUpdate, session: SessionDep) -> dict:
    item = gallery_service(session).update(item_id, body.model_dump(exclude_unset=True))
    return {"success": True, "message": "Gallery item updated successfully", "data": gallery_response(item)}


@router.put("/{item_id}/replace", dependencies=staff)
def replace_gallery_media(
    item_id: str,
    session: SessionDep,
    storage: StorageDep,
    media: Annotated[UploadFile, File()],
) -> dict:
    """Swap the stored file, keeping the item's metadata and download count."""
    service = gallery_service(session)
    old_path = service.get_or_404(item_id).file_path

    stored = storage.save(media, GALLERY_MEDIA)
    media_type = "video" if (stored.content_type or "").startswith("video/") else "image"
    try:
        item = service.update(
            item_id,
            {
                "media_type": media_type,
                "file_path": stored.path,
                "file_name": stored.original_name,
                "file_size": stored.size,
                "mime_type": stored.content_type,
            },
        )
    except ClubHubError:
        storage.delete(stored.path)
        raise
    if old_path and old_path != stored.path:
        storage.delete(old_path)
    logger.info(f"Gallery item {item.id} media replaced")
    return {"success": True, "message": "Media replaced successfully", "data": gallery_response(item)}


@router.delete("/{item_id}", dependencies=admins)
def delete_gallery_item(item_id: str, session: SessionDep, storage: StorageDep) -> dict:
    """Delete the record; removing its file is best-effort."""
    service = gallery_service(session)
    file_path = service.get_or_404(item_id).file_path
    service.delete(item_id)
    storage.delete(file_path)
    return {"success": True, "message": "Gallery item deleted successfully"}
