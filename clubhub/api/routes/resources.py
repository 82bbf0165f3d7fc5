"""
Downloadable resources: uploaded files or external links.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlmodel import Session, select

from clubhub.api.deps import ADMINS, STAFF, CurrentUserDep, SessionDep, StorageDep, get_current_user, require_role
from clubhub.core.errors import ClubHubError, NotFoundError, ValidationError
from clubhub.core.logging import get_logger
from clubhub.models.media import Resource
from clubhub.schemas.media import ResourceResponse, ResourceUpdate
from clubhub.services.collection_service import CollectionService
from clubhub.services.file_storage_service import RESOURCE_FILE
from clubhub.services.stats_service import resource_stats

logger = get_logger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]

RESOURCE_ORDER = [Resource.pinned.desc(), Resource.featured.desc(), Resource.created_at.desc()]


def resource_service(session: Session) -> CollectionService[Resource]:
    return CollectionService(
        session,
        Resource,
        "resource",
        search_fields=("title", "description", "category"),
        required_fields=("title",),
    )


def _list(session: Session, filters: dict, search, limit, offset) -> dict:
    resources, total = resource_service(session).list(
        filters=filters,
        search=search,
        order_by=RESOURCE_ORDER,
        limit=limit,
        offset=offset,
    )
    return {"success": True, "count": total, "data": [ResourceResponse.model_validate(r) for r in resources]}


@router.get("")
def list_resources(
    session: SessionDep,
    category: Optional[str] = None,
    resource_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    return _list(session, {"status": "active", "category": category, "type": resource_type}, search, limit, offset)


@router.get("/categories")
def list_categories(session: SessionDep) -> dict:
    statement = select(Resource.category).where(Resource.status == "active").distinct().order_by(Resource.category)
    return {"success": True, "categories": list(session.exec(statement))}


@router.get("/admin", dependencies=staff)
def list_resources_admin(
    session: SessionDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    return _list(session, {"status": status_filter, "category": category}, search, limit, offset)


@router.get("/stats", dependencies=staff)
def get_resource_stats(session: SessionDep) -> dict:
    return {"success": True, "stats": resource_stats(session)}


def _download(resource_id: str, session: Session, storage) -> object:
    """
    Count the download, then serve the file (or the link target for links).
    """
    service = resource_service(session)
    resource = service.get_or_404(resource_id)
    if resource.status != "active":
        raise NotFoundError("Resource not found")

    if resource.type == "link":
        service.increment(resource.id, "download_count")
        return {"success": True, "message": "Link resource", "type": "link", "downloadUrl": resource.url}

    path = storage.existing_path(resource.file_path)
    service.increment(resource.id, "download_count")
    return FileResponse(
        path,
        media_type=resource.mime_type or "application/octet-stream",
        filename=resource.file_name or path.name,
    )


@router.get("/{resource_id}/download")
def download_resource(resource_id: str, session: SessionDep, storage: StorageDep):
    return _download(resource_id, session, storage)


@router.post("/{resource_id}/download")
def download_resource_post(resource_id: str, session: SessionDep, storage: StorageDep):
    return _download(resource_id, session, storage)


@router.post("", dependencies=staff, status_code=status.HTTP_201_CREATED)
def create_resource(
    session: SessionDep,
    storage: StorageDep,
    user: CurrentUserDep,
    title: Annotated[str, Form(min_length=1)],
    description: Annotated[Optional[str], Form()] = None,
    category: Annotated[str, Form()] = "General",
    resource_type: Annotated[Optional[str], Form(alias="type")] = None,
    url: Annotated[Optional[str], Form()] = None,
    featured: Annotated[bool, Form()] = False,
    pinned: Annotated[bool, Form()] = False,
    file: Annotated[Optional[UploadFile], File()] = None,
) -> dict:
    """Create a file resource (multipart ``file``) or a link resource (``url``)."""
    has_file = file is not None and bool(file.filename)
    resource_type = resource_type or ("file" if has_file else "link")
    if resource_type not in ("file", "link"):
        raise ValidationError("Resource type must be 'file' or 'link'")
    if resource_type == "file" and not has_file:
        raise ValidationError("File is required for file resources")
    if resource_type == "link" and not url:
        raise ValidationError("URL is required for link resources")

    stored = storage.save(file, RESOURCE_FILE) if resource_type == "file" else None
    data = {
        "title": title,
        "description": description,
        "category": category,
        "type": resource_type,
        "url": url if resource_type == "link" else None,
        "featured": featured,
        "pinned": pinned,
        "uploaded_by": user.id,
    }
    if stored:
        data.update(
            file_path=stored.path,
            file_name=stored.original_name,
            file_size=stored.size,
            mime_type=stored.content_type,
        )
    try:
        resource = resource_service(session).create(data)
    except ClubHubError:
        if stored:
            storage.delete(stored.path)
        raise
    logger.info(f"Resource {resource.id} ({resource_type}) created by {user.username}")
    return {
        "success": True,
        "message": "Resource created successfully",
        "id": resource.id,
        "data": ResourceResponse.model_validate(resource),
    }


@router.put("/{resource_id}", dependencies=staff)
def update_resource(resource_id: str, body: ResourceUpdate, session: SessionDep) -> dict:
    resource = resource_service(session).update(resource_id, body.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "Resource updated successfully",
        "data": ResourceResponse.model_validate(resource),
    }


@router.delete("/{resource_id}", dependencies=admins)
def delete_resource(resource_id: str, session: SessionDep, storage: StorageDep) -> dict:
    service = resource_service(session)
    file_path = service.get_or_404(resource_id).file_path
    service.delete(resource_id)
    storage.delete(file_path)
    return {"success": True, "message": "Resource deleted successfully"}
