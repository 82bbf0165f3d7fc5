"""
Reports (annual, financial, activity...) uploaded as documents.

The public listing and download only expose published reports whose
visibility is ``public``.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlmodel import Session

from clubhub.api.deps import ADMINS, STAFF, CurrentUserDep, SessionDep, StorageDep, get_current_user, require_role
from clubhub.core.errors import ClubHubError, NotFoundError
from clubhub.core.logging import get_logger
from clubhub.models.media import Report
from clubhub.schemas.media import ReportResponse, ReportStatus, ReportUpdate, ReportVisibility
from clubhub.services.collection_service import CollectionService
from clubhub.services.file_storage_service import REPORT_DOCUMENT
from clubhub.services.stats_service import report_stats

logger = get_logger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]


def report_service(session: Session) -> CollectionService[Report]:
    return CollectionService(
        session,
        Report,
        "report",
        search_fields=("title", "description", "period"),
        required_fields=("title", "type"),
    )


def _list(session: Session, filters: dict, search, limit, offset) -> dict:
    reports, total = report_service(session).list(
        filters=filters,
        search=search,
        limit=limit,
        offset=offset,
    )
    return {"success": True, "count": total, "data": [ReportResponse.model_validate(r) for r in reports]}


@router.get("")
def list_reports(
    session: SessionDep,
    report_type: Optional[str] = Query(None, alias="type"),
    academic_year: Optional[str] = Query(None, alias="academicYear"),
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    filters = {"status": "published", "visibility": "public", "type": report_type, "academic_year": academic_year}
    return _list(session, filters, search, limit, offset)


@router.get("/download/{report_id}")
def download_report(report_id: str, session: SessionDep, storage: StorageDep) -> FileResponse:
    service = report_service(session)
    report = service.get_or_404(report_id)
    if report.status != "published" or report.visibility != "public":
        raise NotFoundError("Report not found")
    path = storage.existing_path(report.file_path)
    service.increment(report.id, "download_count")
    return FileResponse(
        path,
        media_type=report.file_type or "application/octet-stream",
        filename=report.file_name or path.name,
    )


@router.get("/admin/all", dependencies=staff)
def list_reports_admin(
    session: SessionDep,
    report_type: Optional[str] = Query(None, alias="type"),
    status_filter: Optional[str] = Query(None, alias="status"),
    visibility: Optional[str] = None,
    academic_year: Optional[str] = Query(None, alias="academicYear"),
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    filters = {
        "type": report_type,
        "status": status_filter,
        "visibility": visibility,
        "academic_year": academic_year,
    }
    return _list(session, filters, search, limit, offset)


@router.get("/admin/stats", dependencies=staff)
def get_report_stats(session: SessionDep) -> dict:
    return {"success": True, "stats": report_stats(session)}


@router.post("/upload", dependencies=staff, status_code=status.HTTP_201_CREATED)
def upload_report(
    session: SessionDep,
    storage: StorageDep,
    user: CurrentUserDep,
    report: Annotated[UploadFile, File()],
    title: Annotated[str, Form(min_length=1)],
    report_type: Annotated[str, Form(alias="type", min_length=1)],
    description: Annotated[Optional[str], Form()] = None,
    period: Annotated[Optional[str], Form()] = None,
    academic_year: Annotated[Optional[str], Form(alias="academicYear")] = None,
    report_status: Annotated[ReportStatus, Form(alias="status")] = "published",
    visibility: Annotated[ReportVisibility, Form()] = "admin_only",
) -> dict:
    stored = storage.save(report, REPORT_DOCUMENT)
    try:
        created = report_service(session).create(
            {
                "title": title,
                "type": report_type,
                "description": description,
                "period": period,
                "academic_year": academic_year,
                "status": report_status,
                "visibility": visibility,
                "file_path": stored.path,
                "file_name": stored.original_name,
                "file_size": stored.size,
                "file_type": stored.content_type,
                "uploaded_by": user.id,
            }
        )
    except ClubHubError:
        storage.delete(stored.path)
        raise
    logger.info(f"Report {created.id} uploaded by {user.username}")
    return {
        "success": True,
        "message": "Report uploaded successfully",
        "id": created.id,
        "data": ReportResponse.model_validate(created),
    }


@router.put("/{report_id}", dependencies=staff)
def update_report(report_id: str, body: ReportUpdate, session: SessionDep) -> dict:
    updated = report_service(session).update(report_id, body.model_dump(exclude_unset=True))
    return {"success": True, "message": "Report updated successfully", "data": ReportResponse.model_validate(updated)}


@router.delete("/{report_id}", dependencies=admins)
def delete_report(report_id: str, session: SessionDep, storage: StorageDep) -> dict:
    service = report_service(session)
    file_path = service.get_or_404(report_id).file_path
    service.delete(report_id)
    storage.delete(file_path)
    return {"success": True, "message": "Report deleted successfully"}
