"""
Member roster: public self-registration plus staff management and export.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session, select

from clubhub.api.deps import ADMINS, STAFF, SessionDep, get_current_user, require_role
from clubhub.core.errors import ValidationError
from clubhub.core.logging import get_logger
from clubhub.models.member import Member
from clubhub.schemas.member import MemberCreate, MemberResponse, MemberUpdate
from clubhub.services.collection_service import CollectionService
from clubhub.services.member_export import XLSX_MEDIA_TYPE, export_members_workbook

logger = get_logger(__name__)

router = APIRouter(prefix="/members", tags=["members"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]


def member_service(session: Session) -> CollectionService[Member]:
    return CollectionService(
        session,
        Member,
        "member",
        search_fields=("full_name", "email", "student_id", "department"),
        required_fields=("full_name", "email"),
    )


def _ensure_email_free(session: Session, email: str, exclude_id: Optional[str] = None) -> None:
    statement = select(Member).where(Member.email == email)
    if exclude_id:
        statement = statement.where(Member.id != exclude_id)
    if session.exec(statement).first() is not None:
        raise ValidationError("Member with this email already exists")


def _create(session: Session, body: MemberCreate) -> Member:
    _ensure_email_free(session, body.email)
    return member_service(session).create(body.model_dump())


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_member(body: MemberCreate, session: SessionDep) -> dict:
    """Public membership sign-up."""
    member = _create(session, body)
    logger.info(f"Member registered: {member.id}")
    return {"success": True, "message": "Member registered successfully", "memberId": member.id}


@router.post("", dependencies=staff, status_code=status.HTTP_201_CREATED)
def create_member(body: MemberCreate, session: SessionDep) -> dict:
    member = _create(session, body)
    return {
        "success": True,
        "message": "Member created successfully",
        "memberId": member.id,
        "data": MemberResponse.model_validate(member),
    }


@router.get("", dependencies=staff)
def list_members(
    session: SessionDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    department: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    members, total = member_service(session).list(
        filters={"status": status_filter, "department": department},
        search=search,
        order_by=[Member.joined_at.desc()],
        limit=limit,
        offset=offset,
    )
    return {
        "success": True,
        "count": total,
        "data": [MemberResponse.model_validate(m) for m in members],
    }


@router.get("/export", dependencies=staff)
def export_members(session: SessionDep, status_filter: Optional[str] = Query(None, alias="status")) -> Response:
    """Download the roster as an Excel workbook."""
    members, _ = member_service(session).list(filters={"status": status_filter}, order_by=[Member.joined_at.desc()])
    content = export_members_workbook(members)
    logger.info(f"Exported {len(members)} members")
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="members.xlsx"'},
    )


@router.get("/{member_id}", dependencies=staff)
def get_member(member_id: str, session: SessionDep) -> dict:
    member = member_service(session).get_or_404(member_id)
    return {"success": True, "data": MemberResponse.model_validate(member)}


@router.put("/{member_id}", dependencies=staff)
def update_member(member_id: str, body: MemberUpdate, session: SessionDep) -> dict:
    changes = body.model_dump(exclude_unset=True)
    service = member_service(session)
    service.get_or_404(member_id)
    if changes.get("email"):
        _ensure_email_free(session, changes["email"], exclude_id=member_id)
    member = service.update(member_id, changes)
    return {
        "success": True,
        "message": "Member updated successfully",
        "data": MemberResponse.model_validate(member),
    }


@router.delete("/{member_id}", dependencies=admins)
def delete_member(member_id: str, session: SessionDep) -> dict:
    member_service(session).delete(member_id)
    return {"success": True, "message": "Member deleted successfully"}
