"""
Public contact form and the staff inbox.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from clubhub.api.deps import ADMINS, STAFF, CurrentUserDep, SessionDep, get_current_user, require_role
from clubhub.core.logging import get_logger
from clubhub.models.base import utcnow
from clubhub.models.contact import ContactMessage
from clubhub.schemas.contact import ContactCreate, ContactReply, ContactResponse, ContactStatusUpdate
from clubhub.services.collection_service import CollectionService
from clubhub.workers.queue import try_enqueue
from clubhub.workers.tasks import send_contact_reply_task

logger = get_logger(__name__)

router = APIRouter(prefix="/contact", tags=["contact"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]


def contact_service(session: Session) -> CollectionService[ContactMessage]:
    return CollectionService(
        session,
        ContactMessage,
        "contact",
        search_fields=("name", "email", "subject", "message"),
        required_fields=("name", "email", "subject", "message"),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_contact(body: ContactCreate, session: SessionDep) -> dict:
    contact = contact_service(session).create({**body.model_dump(), "status": "new"})
    logger.info(f"Contact message {contact.id} received")
    return {
        "success": True,
        "message": "Contact form submitted successfully",
        "contact": ContactResponse.model_validate(contact),
    }


@router.get("", dependencies=staff)
def list_contacts(
    session: SessionDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    contacts, total = contact_service(session).list(
        filters={"status": status_filter},
        search=search,
        order_by=[ContactMessage.submitted_at.desc()],
        limit=limit,
        offset=offset,
    )
    return {"success": True, "count": total, "contacts": [ContactResponse.model_validate(c) for c in contacts]}


@router.get("/{contact_id}", dependencies=staff)
def get_contact(contact_id: str, session: SessionDep) -> dict:
    contact = contact_service(session).get_or_404(contact_id)
    return {"success": True, "contact": ContactResponse.model_validate(contact)}


@router.patch("/{contact_id}/status", dependencies=staff)
def update_contact_status(contact_id: str, body: ContactStatusUpdate, session: SessionDep) -> dict:
    """Change only ``status`` (and ``updated_at``)."""
    contact = contact_service(session).update(contact_id, {"status": body.status})
    return {
        "success": True,
        "message": "Contact status updated",
        "contact": ContactResponse.model_validate(contact),
    }


@router.post("/{contact_id}/reply", dependencies=staff)
def reply_to_contact(contact_id: str, body: ContactReply, session: SessionDep, user: CurrentUserDep) -> dict:
    """Record a reply, mark the message replied and queue the outgoing e-mail."""
    contact = contact_service(session).update(
        contact_id,
        {"reply": body.reply_message, "replied_at": utcnow(), "status": "replied"},
    )
    try_enqueue(send_contact_reply_task, contact.email, contact.name, contact.subject, body.reply_message)
    logger.info(f"Contact {contact.id} replied by {user.username}")
    return {
        "success": True,
        "message": "Reply sent successfully",
        "data": {
            "contactEmail": contact.email,
            "contactName": contact.name,
            "subject": f"Re: {contact.subject}",
            "repliedAt": contact.replied_at,
        },
    }


@router.delete("/{contact_id}", dependencies=admins)
def delete_contact(contact_id: str, session: SessionDep) -> dict:
    contact_service(session).delete(contact_id)
    return {"success": True, "message": "Contact message deleted successfully"}
