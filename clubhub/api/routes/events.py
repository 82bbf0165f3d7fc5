"""
Club events. Reading is public; staff create and edit, admins delete.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from clubhub.api.deps import ADMINS, STAFF, CurrentUserDep, SessionDep, get_current_user, require_role
from clubhub.models.base import utcnow
from clubhub.models.event import Event
from clubhub.schemas.content import EventCreate, EventResponse, EventUpdate
from clubhub.services.collection_service import CollectionService

router = APIRouter(prefix="/events", tags=["events"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]


def event_service(session: Session) -> CollectionService[Event]:
    return CollectionService(
        session,
        Event,
        "event",
        search_fields=("title", "description", "location", "organizer"),
        required_fields=("title", "description", "category", "event_date", "location", "organizer"),
    )


@router.get("")
def list_events(
    session: SessionDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    events, total = event_service(session).list(
        filters={"status": status_filter, "category": category},
        search=search,
        order_by=[Event.event_date.desc()],
        limit=limit,
        offset=offset,
    )
    return {"success": True, "count": total, "data": [EventResponse.model_validate(e) for e in events]}


@router.get("/upcoming")
def upcoming_events(session: SessionDep, limit: int = Query(10, ge=1, le=100)) -> dict:
    """Upcoming events that have not started yet, soonest first."""
    events, _ = event_service(session).list(
        filters={"status": "upcoming"},
        conditions=[Event.event_date >= utcnow()],
        order_by=[Event.event_date.asc()],
        limit=limit,
    )
    return {"success": True, "count": len(events), "data": [EventResponse.model_validate(e) for e in events]}


@router.get("/{event_id}")
def get_event(event_id: str, session: SessionDep) -> dict:
    event = event_service(session).get_or_404(event_id)
    return {"success": True, "data": EventResponse.model_validate(event)}


@router.post("", dependencies=staff, status_code=status.HTTP_201_CREATED)
def create_event(body: EventCreate, session: SessionDep, user: CurrentUserDep) -> dict:
    event = event_service(session).create({**body.model_dump(), "created_by": user.id})
    return {
        "success": True,
        "message": "Event created successfully",
        "id": event.id,
        "data": EventResponse.model_validate(event),
    }


@router.put("/{event_id}", dependencies=staff)
def update_event(event_id: str, body: EventUpdate, session: SessionDep) -> dict:
    event = event_service(session).update(event_id, body.model_dump(exclude_unset=True))
    return {"success": True, "message": "Event updated successfully", "data": EventResponse.model_validate(event)}


@router.delete("/{event_id}", dependencies=admins)
def delete_event(event_id: str, session: SessionDep) -> dict:
    event_service(session).delete(event_id)
    return {"success": True, "message": "Event deleted successfully"}
