"""
Aggregate statistics for the admin dashboard and per-collection stats pages.

Each figure is an independent count/sum query. A failing query is logged and
reported as 0 so one broken table does not hide the rest of the summary.
"""

from datetime import timedelta
from typing import Any, Callable, Dict, List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from clubhub.core.logging import get_logger
from clubhub.models.base import as_utc, utcnow
from clubhub.models.contact import ContactMessage
from clubhub.models.event import Event
from clubhub.models.media import GalleryItem, LeadershipProfile, Report, Resource
from clubhub.models.member import Member

logger = get_logger(__name__)

RECENT_PER_SOURCE = 3
RECENT_LIMIT = 10
NEW_MEMBER_WINDOW = timedelta(days=30)


def run_queries(session: Session, queries: Dict[str, Callable[[], Any]]) -> Dict[str, int]:
    """
    Evaluate each named scalar query, substituting 0 on failure.

    Queries run one after another on the request's session rather than
    fanning out concurrently; a ``Session`` is not safe to share across
    threads and the counts are cheap.

    Args:
        session: Database session
        queries: Name to zero-argument callable returning a select statement

    Returns:
        Name to integer result
    """
    results: Dict[str, int] = {}
    for name, build in queries.items():
        try:
            value = session.exec(build()).one()
            results[name] = int(value or 0)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error in {name} query: {e}")
            results[name] = 0
    return results


def _count(model, *conditions):
    def build():
        query = select(func.count()).select_from(model)
        for condition in conditions:
            query = query.where(condition)
        return query

    return build


def _sum(column, *conditions):
    def build():
        query = select(func.coalesce(func.sum(column), 0))
        for condition in conditions:
            query = query.where(condition)
        return query

    return build


def dashboard_stats(session: Session) -> Dict[str, int]:
    now = utcnow()
    return run_queries(
        session,
        {
            "totalMembers": _count(Member, Member.status == "active"),
            "newMembers": _count(Member, Member.status == "active", Member.joined_at >= now - NEW_MEMBER_WINDOW),
            "totalEvents": _count(Event),
            "upcomingEvents": _count(Event, Event.status == "upcoming", Event.event_date >= now),
            "completedEvents": _count(Event, Event.status == "completed"),
            "newContacts": _count(ContactMessage, ContactMessage.status == "new"),
            "totalContacts": _count(ContactMessage),
            "totalLeadership": _count(LeadershipProfile, LeadershipProfile.status == "active"),
            "totalGallery": _count(GalleryItem, GalleryItem.status == "active"),
            "totalResources": _count(Resource, Resource.status == "active"),
            "resourceDownloads": _sum(Resource.download_count, Resource.status == "active"),
        },
    )


def recent_activities(session: Session) -> List[Dict[str, Any]]:
    """Latest members, contacts and events merged newest first."""
    try:
        members = session.exec(select(Member).order_by(Member.joined_at.desc()).limit(RECENT_PER_SOURCE))
        contacts = session.exec(
            select(ContactMessage).order_by(ContactMessage.submitted_at.desc()).limit(RECENT_PER_SOURCE)
        )
        events = session.exec(select(Event).order_by(Event.created_at.desc()).limit(RECENT_PER_SOURCE))
        activities = (
            [{"type": "member", "title": m.full_name, "date": m.joined_at} for m in members]
            + [{"type": "contact", "title": f"{c.name} - {c.subject}", "date": c.submitted_at} for c in contacts]
            + [{"type": "event", "title": e.title, "date": e.created_at} for e in events]
        )
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error fetching recent activities: {e}")
        return []
    activities.sort(key=lambda item: as_utc(item["date"]), reverse=True)
    return activities[:RECENT_LIMIT]


def gallery_stats(session: Session) -> Dict[str, int]:
    return run_queries(
        session,
        {
            "total": _count(GalleryItem),
            "active": _count(GalleryItem, GalleryItem.status == "active"),
            "images": _count(GalleryItem, GalleryItem.media_type == "image"),
            "videos": _count(GalleryItem, GalleryItem.media_type == "video"),
            "totalDownloads": _sum(GalleryItem.download_count),
        },
    )


def resource_stats(session: Session) -> Dict[str, int]:
    return run_queries(
        session,
        {
            "total": _count(Resource),
            "active": _count(Resource, Resource.status == "active"),
            "files": _count(Resource, Resource.type == "file"),
            "links": _count(Resource, Resource.type == "link"),
            "featured": _count(Resource, Resource.featured == True),  # noqa: E712
            "totalDownloads": _sum(Resource.download_count),
        },
    )


def report_stats(session: Session) -> Dict[str, int]:
    return run_queries(
        session,
        {
            "total": _count(Report),
            "published": _count(Report, Report.status == "published"),
            "draft": _count(Report, Report.status == "draft"),
            "archived": _count(Report, Report.status == "archived"),
            "public": _count(Report, Report.visibility == "public"),
            "totalDownloads": _sum(Report.download_count),
        },
    )
