"""
News articles. The public feed shows published articles only.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from clubhub.api.deps import ADMINS, STAFF, CurrentUserDep, SessionDep, get_current_user, require_role
from clubhub.models.event import NewsArticle
from clubhub.schemas.content import NewsCreate, NewsResponse, NewsUpdate
from clubhub.services.collection_service import CollectionService

router = APIRouter(prefix="/news", tags=["news"])

staff = [Depends(get_current_user), Depends(require_role(*STAFF))]
admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]


def news_service(session: Session) -> CollectionService[NewsArticle]:
    return CollectionService(
        session,
        NewsArticle,
        "news article",
        search_fields=("title", "content"),
        required_fields=("title", "content"),
    )


def _list(session: Session, filters: dict, search, limit, offset) -> dict:
    articles, total = news_service(session).list(
        filters=filters,
        search=search,
        order_by=[NewsArticle.publish_date.desc()],
        limit=limit,
        offset=offset,
    )
    return {"success": True, "count": total, "data": [NewsResponse.model_validate(a) for a in articles]}


@router.get("")
def list_news(
    session: SessionDep,
    category: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    return _list(session, {"status": "published", "category": category}, search, limit, offset)


@router.get("/admin", dependencies=staff)
def list_all_news(
    session: SessionDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    return _list(session, {"status": status_filter, "category": category}, search, limit, offset)


@router.get("/{article_id}")
def get_news(article_id: str, session: SessionDep) -> dict:
    article = news_service(session).get_or_404(article_id)
    return {"success": True, "data": NewsResponse.model_validate(article)}


@router.post("", dependencies=staff, status_code=status.HTTP_201_CREATED)
def create_news(body: NewsCreate, session: SessionDep, user: CurrentUserDep) -> dict:
    data = body.model_dump(exclude_none=True)
    article = news_service(session).create({**data, "created_by": user.id})
    return {
        "success": True,
        "message": "News article created successfully",
        "id": article.id,
        "data": NewsResponse.model_validate(article),
    }


@router.put("/{article_id}", dependencies=staff)
def update_news(article_id: str, body: NewsUpdate, session: SessionDep) -> dict:
    article = news_service(session).update(article_id, body.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "News article updated successfully",
        "data": NewsResponse.model_validate(article),
    }


@router.delete("/{article_id}", dependencies=admins)
def delete_news(article_id: str, session: SessionDep) -> dict:
    news_service(session).delete(article_id)
    return {"success": True, "message": "News article deleted successfully"}
