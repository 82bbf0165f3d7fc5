"""
Events and news articles.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from clubhub.models.base import new_id, utcnow


class Event(SQLModel, table=True):
    __tablename__ = "events"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    title: str = Field(max_length=255)
    description: str
    category: str = Field(index=True, max_length=100)
    event_date: datetime = Field(index=True)
    location: str = Field(max_length=255)
    status: str = Field(default="upcoming", index=True, max_length=20)
    organizer: str = Field(max_length=255)
    max_participants: Optional[int] = None
    created_by: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class NewsArticle(SQLModel, table=True):
    __tablename__ = "news"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    title: str = Field(max_length=255)
    content: str
    category: str = Field(default="General", index=True, max_length=100)
    status: str = Field(default="published", index=True, max_length=20)
    publish_date: datetime = Field(default_factory=utcnow, index=True)
    created_by: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
