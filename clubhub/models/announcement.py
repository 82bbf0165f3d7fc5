"""
Announcements and the user-generated content attached to them.

Comments and likes store the author's name and email as a snapshot taken at
write time. Later profile edits do not change historical rows.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from clubhub.models.base import new_id, utcnow


class Announcement(SQLModel, table=True):
    """
    Announcement shown on the public site.

    ``priority`` is kept as a plain string so rows carrying an unrecognised
    value still load; such rows rank as ``normal``.
    """

    __tablename__ = "announcements"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    title: str = Field(max_length=255)
    content: str
    visibility: str = Field(default="public", index=True, max_length=20)
    priority: Optional[str] = Field(default="normal", max_length=20)
    status: str = Field(default="published", index=True, max_length=20)
    publish_date: datetime = Field(default_factory=utcnow)
    expiry_date: Optional[datetime] = None
    created_by: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AnnouncementComment(SQLModel, table=True):
    __tablename__ = "announcement_comments"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    announcement_id: str = Field(foreign_key="announcements.id", index=True, max_length=32)
    user_id: Optional[str] = Field(default=None, index=True, max_length=32)
    user_name: str = Field(max_length=255)
    user_email: str = Field(max_length=255)
    comment_text: str
    status: str = Field(default="approved", index=True, max_length=20)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AnnouncementLike(SQLModel, table=True):
    __tablename__ = "announcement_likes"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    announcement_id: str = Field(foreign_key="announcements.id", index=True, max_length=32)
    user_id: Optional[str] = Field(default=None, index=True, max_length=32)
    user_email: str = Field(index=True, max_length=255)
    user_name: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utcnow)
