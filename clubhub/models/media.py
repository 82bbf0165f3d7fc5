"""
Collections that own an uploaded file: gallery media, leadership photos,
downloadable resources and reports.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from clubhub.models.base import new_id, utcnow


class GalleryItem(SQLModel, table=True):
    __tablename__ = "gallery"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    category: str = Field(default="General", index=True, max_length=100)
    media_type: str = Field(default="image", max_length=20)  # image | video
    file_path: Optional[str] = Field(default=None, max_length=500)
    file_name: Optional[str] = Field(default=None, max_length=255)
    file_size: Optional[int] = None
    mime_type: Optional[str] = Field(default=None, max_length=100)
    event_date: Optional[datetime] = None
    status: str = Field(default="active", index=True, max_length=20)
    download_count: int = Field(default=0)
    uploaded_by: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class LeadershipProfile(SQLModel, table=True):
    __tablename__ = "leadership"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(max_length=100)
    position: str = Field(max_length=100)
    sector: str = Field(default="Leadership Team", index=True, max_length=100)
    photo_path: Optional[str] = Field(default=None, max_length=500)
    bio: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    display_order: Optional[int] = Field(default=None, index=True)
    status: str = Field(default="active", index=True, max_length=20)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Resource(SQLModel, table=True):
    __tablename__ = "resources"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    category: str = Field(default="General", index=True, max_length=100)
    type: str = Field(default="file", max_length=20)  # file | link
    url: Optional[str] = Field(default=None, max_length=1000)
    file_path: Optional[str] = Field(default=None, max_length=500)
    file_name: Optional[str] = Field(default=None, max_length=255)
    file_size: Optional[int] = None
    mime_type: Optional[str] = Field(default=None, max_length=100)
    featured: bool = Field(default=False)
    pinned: bool = Field(default=False)
    status: str = Field(default="active", index=True, max_length=20)
    download_count: int = Field(default=0)
    uploaded_by: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Report(SQLModel, table=True):
    __tablename__ = "reports"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    type: str = Field(index=True, max_length=100)
    period: Optional[str] = Field(default=None, max_length=100)
    academic_year: Optional[str] = Field(default=None, max_length=20)
    file_path: Optional[str] = Field(default=None, max_length=500)
    file_name: Optional[str] = Field(default=None, max_length=255)
    file_size: Optional[int] = None
    file_type: Optional[str] = Field(default=None, max_length=100)
    status: str = Field(default="published", index=True, max_length=20)
    visibility: str = Field(default="admin_only", index=True, max_length=20)
    download_count: int = Field(default=0)
    uploaded_by: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
