"""
Schemas for collections that own an uploaded file.

Creation goes through multipart forms (see the routes); these schemas cover
JSON updates and responses.
"""

from datetime import datetime
from typing import Literal, Optional

from clubhub.schemas.common import APIModel, RequiredStr, UTCDatetime

ActiveStatus = Literal["active", "inactive"]
ReportStatus = Literal["draft", "published", "archived"]
ReportVisibility = Literal["public", "members", "admin_only"]


class GalleryUpdate(APIModel):
    title: Optional[RequiredStr] = None
    description: Optional[str] = None
    category: Optional[str] = None
    event_date: Optional[UTCDatetime] = None
    status: Optional[ActiveStatus] = None


class GalleryResponse(APIModel):
    id: str
    title: str
    description: Optional[str] = None
    category: str
    media_type: str
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    media_url: Optional[str] = None
    event_date: Optional[datetime] = None
    status: str
    download_count: int
    created_at: datetime
    updated_at: datetime


class LeadershipResponse(APIModel):
    id: str
    name: str
    position: str
    sector: str
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    display_order: Optional[int] = None
    status: str
    created_at: datetime
    updated_at: datetime


class ResourceUpdate(APIModel):
    title: Optional[RequiredStr] = None
    description: Optional[str] = None
    category: Optional[str] = None
    url: Optional[str] = None
    featured: Optional[bool] = None
    pinned: Optional[bool] = None
    status: Optional[ActiveStatus] = None


class ResourceResponse(APIModel):
    id: str
    title: str
    description: Optional[str] = None
    category: str
    type: str
    url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    featured: bool
    pinned: bool
    status: str
    download_count: int
    created_at: datetime
    updated_at: datetime


class ReportUpdate(APIModel):
    title: Optional[RequiredStr] = None
    description: Optional[str] = None
    type: Optional[RequiredStr] = None
    period: Optional[str] = None
    academic_year: Optional[str] = None
    status: Optional[ReportStatus] = None
    visibility: Optional[ReportVisibility] = None


class ReportResponse(APIModel):
    id: str
    title: str
    description: Optional[str] = None
    type: str
    period: Optional[str] = None
    academic_year: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    status: str
    visibility: str
    download_count: int
    created_at: datetime
    updated_at: datetime
