"""
Schemas for editorial content: events, news, announcements and the
comments/likes readers attach to announcements.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr

from clubhub.schemas.common import APIModel, RequiredStr, UTCDatetime

EventStatus = Literal["upcoming", "ongoing", "completed", "cancelled"]
NewsStatus = Literal["published", "draft"]
AnnouncementStatus = Literal["draft", "published", "archived"]
AnnouncementPriority = Literal["urgent", "high", "normal", "low"]
AnnouncementVisibility = Literal["public", "members"]


# Events

class EventCreate(APIModel):
    title: RequiredStr
    description: RequiredStr
    category: RequiredStr
    event_date: UTCDatetime
    location: RequiredStr
    organizer: RequiredStr
    status: EventStatus = "upcoming"
    max_participants: Optional[int] = None


class EventUpdate(APIModel):
    title: Optional[RequiredStr] = None
    description: Optional[RequiredStr] = None
    category: Optional[RequiredStr] = None
    event_date: Optional[UTCDatetime] = None
    location: Optional[RequiredStr] = None
    organizer: Optional[RequiredStr] = None
    status: Optional[EventStatus] = None
    max_participants: Optional[int] = None


class EventResponse(APIModel):
    id: str
    title: str
    description: str
    category: str
    event_date: datetime
    location: str
    status: str
    organizer: str
    max_participants: Optional[int] = None
    created_at: datetime
    updated_at: datetime


# News

class NewsCreate(APIModel):
    title: RequiredStr
    content: RequiredStr
    category: str = "General"
    status: NewsStatus = "published"
    publish_date: Optional[UTCDatetime] = None


class NewsUpdate(APIModel):
    title: Optional[RequiredStr] = None
    content: Optional[RequiredStr] = None
    category: Optional[RequiredStr] = None
    status: Optional[NewsStatus] = None
    publish_date: Optional[UTCDatetime] = None


class NewsResponse(APIModel):
    id: str
    title: str
    content: str
    category: str
    status: str
    publish_date: datetime
    created_at: datetime
    updated_at: datetime


# Announcements

class AnnouncementCreate(APIModel):
    title: RequiredStr
    content: RequiredStr
    visibility: AnnouncementVisibility = "public"
    priority: AnnouncementPriority = "normal"
    status: AnnouncementStatus = "published"
    publish_date: Optional[UTCDatetime] = None
    expiry_date: Optional[UTCDatetime] = None


class AnnouncementUpdate(APIModel):
    title: Optional[RequiredStr] = None
    content: Optional[RequiredStr] = None
    visibility: Optional[AnnouncementVisibility] = None
    priority: Optional[AnnouncementPriority] = None
    status: Optional[AnnouncementStatus] = None
    publish_date: Optional[UTCDatetime] = None
    expiry_date: Optional[UTCDatetime] = None


class AnnouncementResponse(APIModel):
    id: str
    title: str
    content: str
    visibility: str
    priority: Optional[str] = None
    status: str
    publish_date: datetime
    expiry_date: Optional[datetime] = None
    created_by: Optional[str] = None
    created_by_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Comments and likes

class CommentCreate(APIModel):
    """
    Authenticated callers are identified by their token. Guests must supply
    ``userName`` and ``userEmail``; their comments wait for moderation.
    """

    announcement_id: RequiredStr
    comment_text: RequiredStr
    user_name: Optional[str] = None
    user_email: Optional[EmailStr] = None


class CommentUpdate(APIModel):
    comment_text: RequiredStr


class CommentResponse(APIModel):
    id: str
    announcement_id: str
    user_id: Optional[str] = None
    user_name: str
    user_email: str
    comment_text: str
    status: str
    created_at: datetime
    updated_at: datetime


class LikeToggle(APIModel):
    announcement_id: RequiredStr
    user_email: Optional[EmailStr] = None
    user_name: Optional[str] = None


class LikeResponse(APIModel):
    id: str
    user_name: str
    user_email: str
    created_at: datetime
