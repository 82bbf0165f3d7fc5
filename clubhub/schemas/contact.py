"""
Contact form schemas.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr

from clubhub.schemas.common import APIModel, RequiredStr

ContactStatus = Literal["new", "read", "replied", "archived"]


class ContactCreate(APIModel):
    name: RequiredStr
    email: EmailStr
    subject: RequiredStr
    message: RequiredStr


class ContactStatusUpdate(APIModel):
    status: ContactStatus


class ContactReply(APIModel):
    reply_message: RequiredStr


class ContactResponse(APIModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: str
    reply: Optional[str] = None
    replied_at: Optional[datetime] = None
    submitted_at: datetime
    updated_at: datetime
