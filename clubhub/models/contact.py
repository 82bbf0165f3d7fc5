"""
Messages submitted through the public contact form.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from clubhub.models.base import new_id, utcnow


class ContactMessage(SQLModel, table=True):
    __tablename__ = "contacts"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(max_length=100)
    email: str = Field(max_length=255)
    subject: str = Field(max_length=255)
    message: str
    status: str = Field(default="new", index=True, max_length=20)
    reply: Optional[str] = None
    replied_at: Optional[datetime] = None
    submitted_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
