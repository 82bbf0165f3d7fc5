"""
Club member roster.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from clubhub.models.base import new_id, utcnow


class Member(SQLModel, table=True):
    """A registered club member. Email is unique at the storage layer."""

    __tablename__ = "members"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    full_name: str = Field(max_length=100)
    email: str = Field(unique=True, index=True, max_length=150)
    student_id: Optional[str] = Field(default=None, max_length=50)
    department: Optional[str] = Field(default=None, index=True, max_length=100)
    year: Optional[str] = Field(default=None, max_length=20)
    phone: Optional[str] = Field(default=None, max_length=20)
    interests: Optional[str] = None
    status: str = Field(default="active", index=True, max_length=20)
    joined_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
