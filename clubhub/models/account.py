"""
Administrative account model with role-based access control.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from clubhub.models.base import new_id, utcnow


class AccountRole(str, Enum):
    """Closed set of roles; each role gates a set of route allow-lists."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    EDITOR = "editor"


class AccountStatus(str, Enum):
    """Only ``active`` accounts may log in or act on a request."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class Account(SQLModel, table=True):
    """
    Administrative account with hashed credentials.

    Attributes:
        id: Opaque identifier, immutable
        username: Unique login name
        email: Unique address, also accepted at login
        hashed_password: Salted one-way hash, never the plaintext
        first_name: Given name
        last_name: Family name
        role: One of ``AccountRole``
        status: One of ``AccountStatus``
        last_login: Set on each successful login; absent until the first
        reset_token: Present only during a password-reset window
        reset_token_expiry: Expiry of ``reset_token``
        created_at: Timestamp of account creation
        updated_at: Timestamp of last update
    """

    __tablename__ = "accounts"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    username: str = Field(unique=True, index=True, max_length=50)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    role: AccountRole = Field(default=AccountRole.EDITOR)
    status: AccountStatus = Field(default=AccountStatus.ACTIVE, index=True)
    last_login: Optional[datetime] = None
    reset_token: Optional[str] = Field(default=None, index=True, max_length=64)
    reset_token_expiry: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def display_name(self) -> str:
        """Full name when both parts are set, otherwise the username."""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.username
