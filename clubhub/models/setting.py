"""
System settings and feature flags.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from clubhub.models.base import new_id, utcnow


class SystemSetting(SQLModel, table=True):
    """
    A single key/value setting. ``value`` is stored as text and parsed
    according to ``value_type`` (string, number, boolean, json) on read.
    """

    __tablename__ = "system_settings"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    key: str = Field(unique=True, index=True, max_length=100)
    value: Optional[str] = None
    value_type: str = Field(default="string", max_length=20)
    category: str = Field(default="general", index=True, max_length=50)
    description: Optional[str] = None
    is_public: bool = Field(default=False)
    updated_by: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class FeatureFlag(SQLModel, table=True):
    __tablename__ = "feature_flags"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    key: str = Field(unique=True, index=True, max_length=100)
    name: str = Field(max_length=255)
    description: Optional[str] = None
    category: str = Field(default="general", index=True, max_length=50)
    is_enabled: bool = Field(default=False)
    updated_by: Optional[str] = Field(default=None, max_length=32)
    updated_at: datetime = Field(default_factory=utcnow)
