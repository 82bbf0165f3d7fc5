"""
System setting and feature flag schemas.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import Field

from clubhub.schemas.common import APIModel, RequiredStr

SettingType = Literal["string", "number", "boolean", "json"]


class SettingCreate(APIModel):
    key: RequiredStr = Field(pattern=r"^[A-Za-z0-9_.-]+$")
    value: Any = None
    value_type: SettingType = "string"
    category: str = "general"
    description: Optional[str] = None
    is_public: bool = False


class SettingValueUpdate(APIModel):
    value: Any = None


class SettingResponse(APIModel):
    id: str
    key: str
    value: Optional[str] = None
    value_type: str
    parsed_value: Any = None
    category: str
    description: Optional[str] = None
    is_public: bool
    updated_at: datetime


class FeatureFlagUpdate(APIModel):
    is_enabled: bool


class FeatureFlagResponse(APIModel):
    id: str
    key: str
    name: str
    description: Optional[str] = None
    category: str
    is_enabled: bool
    updated_at: datetime
