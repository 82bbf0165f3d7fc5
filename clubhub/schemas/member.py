"""
Member schemas.

Registration accepts the canonical camelCase body. The snake_case spellings
``full_name`` and ``student_id`` are still accepted for older clients but are
deprecated and logged when used.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import AliasChoices, EmailStr, Field, field_validator, model_validator

from clubhub.core.logging import get_logger
from clubhub.schemas.common import APIModel, RequiredStr

logger = get_logger(__name__)

DEPRECATED_MEMBER_FIELDS = ("full_name", "student_id")


class MemberCreate(APIModel):
    full_name: RequiredStr = Field(validation_alias=AliasChoices("fullName", "full_name"))
    email: EmailStr
    student_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("studentId", "student_id"))
    department: Optional[str] = None
    year: Optional[str] = None
    phone: Optional[str] = None
    interests: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def warn_on_legacy_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            legacy = [name for name in DEPRECATED_MEMBER_FIELDS if name in data]
            if legacy:
                logger.warning(f"Deprecated snake_case member fields used: {', '.join(legacy)}")
        return data

    @field_validator("year", mode="before")
    @classmethod
    def coerce_year(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v


class MemberUpdate(APIModel):
    full_name: Optional[RequiredStr] = None
    email: Optional[EmailStr] = None
    student_id: Optional[str] = None
    department: Optional[str] = None
    year: Optional[str] = None
    phone: Optional[str] = None
    interests: Optional[str] = None
    status: Optional[Literal["active", "inactive"]] = None

    @field_validator("year", mode="before")
    @classmethod
    def coerce_year(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v


class MemberResponse(APIModel):
    id: str
    full_name: str
    email: str
    student_id: Optional[str] = None
    department: Optional[str] = None
    year: Optional[str] = None
    phone: Optional[str] = None
    interests: Optional[str] = None
    status: str
    joined_at: datetime
    updated_at: datetime
