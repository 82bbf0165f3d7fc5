"""
Base schema shared by request and response models.

Wire field names are camelCase; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from clubhub.models.base import as_utc

# Required text: surrounding whitespace is stripped and the result must be non-empty.
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Passwords are taken verbatim; only emptiness is rejected.
PasswordStr = Annotated[str, StringConstraints(min_length=1)]

# Client timestamps without an offset are read as UTC.
UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]


class APIModel(BaseModel):
    """Base for every request/response schema."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
