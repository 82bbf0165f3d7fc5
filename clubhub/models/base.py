"""
Shared helpers for table models: identifiers and timestamps.
"""

import re
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    """Opaque 32-character hex identifier assigned at creation."""
    return uuid4().hex


def is_valid_id(value: object) -> bool:
    """True if ``value`` has the shape of an identifier produced by ``new_id``."""
    return isinstance(value, str) and bool(_ID_PATTERN.match(value))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Timezone-aware UTC copy of ``value``.

    Naive values are taken to be UTC already; some backends return stored
    timestamps without tzinfo.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
